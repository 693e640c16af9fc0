# staff/business_logic.py
import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.exceptions import AlreadyClockedIn, NotClockedIn, SalesKeeperError
from core.utils import day_bounds

logger = logging.getLogger(__name__)


class AttendanceLogic:
    """
    Clock-in / clock-out. A member has at most one open log per store:
    the member row is locked while checking, and the partial unique
    constraint on WorkLog rejects anything that slips past.
    """

    @staticmethod
    def get_today_log(store, user, today=None):
        """Latest log started today for this member, open or not"""
        from .models import WorkLog

        start, end = day_bounds(today or timezone.localdate())
        return WorkLog.objects.filter(
            store=store, user=user,
            clock_in__gte=start, clock_in__lt=end
        ).order_by('-clock_in').first()

    @staticmethod
    def clock_in(store, user, wage=None, now=None):
        from stores.models import StoreMember
        from .models import WorkLog

        now = now or timezone.now()

        try:
            with transaction.atomic():
                try:
                    member = StoreMember.objects.select_for_update().get(
                        store=store, user=user)
                except StoreMember.DoesNotExist:
                    raise SalesKeeperError('Not a member of this store')

                if WorkLog.objects.filter(
                        store=store, user=user, clock_out__isnull=True).exists():
                    raise AlreadyClockedIn()

                log = WorkLog.objects.create(
                    store=store,
                    user=user,
                    clock_in=now,
                    wage_snapshot=member.hourly_wage if wage is None else wage,
                    status='working'
                )
        except IntegrityError:
            logger.warning(f"Concurrent clock-in rejected for {user.username} at store {store.id}")
            raise AlreadyClockedIn()

        logger.info(f"{user.username} clocked in at store {store.id} (wage {log.wage_snapshot})")
        return log

    @staticmethod
    def clock_out(store, user, log_id=None, now=None):
        """
        Close the member's open log (or the given one).
        Raises WorkLog.DoesNotExist for an unknown log id and NotClockedIn
        when there is nothing open to close.
        """
        from .models import WorkLog

        now = now or timezone.now()

        with transaction.atomic():
            logs = WorkLog.objects.select_for_update().filter(store=store)
            if log_id is not None:
                log = logs.get(pk=log_id)
            else:
                log = logs.filter(user=user, clock_out__isnull=True).first()

            if log is None or log.clock_out is not None:
                raise NotClockedIn()

            log.clock_out = now
            log.status = 'completed'
            log.save(update_fields=['clock_out', 'status'])

        logger.info(f"{log.user} clocked out at store {store.id} after {log.hours:.2f}h")
        return log

    @staticmethod
    def get_work_logs(store, limit=20):
        from .models import WorkLog

        return WorkLog.objects.filter(store=store).select_related(
            'user').order_by('-clock_in')[:limit]


class ScheduleLogic:

    @staticmethod
    def get_schedules(store, start, end):
        """Schedules fully inside [start, end]"""
        from .models import WorkSchedule

        return WorkSchedule.objects.filter(
            store=store, start_time__gte=start, end_time__lte=end
        ).select_related('user').order_by('start_time')

    @staticmethod
    def create_schedule(store, user, start_time, end_time, memo=''):
        from .models import WorkSchedule

        schedule = WorkSchedule.objects.create(
            store=store, user=user,
            start_time=start_time, end_time=end_time, memo=memo or '')
        logger.info(f"Schedule {schedule.id} created for {user.username} at store {store.id}")
        return schedule
