# staff/views.py
import logging
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import AlreadyClockedIn, NotClockedIn, SalesKeeperError
from core.utils import day_bounds, parse_date
from stores.permissions import (
    IsStoreMember, IsStoreOwnerOrManager, coerce_id, get_member_store, get_membership
)
from .business_logic import AttendanceLogic, ScheduleLogic
from .models import WorkSchedule, WorkLog
from .serializers import (
    WorkScheduleSerializer, WorkLogSerializer, ClockInSerializer, ClockOutSerializer
)

logger = logging.getLogger(__name__)
User = get_user_model()


def _target_user(request, store, user_id):
    """The acting user, or another member when the requester can manage"""
    if not user_id:
        return request.user
    user_id = coerce_id(user_id, 'user_id')
    if user_id == request.user.id:
        return request.user

    membership = get_membership(request.user, store.id)
    if not membership or not membership.can_manage:
        raise PermissionDenied('Only owners and managers can act for other staff')
    return get_object_or_404(User, pk=user_id, memberships__store=store)


# ============ Schedules ============

class ScheduleListCreateAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsStoreOwnerOrManager()]
        return super().get_permissions()

    def get(self, request):
        store = get_member_store(request.user, request.query_params.get('store_id'))

        try:
            start = parse_date(request.query_params.get('start_date'),
                               timezone.localdate())
            end = parse_date(request.query_params.get('end_date'),
                             start + timedelta(days=6))
        except ValueError:
            return Response({
                'success': False,
                'error': 'Dates must be YYYY-MM-DD'
            }, status=status.HTTP_400_BAD_REQUEST)

        schedules = ScheduleLogic.get_schedules(
            store, day_bounds(start)[0], day_bounds(end)[1])
        return Response({
            'success': True,
            'schedules': WorkScheduleSerializer(schedules, many=True).data
        })

    def post(self, request):
        serializer = WorkScheduleSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        schedule = ScheduleLogic.create_schedule(
            data['store'], data['user'], data['start_time'], data['end_time'],
            data.get('memo'))
        return Response(WorkScheduleSerializer(schedule).data,
                        status=status.HTTP_201_CREATED)


class ScheduleDetailAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreOwnerOrManager]

    def delete(self, request, pk):
        schedule = get_object_or_404(WorkSchedule, pk=pk)
        self.check_object_permissions(request, schedule)
        schedule.delete()
        return Response({'success': True})


# ============ Attendance ============

class TodayLogAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        store = get_member_store(request.user, request.query_params.get('store_id'))
        user = _target_user(request, store, request.query_params.get('user_id'))

        log = AttendanceLogic.get_today_log(store, user)
        return Response({
            'success': True,
            'working': bool(log and log.clock_out is None),
            'log': WorkLogSerializer(log).data if log else None
        })


class ClockInAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def post(self, request):
        serializer = ClockInSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        store = get_member_store(request.user, data['store_id'])
        user = _target_user(request, store, data.get('user_id'))

        try:
            log = AttendanceLogic.clock_in(store, user, wage=data.get('wage'))
        except AlreadyClockedIn as e:
            logger.info(f"Duplicate clock-in for {user.username} at store {store.id}")
            return Response({
                'success': False,
                'error': e.message
            }, status=status.HTTP_409_CONFLICT)
        except SalesKeeperError as e:
            return Response({
                'success': False,
                'error': e.message
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'success': True,
            'log': WorkLogSerializer(log).data
        }, status=status.HTTP_201_CREATED)


class ClockOutAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def post(self, request):
        serializer = ClockOutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        store = get_member_store(request.user, data['store_id'])
        log_id = data.get('log_id')

        if log_id is not None:
            log = get_object_or_404(WorkLog, pk=log_id, store=store)
            _target_user(request, store, log.user_id)

        try:
            log = AttendanceLogic.clock_out(store, request.user, log_id=log_id)
        except WorkLog.DoesNotExist:
            return Response({
                'success': False,
                'error': NotClockedIn.default_message
            }, status=status.HTTP_404_NOT_FOUND)
        except NotClockedIn as e:
            return Response({
                'success': False,
                'error': e.message
            }, status=status.HTTP_409_CONFLICT)

        return Response({
            'success': True,
            'log': WorkLogSerializer(log).data
        })


class WorkLogListAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        store = get_member_store(request.user, request.query_params.get('store_id'))
        try:
            limit = min(int(request.query_params.get('limit', 20)), 100)
        except ValueError:
            limit = 20

        logs = AttendanceLogic.get_work_logs(store, limit)
        return Response({
            'success': True,
            'logs': WorkLogSerializer(logs, many=True).data
        })
