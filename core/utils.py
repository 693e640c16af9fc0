# core/utils.py
import calendar
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.utils import timezone


def won(value):
    """Round a numeric amount to whole won, halves away from zero"""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def date_key(value):
    """
    Format a date or datetime as YYYY-MM-DD in the local (KST) time zone.
    Aware datetimes are converted first so late-evening UTC timestamps land
    on the right calendar day.
    """
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        value = value.date()
    return value.isoformat()


def parse_date(value, default=None):
    """Parse YYYY-MM-DD (or return a date as is); None/blank gives default"""
    if not value:
        return default
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()


def month_bounds(year, month):
    """First and last calendar day of a month"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def previous_month(year, month):
    if month == 1:
        return year - 1, 12
    return year, month - 1


def week_bounds(day):
    """Sunday-to-Saturday week containing the given day"""
    # date.weekday(): Monday=0 ... Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def day_bounds(day):
    """Aware start/end datetimes of a local calendar day"""
    tz = timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(day, datetime.min.time()), tz)
    return start, start + timedelta(days=1)
