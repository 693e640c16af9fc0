# core/conf.py
from django.conf import settings

DEFAULTS = {
    'SETTLEMENT_DELAYS': {
        'baemin': 3,
        'yogiyo': 7,
        'coupang': 5,
        'hall': 0,
        'manual': 0,
        'excel': 0,
    },
    'CALENDAR_LOOKBACK_DAY': 20,
    'FIXED_COST_DAYS_PER_MONTH': 30,
    'DEFAULT_COST_RATIO': 0.35,
    'DANGER_MARGIN_PERCENT': 30,
    'TREND_DEAD_ZONE_PERCENT': 5,
    'FIXED_COST_ALERT_DAYS': 3,
    'INVITE_CODE_TTL_HOURS': 24,
}


def get_setting(name):
    """Read a value from settings.SALES_KEEPER, falling back to DEFAULTS"""
    overrides = getattr(settings, 'SALES_KEEPER', {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
