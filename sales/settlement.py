# sales/settlement.py
"""
Settlement shifting: maps a sale date to the day its money actually arrives.

Delivery platforms pay out a fixed number of days after the transaction.
In 'sales' mode dates are left alone; in 'cashflow' mode each record is
moved forward by its channel's delay from SETTLEMENT_DELAYS.
"""
from datetime import timedelta

from core.conf import get_setting

SALES_MODE = 'sales'
CASHFLOW_MODE = 'cashflow'
MODES = (SALES_MODE, CASHFLOW_MODE)


def get_delay(channel):
    """Payout delay in days for a channel; unknown channels settle same day"""
    return get_setting('SETTLEMENT_DELAYS').get(channel, 0)


def shift(day, channel, mode=SALES_MODE):
    if mode != CASHFLOW_MODE:
        return day
    return day + timedelta(days=get_delay(channel))
