from datetime import date

from django.test import SimpleTestCase, override_settings

from sales.settlement import shift, get_delay, SALES_MODE, CASHFLOW_MODE


class SettlementShiftTest(SimpleTestCase):
    day = date(2024, 3, 15)

    def test_sales_mode_never_moves_a_date(self):
        for channel in ['manual', 'excel', 'hall', 'baemin', 'yogiyo', 'coupang', 'unknown']:
            self.assertEqual(shift(self.day, channel, SALES_MODE), self.day)

    def test_cashflow_applies_platform_delay(self):
        self.assertEqual(shift(self.day, 'baemin', CASHFLOW_MODE), date(2024, 3, 18))
        self.assertEqual(shift(self.day, 'yogiyo', CASHFLOW_MODE), date(2024, 3, 22))
        self.assertEqual(shift(self.day, 'coupang', CASHFLOW_MODE), date(2024, 3, 20))
        self.assertEqual(shift(self.day, 'hall', CASHFLOW_MODE), self.day)

    def test_unknown_channel_settles_same_day(self):
        self.assertEqual(get_delay('street-stall'), 0)
        self.assertEqual(shift(self.day, 'street-stall', CASHFLOW_MODE), self.day)

    def test_cashflow_crosses_month_end(self):
        self.assertEqual(shift(date(2024, 1, 30), 'yogiyo', CASHFLOW_MODE), date(2024, 2, 6))

    @override_settings(SALES_KEEPER={'SETTLEMENT_DELAYS': {'baemin': 1}})
    def test_delays_come_from_settings(self):
        self.assertEqual(shift(self.day, 'baemin', CASHFLOW_MODE), date(2024, 3, 16))
        self.assertEqual(shift(self.day, 'yogiyo', CASHFLOW_MODE), self.day)
