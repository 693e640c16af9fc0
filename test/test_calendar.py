from datetime import date

from django.test import TestCase

from dashboard.business_logic import CalendarAggregator
from expenses.models import ExpenseRecord
from sales.models import SaleRecord
from stores.scope import Scope
from factories import make_user, make_store


class CalendarAggregateTest(TestCase):
    """Bucketing rules, without the database"""

    def test_same_day_sales_are_summed(self):
        sales = [(date(2024, 3, 5), 10000, 'manual'), (date(2024, 3, 5), 5000, 'hall')]
        result = CalendarAggregator.aggregate(sales, [], 2024, 3)
        self.assertEqual(result, {'2024-03-05': {'sales': 15000, 'expense': 0}})

    def test_days_without_activity_are_absent(self):
        result = CalendarAggregator.aggregate(
            [(date(2024, 3, 5), 10000, 'manual')], [], 2024, 3)
        self.assertNotIn('2024-03-06', result)

    def test_sales_mode_drops_previous_month_records(self):
        sales = [(date(2024, 2, 25), 7000, 'baemin'), (date(2024, 3, 1), 3000, 'manual')]
        result = CalendarAggregator.aggregate(sales, [], 2024, 3, 'sales')
        self.assertEqual(list(result), ['2024-03-01'])

    def test_cashflow_mode_moves_sales_to_payout_day(self):
        sales = [(date(2024, 2, 27), 7000, 'baemin'), (date(2024, 3, 10), 4000, 'hall')]
        result = CalendarAggregator.aggregate(sales, [], 2024, 3, 'cashflow')
        self.assertEqual(result['2024-03-01']['sales'], 7000)
        self.assertEqual(result['2024-03-10']['sales'], 4000)

    def test_cashflow_keeps_dates_past_month_end(self):
        sales = [(date(2024, 3, 29), 9000, 'yogiyo')]
        result = CalendarAggregator.aggregate(sales, [], 2024, 3, 'cashflow')
        self.assertEqual(result, {'2024-04-05': {'sales': 9000, 'expense': 0}})

    def test_expenses_are_never_shifted(self):
        expenses = [(date(2024, 3, 5), 2000)]
        result = CalendarAggregator.aggregate([], expenses, 2024, 3, 'cashflow')
        self.assertEqual(result, {'2024-03-05': {'sales': 0, 'expense': 2000}})

    def test_window_starts_on_20th_of_previous_month(self):
        self.assertEqual(CalendarAggregator.get_window(2024, 3),
                         (date(2024, 2, 20), date(2024, 3, 31)))
        self.assertEqual(CalendarAggregator.get_window(2024, 1),
                         (date(2023, 12, 20), date(2024, 1, 31)))


class MonthlyAggregateQueryTest(TestCase):

    def setUp(self):
        self.owner = make_user('owner')
        self.store = make_store(self.owner, 'Gangnam')
        self.other = make_store(self.owner, 'Hongdae')

        SaleRecord.objects.create(store=self.store, date=date(2024, 3, 5), amount=10000, type='manual')
        SaleRecord.objects.create(store=self.other, date=date(2024, 3, 5), amount=5000, type='manual')
        SaleRecord.objects.create(store=self.store, date=date(2024, 2, 28), amount=8000, type='baemin')
        SaleRecord.objects.create(store=self.store, date=date(2024, 2, 10), amount=99000, type='manual')
        ExpenseRecord.objects.create(store=self.store, date=date(2024, 3, 5), amount=3000,
                                     merchant_name='Mart')

    def test_single_store_scope(self):
        result = CalendarAggregator.get_monthly_aggregate(
            2024, 3, Scope.store(self.store.id), 'sales')
        self.assertEqual(result, {'2024-03-05': {'sales': 10000, 'expense': 3000}})

    def test_all_scope_adds_every_member_store(self):
        scope = Scope.all([self.store.id, self.other.id])
        result = CalendarAggregator.get_monthly_aggregate(2024, 3, scope, 'sales')
        self.assertEqual(result['2024-03-05']['sales'], 15000)

    def test_cashflow_picks_up_late_previous_month_settlement(self):
        result = CalendarAggregator.get_monthly_aggregate(
            2024, 3, Scope.store(self.store.id), 'cashflow')
        # 2024-02-28 + 3 days
        self.assertEqual(result['2024-03-02']['sales'], 8000)
        self.assertNotIn('2024-02-10', result)
