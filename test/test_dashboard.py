from datetime import date, timedelta
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from dashboard.business_logic import DashboardSummary, FinancialSnapshotCalculator, MonthlyReport
from expenses.models import ExpenseRecord, FixedCost
from sales.models import SaleRecord
from stores.scope import Scope
from factories import make_user, make_store, bearer

TODAY = date(2024, 5, 14)


class DashboardSummaryTest(TestCase):

    def setUp(self):
        self.owner = make_user('owner')
        self.first = make_store(self.owner, name='First')
        self.second = make_store(self.owner, name='Second')

    def test_today_and_trend(self):
        SaleRecord.objects.create(store=self.first, date=TODAY, amount=30000, type='hall')
        SaleRecord.objects.create(store=self.second, date=TODAY, amount=20000, type='baemin')
        SaleRecord.objects.create(store=self.first, date=TODAY - timedelta(days=2),
                                  amount=10000, type='manual')
        ExpenseRecord.objects.create(store=self.first, date=TODAY, amount=5000,
                                     merchant_name='마트')

        summary = DashboardSummary.get_summary(
            Scope.all([self.first.id, self.second.id]), today=TODAY)

        self.assertTrue(summary['success'])
        self.assertTrue(summary['is_aggregated'])
        self.assertEqual(summary['sales'], 50000)
        self.assertEqual(summary['net_income'], 45000)
        self.assertEqual(summary['breakdown'], {'hall': 30000, 'baemin': 20000})
        self.assertEqual(len(summary['weekly_trend']), 7)
        self.assertEqual(summary['weekly_trend'][-1]['label'], '화')
        self.assertEqual(summary['weekly_trend'][4]['amount'], 10000)

    def test_single_store_scope(self):
        SaleRecord.objects.create(store=self.first, date=TODAY, amount=30000, type='hall')
        SaleRecord.objects.create(store=self.second, date=TODAY, amount=20000, type='hall')

        summary = DashboardSummary.get_summary(Scope.store(self.second.id), today=TODAY)
        self.assertEqual(summary['sales'], 20000)
        self.assertFalse(summary['is_aggregated'])

    def test_failed_query_gives_zeroed_summary(self):
        with patch.object(SaleRecord.objects, 'filter', side_effect=RuntimeError('db down')):
            summary = DashboardSummary.get_summary(Scope.store(self.first.id), today=TODAY)

        self.assertFalse(summary['success'])
        self.assertEqual(summary['error'], 'db down')
        self.assertEqual(summary['sales'], 0)
        self.assertEqual(summary['net_income'], 0)
        self.assertEqual(summary['weekly_trend'], [])
        self.assertEqual(summary['date'], '2024-05-14')


class MonthlyReportTest(TestCase):

    def test_report(self):
        owner = make_user('owner')
        store = make_store(owner)
        SaleRecord.objects.create(store=store, date=date(2024, 2, 1), amount=100000, type='manual')
        SaleRecord.objects.create(store=store, date=date(2024, 2, 29), amount=50000, type='hall')
        SaleRecord.objects.create(store=store, date=date(2024, 3, 1), amount=70000, type='hall')
        ExpenseRecord.objects.create(store=store, date=date(2024, 2, 10), amount=20000,
                                     merchant_name='시장', category='식자재')
        FixedCost.objects.create(store=store, name='월세', amount=60000, day_of_month=1)

        report = MonthlyReport.build(2024, 2, Scope.store(store.id))

        self.assertEqual(report['total_sales'], 150000)
        self.assertEqual(report['total_expenses'], 20000)
        self.assertEqual(report['net_income'], 70000)
        self.assertEqual(report['expense_by_category'], {'식자재': 20000})
        self.assertEqual(len(report['daily_sales']), 29)
        self.assertEqual(report['daily_sales'][-1], {'date': '2024-02-29', 'amount': 50000})


class DashboardAPITest(APITestCase):

    def setUp(self):
        self.owner = make_user('owner')
        self.store = make_store(self.owner)
        self.client.credentials(HTTP_AUTHORIZATION=bearer(self.owner))

    def test_calendar(self):
        SaleRecord.objects.create(store=self.store, date=date(2024, 5, 3), amount=9000, type='yogiyo')

        response = self.client.get('/api/dashboard/calendar/', {
            'store_id': self.store.id, 'year': 2024, 'month': 5, 'mode': 'cashflow'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['days'], {'2024-05-10': {'sales': 9000, 'expense': 0}})

    def test_calendar_degrades_to_empty_days(self):
        with patch.object(SaleRecord.objects, 'filter', side_effect=RuntimeError('db down')):
            response = self.client.get('/api/dashboard/calendar/', {
                'store_id': self.store.id, 'year': 2024, 'month': 3})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error'], 'db down')
        self.assertEqual(response.data['days'], {})
        self.assertEqual((response.data['year'], response.data['month']), (2024, 3))

    def test_calendar_rejects_unknown_mode(self):
        response = self.client.get('/api/dashboard/calendar/', {'mode': 'accrual'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_calendar_rejects_bad_month(self):
        response = self.client.get('/api/dashboard/calendar/', {'year': 2024, 'month': 13})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_snapshot(self):
        SaleRecord.objects.create(store=self.store, date=TODAY, amount=50000, type='manual')

        response = self.client.get('/api/dashboard/snapshot/', {
            'store_id': self.store.id, 'date': '2024-05-14'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['revenue'], 50000)

    @patch('dashboard.api_views.FinancialSnapshotCalculator.get_snapshot',
           side_effect=RuntimeError('db down'))
    def test_snapshot_degrades_to_zero(self, mock_snapshot):
        response = self.client.get('/api/dashboard/snapshot/', {
            'store_id': self.store.id, 'date': '2024-05-14'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error'], 'db down')
        for key, value in FinancialSnapshotCalculator.ZERO_SNAPSHOT.items():
            self.assertEqual(response.data[key], value)

    def test_store_id_must_be_numeric(self):
        response = self.client.get('/api/dashboard/snapshot/', {'store_id': 'abc'})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('store_id', response.data)

    def test_snapshot_needs_store(self):
        response = self.client.get('/api/dashboard/snapshot/', {'store_id': 'ALL'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_daily_details(self):
        SaleRecord.objects.create(store=self.store, date=TODAY, amount=50000, type='manual')

        response = self.client.get('/api/dashboard/daily/', {'date': '2024-05-14'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['sales']), 1)
        self.assertEqual(response.data['expenses'], [])

    def test_weekly_insight(self):
        response = self.client.get('/api/dashboard/weekly-insight/', {'store_id': self.store.id})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('week_label', response.data['data'])


class WeeklyInsightsCommandTest(TestCase):

    def test_command_output(self):
        owner = make_user('owner')
        store = make_store(owner, name='Command Store')
        SaleRecord.objects.create(store=store, date=timezone.localdate(),
                                  amount=12345, type='manual')

        out = StringIO()
        call_command('weekly_insights', days=2, store=store.id, stdout=out)

        output = out.getvalue()
        self.assertIn('Command Store', output)
        self.assertIn('12,345원 revenue', output)
        self.assertIn('Weekly insights complete!', output)
