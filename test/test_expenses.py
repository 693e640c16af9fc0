from datetime import date, timedelta

from django.test import SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from dashboard.business_logic import DashboardSummary
from expenses.business_logic import (
    ExpenseLogic, PurchasePatternAnalyzer, MISSING_FIELDS_MESSAGE
)
from expenses.models import ExpenseRecord, FixedCost
from stores.scope import Scope
from factories import make_user, make_store, add_member, bearer

TODAY = date(2024, 5, 20)


def visits(merchant, days_ago):
    return [{'merchant_name': merchant, 'date': TODAY - timedelta(days=d)} for d in days_ago]


class PurchasePatternTest(SimpleTestCase):

    def test_needs_enough_history(self):
        self.assertEqual(PurchasePatternAnalyzer.analyze(visits('시장', [10, 13, 16, 19]), TODAY), [])

    def test_overdue_merchant(self):
        # Every 3 days, last seen 7 days ago
        alerts = PurchasePatternAnalyzer.analyze(visits('시장', [7, 10, 13, 16, 19]), TODAY)

        self.assertEqual(len(alerts), 1)
        self.assertEqual(alerts[0]['merchant'], '시장')
        self.assertEqual(alerts[0]['avg_interval'], 3)
        self.assertEqual(alerts[0]['days_since_last'], 7)
        self.assertEqual(alerts[0]['severity'], 'warning')

    def test_critical_when_far_overdue(self):
        alerts = PurchasePatternAnalyzer.analyze(visits('시장', [10, 13, 16, 19, 22]), TODAY)
        self.assertEqual(alerts[0]['severity'], 'critical')

    def test_regular_merchant_is_quiet(self):
        self.assertEqual(PurchasePatternAnalyzer.analyze(visits('시장', [1, 4, 7, 10, 13]), TODAY), [])

    def test_merchants_with_few_visits_are_skipped(self):
        expenses = visits('마트', [20, 40]) + visits('철물점', [30, 60, 90])
        alerts = PurchasePatternAnalyzer.analyze(expenses, TODAY)
        self.assertEqual(alerts, [])


class FixedCostAlertTest(SimpleTestCase):

    def test_alerts_within_three_days(self):
        costs = [FixedCost(name='월세', amount=1500000, day_of_month=20),
                 FixedCost(name='전기', amount=200000, day_of_month=23),
                 FixedCost(name='인터넷', amount=30000, day_of_month=24),
                 FixedCost(name='보험', amount=50000, day_of_month=5)]

        alerts = DashboardSummary.fixed_cost_alerts(costs, TODAY)

        self.assertEqual([a['days_left'] for a in alerts], [0, 3])
        self.assertEqual(alerts[0]['message'], '월세 1,500,000원 (오늘) 예정')
        self.assertEqual(alerts[1]['message'], '전기 200,000원 (3일 뒤) 예정')


class ExpenseLogicTest(TestCase):

    def setUp(self):
        self.owner = make_user('owner')
        self.store = make_store(self.owner)

    def test_missing_fields(self):
        result = ExpenseLogic.submit_manual_expense(
            self.store, self.owner, TODAY, None, '마트')
        self.assertEqual(result, {'success': False, 'error': MISSING_FIELDS_MESSAGE})

    def test_default_category(self):
        result = ExpenseLogic.submit_manual_expense(
            self.store, self.owner, TODAY, 15000, ' 마트 ')

        expense = ExpenseRecord.objects.get(pk=result['expense_id'])
        self.assertEqual(expense.category, '기타')
        self.assertEqual(expense.merchant_name, '마트')

    def test_summary(self):
        for amount, category in [(30000, '식자재'), (10000, '식자재'), (10000, '소모품')]:
            ExpenseRecord.objects.create(store=self.store, date=TODAY, amount=amount,
                                         merchant_name='가게', category=category)

        summary = ExpenseLogic.summarize(
            ExpenseLogic.get_expenses(Scope.store(self.store.id)))

        self.assertEqual(summary['total_amount'], 50000)
        self.assertEqual(summary['top_category'], '식자재')
        self.assertEqual(summary['by_category'][0]['share_percent'], 80)


class ExpenseAPITest(APITestCase):

    def setUp(self):
        self.owner = make_user('owner')
        self.store = make_store(self.owner)
        self.client.credentials(HTTP_AUTHORIZATION=bearer(self.owner))

    def test_manual_expense(self):
        response = self.client.post('/api/expenses/', {
            'store_id': self.store.id, 'date': '2024-05-20',
            'amount': 12000, 'merchant_name': '농협'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_manual_expense_missing_amount(self):
        response = self.client.post('/api/expenses/', {
            'store_id': self.store.id, 'date': '2024-05-20', 'merchant_name': '농협'
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], MISSING_FIELDS_MESSAGE)

    def test_fixed_costs_total(self):
        FixedCost.objects.create(store=self.store, name='월세', amount=1000000, day_of_month=1)
        FixedCost.objects.create(store=self.store, name='통신', amount=50000, day_of_month=15)

        response = self.client.get('/api/expenses/fixed-costs/', {'store_id': self.store.id})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['monthly_total'], 1050000)
        self.assertEqual(len(response.data['fixed_costs']), 2)

    def test_staff_cannot_add_fixed_costs(self):
        worker = make_user('worker')
        add_member(self.store, worker)
        self.client.credentials(HTTP_AUTHORIZATION=bearer(worker))

        response = self.client.post('/api/expenses/fixed-costs/', {
            'store': self.store.id, 'name': '월세', 'amount': 1000, 'day_of_month': 1
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_fixed_costs_filter_by_billing_day(self):
        FixedCost.objects.create(store=self.store, name='월세', amount=1000000, day_of_month=1)
        FixedCost.objects.create(store=self.store, name='통신', amount=50000, day_of_month=15)

        response = self.client.get('/api/expenses/fixed-costs/', {
            'store_id': self.store.id, 'day_of_month': 15})

        self.assertEqual([c['name'] for c in response.data['fixed_costs']], ['통신'])
        self.assertEqual(response.data['monthly_total'], 1050000)
