from datetime import date
from unittest.mock import patch

from rest_framework import status
from rest_framework.test import APITestCase

from menu.models import MenuCost
from sales.models import SaleRecord, SaleItem
from factories import make_user, make_store, add_member, bearer


class MenuAPITest(APITestCase):

    def setUp(self):
        self.owner = make_user('owner')
        self.store = make_store(self.owner)
        self.client.credentials(HTTP_AUTHORIZATION=bearer(self.owner))

        sale = SaleRecord.objects.create(
            store=self.store, date=date(2024, 5, 14), amount=130000, type='hall')
        SaleItem.objects.create(sale=sale, name='불고기', quantity=10, unit_price=10000)
        SaleItem.objects.create(sale=sale, name='냉면', quantity=3, unit_price=10000)
        MenuCost.objects.create(store=self.store, name='불고기', cost=4000, category='메인')

    def test_strategy(self):
        response = self.client.get('/api/menu/strategy/', {'store_id': self.store.id})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        items = {i['name']: i for i in response.data['items']}
        self.assertEqual(items['불고기']['quadrant'], 'star')
        self.assertFalse(items['불고기']['cost_estimated'])
        self.assertTrue(items['냉면']['cost_estimated'])
        self.assertEqual(response.data['estimated_count'], 1)

    def test_strategy_outside_range_is_empty(self):
        response = self.client.get('/api/menu/strategy/', {
            'store_id': self.store.id, 'start_date': '2024-06-01'})
        self.assertEqual(response.data['items'], [])

    def test_cost_upsert(self):
        created = self.client.post('/api/menu/costs/', {
            'store': self.store.id, 'name': '냉면', 'cost': 3500}, format='json')
        updated = self.client.post('/api/menu/costs/', {
            'store': self.store.id, 'name': '냉면', 'cost': 3800}, format='json')

        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        self.assertEqual(updated.status_code, status.HTTP_200_OK)
        self.assertEqual(MenuCost.objects.get(store=self.store, name='냉면').cost, 3800)

    def test_cost_category_filter(self):
        MenuCost.objects.create(store=self.store, name='콜라', cost=500, category='음료')

        response = self.client.get('/api/menu/costs/', {
            'store_id': self.store.id, 'category': '음료'})

        self.assertEqual([c['name'] for c in response.data], ['콜라'])

    def test_staff_cannot_edit_costs(self):
        worker = make_user('worker')
        add_member(self.store, worker)
        self.client.credentials(HTTP_AUTHORIZATION=bearer(worker))

        response = self.client.post('/api/menu/costs/', {
            'store': self.store.id, 'name': '냉면', 'cost': 1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    @patch('menu.views.AIAssistant.menu_advice')
    def test_advice(self, mock_advice):
        mock_advice.return_value = {'text': '가격 유지', 'fallback': False}

        response = self.client.post('/api/menu/advice/', {
            'store_id': self.store.id, 'name': '불고기'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['advice'], '가격 유지')
        self.assertEqual(mock_advice.call_args.args[0]['name'], '불고기')

    def test_advice_for_unsold_menu(self):
        response = self.client.post('/api/menu/advice/', {
            'store_id': self.store.id, 'name': '없는메뉴'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
