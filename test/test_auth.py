from rest_framework import status
from rest_framework.test import APITestCase

from accounts.utils import create_jwt_token, verify_jwt_token
from factories import make_user, bearer, PASSWORD


class AuthAPITest(APITestCase):

    def test_register(self):
        response = self.client.post('/api/auth/register/', {
            'username': 'newowner',
            'email': 'newowner@example.com',
            'password': PASSWORD,
            'password2': PASSWORD
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['token'])
        self.assertEqual(response.data['user']['username'], 'newowner')
        self.assertIsNone(response.data['store_id'])

    def test_register_with_first_store(self):
        response = self.client.post('/api/auth/register/', {
            'username': 'newowner',
            'email': 'newowner@example.com',
            'password': PASSWORD,
            'password2': PASSWORD,
            'store_name': '김밥천국 역삼점'
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNotNone(response.data['store_id'])
        self.assertEqual(response.data['user']['stores'][0]['role'], 'owner')
        self.assertEqual(response.data['user']['stores'][0]['store_name'], '김밥천국 역삼점')

    def test_register_password_mismatch(self):
        response = self.client.post('/api/auth/register/', {
            'username': 'newowner',
            'email': 'newowner@example.com',
            'password': PASSWORD,
            'password2': PASSWORD + 'x'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_with_username_or_email(self):
        make_user('owner')

        for identifier in ['owner', 'owner@example.com']:
            response = self.client.post('/api/auth/login/', {
                'username': identifier, 'password': PASSWORD}, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK, identifier)
            self.assertEqual(verify_jwt_token(response.data['token'])['username'], 'owner')

    def test_wrong_password(self):
        make_user('owner')
        response = self.client.post('/api/auth/login/', {
            'username': 'owner', 'password': 'wrong'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_with_bearer_token(self):
        user = make_user('owner')
        self.client.credentials(HTTP_AUTHORIZATION=bearer(user))

        response = self.client.get('/api/auth/profile/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'owner@example.com')

    def test_unauthenticated(self):
        response = self.client.get('/api/auth/profile/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_bad_token(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
        response = self.client.get('/api/sales/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_token_round_trip(self):
        user = make_user('owner')
        payload = verify_jwt_token(create_jwt_token(user))
        self.assertEqual(payload['user_id'], user.id)

    def test_change_password(self):
        user = make_user('owner')
        self.client.credentials(HTTP_AUTHORIZATION=bearer(user))

        wrong = self.client.post('/api/auth/profile/change-password/', {
            'old_password': 'nope', 'new_password': 'An0ther-pass-456'}, format='json')
        self.assertEqual(wrong.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post('/api/auth/profile/change-password/', {
            'old_password': PASSWORD, 'new_password': 'An0ther-pass-456'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        user.refresh_from_db()
        self.assertTrue(user.check_password('An0ther-pass-456'))

    def test_health_is_public(self):
        response = self.client.get('/api/health/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['database'], 'connected')
