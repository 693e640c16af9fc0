# accounts/authentication.py
from django.contrib.auth import get_user_model
from rest_framework import authentication
from rest_framework.exceptions import AuthenticationFailed

from .utils import verify_jwt_token

User = get_user_model()


class JWTAuthentication(authentication.BaseAuthentication):
    """Bearer token authentication for the API"""
    keyword = 'Bearer'

    def authenticate(self, request):
        auth_header = request.headers.get('Authorization', '')

        if not auth_header.startswith(f'{self.keyword} '):
            return None  # Let session auth try

        token = auth_header.split(' ', 1)[1].strip()
        payload = verify_jwt_token(token)

        if not payload:
            raise AuthenticationFailed('Invalid or expired token')

        user_id = payload.get('user_id')
        if not user_id:
            raise AuthenticationFailed('Invalid token payload')

        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise AuthenticationFailed('User not found')

        if not user.is_active:
            raise AuthenticationFailed('User account is disabled')

        return (user, token)

    def authenticate_header(self, request):
        return self.keyword
