# accounts/business_logic.py
import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction

from .utils import create_jwt_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = '아이디 또는 비밀번호가 올바르지 않습니다.'
WRONG_PASSWORD_MESSAGE = '현재 비밀번호가 올바르지 않습니다.'


class AccountLogic:
    """Sign-up, sign-in and password changes for owners and staff"""

    @staticmethod
    @transaction.atomic
    def register(username, email, password, store_name=None, **profile):
        """
        Create a user and, when store_name is given, their first store.
        Returns (user, store or None).
        """
        from stores.business_logic import StoreMembershipLogic

        User = get_user_model()
        user = User.objects.create_user(
            username=username, email=email, password=password, **profile)

        store = None
        if store_name and store_name.strip():
            store = StoreMembershipLogic.create_store(user, name=store_name.strip())

        logger.info(
            f"Registered {user.username}" + (f" with store {store.id}" if store else ''))
        return user, store

    @staticmethod
    def login(request, identifier, password):
        """
        Authenticate by username or email.
        Returns {'success', 'user', 'token'} or {'success': False, 'error'}.
        """
        user = authenticate(request, username=identifier, password=password)
        if user is None:
            logger.info(f"Failed login for {identifier}")
            return {'success': False, 'error': INVALID_CREDENTIALS_MESSAGE}

        logger.info(f"{user.username} logged in")
        return {'success': True, 'user': user, 'token': create_jwt_token(user)}

    @staticmethod
    def change_password(user, old_password, new_password):
        if not user.check_password(old_password):
            return {'success': False, 'error': WRONG_PASSWORD_MESSAGE}

        user.set_password(new_password)
        user.save(update_fields=['password'])
        logger.info(f"{user.username} changed password")
        return {'success': True}
