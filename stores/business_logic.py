# stores/business_logic.py
import logging
import secrets
import string
from datetime import timedelta

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.conf import get_setting
from core.exceptions import InvalidInvite

logger = logging.getLogger(__name__)

INVITE_ALPHABET = string.ascii_uppercase + string.digits


class StoreMembershipLogic:
    """
    Store creation and the invite-code flow for adding staff
    """

    @staticmethod
    @transaction.atomic
    def create_store(owner, **fields):
        """Create a store; the creator becomes its owner member"""
        from .models import Store, StoreMember

        store = Store.objects.create(owner=owner, **fields)
        StoreMember.objects.create(store=store, user=owner, role='owner')

        logger.info(f"Store {store.id} '{store.name}' created by {owner.username}")
        return store

    @staticmethod
    def generate_code(length=6):
        return ''.join(secrets.choice(INVITE_ALPHABET) for _ in range(length))

    @staticmethod
    def create_invite(store, created_by):
        """Issue a 6 character invite code valid for INVITE_CODE_TTL_HOURS"""
        from .models import StoreInvite

        expires_at = timezone.now() + timedelta(
            hours=get_setting('INVITE_CODE_TTL_HOURS'))

        # Codes are unique; retry on the rare collision
        for _ in range(5):
            try:
                with transaction.atomic():
                    invite = StoreInvite.objects.create(
                        store=store,
                        code=StoreMembershipLogic.generate_code(),
                        created_by=created_by,
                        expires_at=expires_at
                    )
                logger.info(f"Invite {invite.code} issued for store {store.id}")
                return invite
            except IntegrityError:
                logger.warning("Invite code collision, retrying")

        raise InvalidInvite('Could not allocate an invite code')

    @staticmethod
    def verify_invite(code):
        """Return the unexpired invite for a code, or None"""
        from .models import StoreInvite

        if not code:
            return None

        return StoreInvite.objects.select_related('store').filter(
            code=code.strip().upper(),
            expires_at__gt=timezone.now()
        ).first()

    @staticmethod
    def join_store(user, code):
        """
        Add the user to the invite's store as staff.
        Joining a store twice is a no-op reported as 'Already a member'.
        """
        from .models import StoreMember

        invite = StoreMembershipLogic.verify_invite(code)
        if not invite:
            raise InvalidInvite()

        member, created = StoreMember.objects.get_or_create(
            store=invite.store,
            user=user,
            defaults={'role': 'staff', 'alias': user.get_full_name()}
        )

        if not created:
            return {'success': True, 'message': 'Already a member',
                    'store_id': invite.store_id}

        logger.info(f"{user.username} joined store {invite.store_id}")
        return {'success': True, 'message': 'Joined store',
                'store_id': invite.store_id, 'member_id': member.id}
