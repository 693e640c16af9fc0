# accounts/utils.py
import logging
from datetime import datetime, timedelta, timezone as dt_timezone

import jwt
from django.conf import settings

logger = logging.getLogger(__name__)

TOKEN_LIFETIME = timedelta(days=7)


def create_jwt_token(user):
    """Create a signed session token for an authenticated user"""
    now = datetime.now(dt_timezone.utc)
    payload = {
        'user_id': user.id,
        'username': user.username,
        'email': user.email,
        'exp': now + TOKEN_LIFETIME,
        'iat': now
    }

    return jwt.encode(payload, settings.SECRET_KEY, algorithm='HS256')


def verify_jwt_token(token):
    """Decode a token; None when it is expired or tampered with"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        return None
    except jwt.InvalidTokenError:
        logger.warning("Rejected invalid token")
        return None

