from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q

User = get_user_model()


class EmailOrUsernameModelBackend(ModelBackend):
    """Accept either the username or the email address as login id"""

    def authenticate(self, request, username=None, password=None, **kwargs):
        if not username or not password:
            return None

        candidates = User.objects.filter(
            Q(username=username) | Q(email__iexact=username)
        ).order_by('id')

        for user in candidates:
            if user.check_password(password) and self.user_can_authenticate(user):
                return user
        return None
