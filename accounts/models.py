from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    """Store owner or staff member. Store roles live on stores.StoreMember."""
    phone = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.get_full_name() or self.username

    def store_ids(self):
        """Ids of every store this user belongs to"""
        return list(self.memberships.values_list('store_id', flat=True))
