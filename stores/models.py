from django.conf import settings
from django.db import models


class Store(models.Model):
    name = models.CharField(max_length=255)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='owned_stores')
    business_number = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class StoreMember(models.Model):
    ROLE_CHOICES = [
        ('owner', 'Owner'),
        ('manager', 'Manager'),
        ('staff', 'Staff'),
    ]

    store = models.ForeignKey(
        Store, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(
        max_length=20, choices=ROLE_CHOICES, default='staff')
    alias = models.CharField(max_length=50, blank=True)
    hourly_wage = models.PositiveIntegerField(
        default=0, help_text="Hourly wage in won")
    color = models.CharField(max_length=7, default='#228be6')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['store', 'joined_at']
        constraints = [
            models.UniqueConstraint(
                fields=['store', 'user'], name='unique_store_member'),
        ]

    def __str__(self):
        return f"{self.alias or self.user.username} @ {self.store.name} ({self.get_role_display()})"

    @property
    def can_manage(self):
        return self.role in ('owner', 'manager')


class StoreInvite(models.Model):
    store = models.ForeignKey(
        Store, on_delete=models.CASCADE, related_name='invites')
    code = models.CharField(max_length=6, unique=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['code', 'expires_at']),
        ]

    def __str__(self):
        return f"{self.code} → {self.store.name}"
