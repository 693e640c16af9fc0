from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

DEFAULT_CATEGORY = '기타'


class ExpenseRecord(models.Model):
    store = models.ForeignKey(
        'stores.Store', on_delete=models.CASCADE, related_name='expenses')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='expenses')
    date = models.DateField(db_index=True)
    amount = models.PositiveIntegerField(
        validators=[MinValueValidator(1)], help_text="Amount in won")
    merchant_name = models.CharField(max_length=255)
    category = models.CharField(max_length=50, default=DEFAULT_CATEGORY)
    image_url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['store', 'date']),
        ]

    def __str__(self):
        return f"{self.date} {self.merchant_name} {self.amount:,}원"


class FixedCost(models.Model):
    """Recurring monthly cost (rent, insurance, subscriptions)"""
    store = models.ForeignKey(
        'stores.Store', on_delete=models.CASCADE, related_name='fixed_costs')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='fixed_costs')
    name = models.CharField(max_length=100)
    amount = models.PositiveIntegerField(help_text="Monthly amount in won")
    day_of_month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(31)],
        help_text="Billing day")
    category = models.CharField(max_length=50, default=DEFAULT_CATEGORY)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['day_of_month', 'name']

    def __str__(self):
        return f"{self.name} {self.amount:,}원 (매월 {self.day_of_month}일)"
