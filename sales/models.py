from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class SaleRecord(models.Model):
    """One day's takings from one channel. Records are never edited, only deleted."""
    TYPE_CHOICES = [
        ('manual', 'Manual'),
        ('excel', 'Excel upload'),
        ('hall', 'Hall (dine-in)'),
        ('baemin', 'Baemin'),
        ('yogiyo', 'Yogiyo'),
        ('coupang', 'Coupang Eats'),
    ]

    store = models.ForeignKey(
        'stores.Store', on_delete=models.CASCADE, related_name='sales')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='sales')
    date = models.DateField(db_index=True)
    amount = models.PositiveIntegerField(
        validators=[MinValueValidator(1)], help_text="Amount in won")
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='manual')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['store', 'date']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(type__in=[
                    'manual', 'excel', 'hall', 'baemin', 'yogiyo', 'coupang']),
                name='sale_record_known_type'),
        ]

    def __str__(self):
        return f"{self.store} {self.date} {self.amount:,}원 ({self.type})"


class SaleItem(models.Model):
    """Menu line item belonging to a sale record"""
    sale = models.ForeignKey(
        SaleRecord, on_delete=models.CASCADE, related_name='items')
    name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.PositiveIntegerField(default=0)
    total_price = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['sale', 'id']

    def __str__(self):
        return f"{self.name} x{self.quantity}"

    def save(self, *args, **kwargs):
        if not self.total_price:
            self.total_price = self.unit_price * self.quantity
        super().save(*args, **kwargs)
