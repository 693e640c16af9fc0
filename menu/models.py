from django.db import models


class MenuCost(models.Model):
    """Known unit cost of a menu item, matched to sale items by name"""
    store = models.ForeignKey(
        'stores.Store', on_delete=models.CASCADE, related_name='menu_costs')
    name = models.CharField(max_length=255)
    cost = models.PositiveIntegerField(help_text="Unit cost in won")
    price = models.PositiveIntegerField(
        null=True, blank=True, help_text="Listed selling price in won")
    category = models.CharField(max_length=50, default='기타')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['store', 'name'], name='unique_menu_cost_per_store'),
        ]

    def __str__(self):
        return f"{self.name} - {self.cost:,}원"
