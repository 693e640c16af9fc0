# menu/admin.py
from django.contrib import admin

from .models import MenuCost


@admin.register(MenuCost)
class MenuCostAdmin(admin.ModelAdmin):
    list_display = ('name', 'store', 'cost', 'price', 'category', 'updated_at')
    list_filter = ('store', 'category')
    search_fields = ('name',)
