# sales/admin.py
from django.contrib import admin

from .models import SaleRecord, SaleItem


class SaleItemInline(admin.TabularInline):
    model = SaleItem
    extra = 0


@admin.register(SaleRecord)
class SaleRecordAdmin(admin.ModelAdmin):
    list_display = ('date', 'store', 'amount', 'type', 'user', 'created_at')
    list_filter = ('type', 'store', 'date')
    date_hierarchy = 'date'
    inlines = [SaleItemInline]
