# expenses/admin.py
from django.contrib import admin

from .models import ExpenseRecord, FixedCost


@admin.register(ExpenseRecord)
class ExpenseRecordAdmin(admin.ModelAdmin):
    list_display = ('date', 'store', 'merchant_name', 'category', 'amount')
    list_filter = ('category', 'store')
    search_fields = ('merchant_name',)
    date_hierarchy = 'date'


@admin.register(FixedCost)
class FixedCostAdmin(admin.ModelAdmin):
    list_display = ('name', 'store', 'amount', 'day_of_month', 'category')
    list_filter = ('store', 'category')
