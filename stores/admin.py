# stores/admin.py
from django.contrib import admin

from .models import Store, StoreMember, StoreInvite


class StoreMemberInline(admin.TabularInline):
    model = StoreMember
    extra = 0
    fields = ('user', 'role', 'alias', 'hourly_wage', 'color')


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ('name', 'owner', 'business_number', 'created_at')
    search_fields = ('name', 'owner__username', 'business_number')
    inlines = [StoreMemberInline]


@admin.register(StoreInvite)
class StoreInviteAdmin(admin.ModelAdmin):
    list_display = ('code', 'store', 'created_by', 'expires_at')
    list_filter = ('store',)
    readonly_fields = ('created_at',)
