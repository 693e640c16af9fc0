# accounts/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from stores.models import StoreMember
from .models import CustomUser


class MembershipInline(admin.TabularInline):
    model = StoreMember
    fk_name = 'user'
    extra = 0
    fields = ('store', 'role', 'alias', 'hourly_wage')


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'phone', 'is_active', 'date_joined')
    search_fields = ('username', 'email', 'phone')
    fieldsets = UserAdmin.fieldsets + (
        ('Contact', {'fields': ('phone',)}),
    )
    inlines = [MembershipInline]
