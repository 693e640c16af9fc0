# timeline/admin.py
from django.contrib import admin

from .models import TimelinePost


@admin.register(TimelinePost)
class TimelinePostAdmin(admin.ModelAdmin):
    list_display = ('store', 'author', 'post_type', 'created_at')
    list_filter = ('post_type', 'store')
    search_fields = ('content',)
