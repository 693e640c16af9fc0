# staff/admin.py
from django.contrib import admin

from .models import WorkSchedule, WorkLog


@admin.register(WorkSchedule)
class WorkScheduleAdmin(admin.ModelAdmin):
    list_display = ('user', 'store', 'start_time', 'end_time', 'memo')
    list_filter = ('store',)


@admin.register(WorkLog)
class WorkLogAdmin(admin.ModelAdmin):
    list_display = ('user', 'store', 'clock_in', 'clock_out', 'wage_snapshot', 'status')
    list_filter = ('status', 'store')
    readonly_fields = ('wage_snapshot',)
