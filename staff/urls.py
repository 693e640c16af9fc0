from django.urls import path
from . import views

urlpatterns = [
    path('schedules/', views.ScheduleListCreateAPIView.as_view(), name='schedules'),
    path('schedules/<int:pk>/', views.ScheduleDetailAPIView.as_view(), name='schedule-detail'),
    path('attendance/today/', views.TodayLogAPIView.as_view(), name='attendance-today'),
    path('attendance/clock-in/', views.ClockInAPIView.as_view(), name='clock-in'),
    path('attendance/clock-out/', views.ClockOutAPIView.as_view(), name='clock-out'),
    path('work-logs/', views.WorkLogListAPIView.as_view(), name='work-logs'),
]
