from django.urls import path
from . import api_views

urlpatterns = [
    path('summary/', api_views.DashboardSummaryAPIView.as_view(), name='dashboard-summary'),
    path('calendar/', api_views.CalendarAPIView.as_view(), name='calendar'),
    path('daily/', api_views.DailyDetailsAPIView.as_view(), name='daily-details'),
    path('snapshot/', api_views.FinancialSnapshotAPIView.as_view(), name='financial-snapshot'),
    path('weekly-insight/', api_views.WeeklyInsightAPIView.as_view(), name='weekly-insight'),
    path('monthly-report/', api_views.MonthlyReportAPIView.as_view(), name='monthly-report'),
    path('ai/briefing/', api_views.DailyBriefingAPIView.as_view(), name='ai-briefing'),
    path('ai/ask/', api_views.AssistantAPIView.as_view(), name='ai-ask'),
]
