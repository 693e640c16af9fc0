from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'fixed-costs', views.FixedCostViewSet, basename='fixed-cost')

urlpatterns = [
    path('', views.ExpenseListCreateAPIView.as_view(), name='expenses'),
    path('<int:pk>/', views.ExpenseDetailAPIView.as_view(), name='expense-detail'),
    path('summary/', views.ExpenseSummaryAPIView.as_view(), name='expense-summary'),
    path('alerts/', views.PurchaseAlertsAPIView.as_view(), name='purchase-alerts'),
    path('', include(router.urls)),
]
