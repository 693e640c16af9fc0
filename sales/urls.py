from django.urls import path
from . import views

urlpatterns = [
    path('', views.SaleListCreateAPIView.as_view(), name='sales'),
    path('<int:pk>/', views.SaleDetailAPIView.as_view(), name='sale-detail'),
    path('import/', views.SaleImportAPIView.as_view(), name='sales-import'),
    path('stats/', views.SalesStatsAPIView.as_view(), name='sales-stats'),
]
