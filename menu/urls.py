from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'costs', views.MenuCostViewSet, basename='menu-cost')

urlpatterns = [
    path('strategy/', views.MenuStrategyAPIView.as_view(), name='menu-strategy'),
    path('advice/', views.MenuAdviceAPIView.as_view(), name='menu-advice'),
    path('', include(router.urls)),
]
