from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'stores', views.StoreViewSet, basename='store')
router.register(r'members', views.StoreMemberViewSet, basename='store-member')

urlpatterns = [
    path('', include(router.urls)),
    path('invites/<str:code>/', views.verify_invite_view, name='verify-invite'),
    path('join/', views.join_store_view, name='join-store'),
]
