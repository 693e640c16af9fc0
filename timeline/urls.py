from django.urls import path
from . import views

urlpatterns = [
    path('posts/', views.TimelinePostListCreateAPIView.as_view(), name='timeline-posts'),
    path('posts/<int:pk>/', views.TimelinePostDetailAPIView.as_view(), name='timeline-post-detail'),
]
