from django.conf import settings
from django.db import models


class TimelinePost(models.Model):
    TYPE_CHOICES = [
        ('notice', 'Notice'),
        ('general', 'General'),
        ('order', 'Order'),
    ]

    store = models.ForeignKey(
        'stores.Store', on_delete=models.CASCADE, related_name='posts')
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, related_name='posts')
    content = models.TextField()
    image_url = models.URLField(max_length=500, blank=True)
    post_type = models.CharField(
        max_length=20, choices=TYPE_CHOICES, default='general')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"[{self.get_post_type_display()}] {self.content[:30]}"
