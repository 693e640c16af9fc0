# timeline/business_logic.py
import logging

from core.utils import day_bounds

logger = logging.getLogger(__name__)


class TimelineLogic:

    @staticmethod
    def get_daily_posts(scope, day):
        """Posts created during the local (KST) calendar day"""
        from .models import TimelinePost

        start, end = day_bounds(day)
        return scope.apply(TimelinePost.objects.filter(
            created_at__gte=start, created_at__lt=end
        )).select_related('author').order_by('-created_at')

    @staticmethod
    def create_post(store, author, content, post_type='general', image_url=''):
        from .models import TimelinePost

        post = TimelinePost.objects.create(
            store=store, author=author, content=content,
            post_type=post_type, image_url=image_url or '')
        logger.info(f"Post {post.id} by {author.username} in store {store.id}")
        return post
