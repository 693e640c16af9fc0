from datetime import datetime, timedelta

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from stores.scope import Scope
from timeline.business_logic import TimelineLogic
from timeline.models import TimelinePost
from timeline.tagging import KeywordPostTagger, default_tagger
from factories import make_user, make_store, add_member, bearer


class PostTaggerTest(SimpleTestCase):

    def test_issue(self):
        self.assertEqual(default_tagger.tag('냉장고 고장났어요'), {'key': 'issue', 'label': '이슈'})

    def test_supply(self):
        self.assertEqual(default_tagger.tag('양파 재고 확인 부탁'), {'key': 'supply', 'label': '물품'})

    def test_task(self):
        self.assertEqual(default_tagger.tag('마감 청소 끝'), {'key': 'task', 'label': '업무'})

    def test_first_rule_wins(self):
        # Matches both issue (파손) and supply (주문)
        self.assertEqual(default_tagger.tag('파손된 접시 주문')['key'], 'issue')

    def test_no_match(self):
        self.assertIsNone(default_tagger.tag('오늘 날씨 좋네요'))
        self.assertIsNone(default_tagger.tag(''))

    def test_custom_rules(self):
        tagger = KeywordPostTagger(rules=[('hello', '인사', r'안녕')])
        self.assertEqual(tagger.tag('안녕하세요')['key'], 'hello')
        self.assertIsNone(tagger.tag('마감 완료'))


class DailyPostsTest(TestCase):

    def setUp(self):
        self.owner = make_user('owner')
        self.store = make_store(self.owner)

    def test_posts_of_local_day(self):
        today = timezone.localdate()
        kept = TimelineLogic.create_post(self.store, self.owner, '오픈 준비 완료')
        old = TimelineLogic.create_post(self.store, self.owner, '어제 글')
        yesterday = timezone.make_aware(
            datetime.combine(today - timedelta(days=1), datetime.min.time()) + timedelta(hours=23))
        TimelinePost.objects.filter(pk=old.pk).update(created_at=yesterday)

        posts = list(TimelineLogic.get_daily_posts(Scope.store(self.store.id), today))
        self.assertEqual(posts, [kept])


class TimelineAPITest(APITestCase):

    def setUp(self):
        self.owner = make_user('owner')
        self.store = make_store(self.owner)
        self.worker = make_user('worker')
        add_member(self.store, self.worker, alias='알바 민수')

    def test_create_and_list(self):
        self.client.credentials(HTTP_AUTHORIZATION=bearer(self.worker))
        created = self.client.post('/api/timeline/posts/', {
            'store': self.store.id, 'content': '휴지 떨어졌어요', 'post_type': 'order'
        }, format='json')

        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        self.assertEqual(created.data['tag']['key'], 'supply')
        self.assertEqual(created.data['author_name'], '알바 민수')

        listed = self.client.get('/api/timeline/posts/', {'store_id': self.store.id})
        self.assertEqual(len(listed.data['posts']), 1)

    def test_blank_content_is_rejected(self):
        self.client.credentials(HTTP_AUTHORIZATION=bearer(self.worker))
        response = self.client.post('/api/timeline/posts/', {
            'store': self.store.id, 'content': '   '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_only_author_or_manager_deletes(self):
        post = TimelineLogic.create_post(self.store, self.owner, '공지')

        self.client.credentials(HTTP_AUTHORIZATION=bearer(self.worker))
        response = self.client.delete(f'/api/timeline/posts/{post.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.credentials(HTTP_AUTHORIZATION=bearer(self.owner))
        response = self.client.delete(f'/api/timeline/posts/{post.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(TimelinePost.objects.exists())
