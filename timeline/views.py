from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.utils import parse_date
from stores.permissions import IsStoreMember, get_member_store
from stores.scope import Scope
from .business_logic import TimelineLogic
from .models import TimelinePost
from .serializers import TimelinePostSerializer


class TimelinePostListCreateAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        try:
            day = parse_date(request.query_params.get('date'), timezone.localdate())
        except ValueError:
            return Response({
                'success': False,
                'error': 'date must be YYYY-MM-DD'
            }, status=status.HTTP_400_BAD_REQUEST)

        posts = TimelineLogic.get_daily_posts(scope, day)
        return Response({
            'success': True,
            'date': day.isoformat(),
            'posts': TimelinePostSerializer(posts, many=True).data
        })

    def post(self, request):
        serializer = TimelinePostSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        store = get_member_store(request.user, data['store'].id)

        post = TimelineLogic.create_post(
            store, request.user, data['content'],
            data.get('post_type', 'general'), data.get('image_url'))
        return Response(TimelinePostSerializer(post).data,
                        status=status.HTTP_201_CREATED)


class TimelinePostDetailAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def delete(self, request, pk):
        post = get_object_or_404(TimelinePost, pk=pk)
        self.check_object_permissions(request, post)

        membership = request.user.memberships.get(store_id=post.store_id)
        if post.author_id != request.user.id and not membership.can_manage:
            return Response({
                'success': False,
                'error': 'Only the author or a manager can delete this post'
            }, status=status.HTTP_403_FORBIDDEN)

        post.delete()
        return Response({'success': True})
