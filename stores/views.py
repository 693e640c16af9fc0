import logging

from rest_framework import viewsets, mixins, status, filters
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.exceptions import InvalidInvite
from .business_logic import StoreMembershipLogic
from .models import Store, StoreMember
from .permissions import IsStoreMember, IsStoreOwnerOrManager, get_membership
from .serializers import (
    StoreSerializer, StoreMemberSerializer, StoreInviteSerializer,
    JoinStoreSerializer
)

logger = logging.getLogger(__name__)


class StoreViewSet(viewsets.ModelViewSet):
    """ViewSet for the stores the current user belongs to"""
    serializer_class = StoreSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'address']
    ordering_fields = ['name', 'created_at']

    def get_queryset(self):
        return Store.objects.filter(
            members__user=self.request.user).distinct()

    def get_permissions(self):
        if self.action in ['update', 'partial_update', 'destroy', 'create_invite']:
            return [IsAuthenticated(), IsStoreOwnerOrManager()]
        return super().get_permissions()

    def perform_create(self, serializer):
        store = StoreMembershipLogic.create_store(
            self.request.user, **serializer.validated_data)
        serializer.instance = store

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """List members of a store"""
        store = self.get_object()
        serializer = StoreMemberSerializer(
            store.members.select_related('user'), many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['post'], url_path='invites')
    def create_invite(self, request, pk=None):
        """Issue an invite code for this store"""
        store = self.get_object()
        invite = StoreMembershipLogic.create_invite(store, request.user)
        return Response(StoreInviteSerializer(invite).data,
                        status=status.HTTP_201_CREATED)


class StoreMemberViewSet(mixins.ListModelMixin,
                         mixins.RetrieveModelMixin,
                         mixins.UpdateModelMixin,
                         viewsets.GenericViewSet):
    """Staff details (alias, hourly wage, color) per store"""
    serializer_class = StoreMemberSerializer
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get_queryset(self):
        queryset = StoreMember.objects.filter(
            store_id__in=self.request.user.store_ids()
        ).select_related('user', 'store')

        store_id = self.request.query_params.get('store_id')
        if store_id:
            queryset = queryset.filter(store_id=store_id)
        return queryset

    def get_permissions(self):
        if self.action in ['update', 'partial_update']:
            return [IsAuthenticated(), IsStoreOwnerOrManager()]
        return super().get_permissions()


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def verify_invite_view(request, code):
    """Check an invite code before joining"""
    invite = StoreMembershipLogic.verify_invite(code)
    if not invite:
        return Response({
            'valid': False,
            'error': InvalidInvite.default_message
        }, status=status.HTTP_404_NOT_FOUND)

    return Response({
        'valid': True,
        'invite': StoreInviteSerializer(invite).data,
        'already_member': get_membership(request.user, invite.store_id) is not None
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def join_store_view(request):
    """Join a store with an invite code"""
    serializer = JoinStoreSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        result = StoreMembershipLogic.join_store(
            request.user, serializer.validated_data['code'])
    except InvalidInvite as e:
        logger.info(f"Rejected invite code from {request.user.username}")
        return Response({
            'success': False,
            'error': e.message
        }, status=status.HTTP_400_BAD_REQUEST)

    return Response(result, status=status.HTTP_200_OK)
