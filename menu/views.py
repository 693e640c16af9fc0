import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets, filters
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.utils import parse_date
from dashboard.assistant import AIAssistant
from stores.permissions import IsStoreMember, IsStoreOwnerOrManager, get_member_store
from stores.scope import Scope
from .business_logic import MenuBusinessLogic
from .models import MenuCost
from .serializers import MenuCostSerializer, MenuAdviceSerializer

logger = logging.getLogger(__name__)


class MenuStrategyAPIView(APIView):
    """Menu matrix for ?store_id= over an optional ?start_date=&end_date="""
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        store = get_member_store(request.user, request.query_params.get('store_id'))
        try:
            start = parse_date(request.query_params.get('start_date'))
            end = parse_date(request.query_params.get('end_date'))
        except ValueError:
            return Response({
                'success': False,
                'error': 'Dates must be YYYY-MM-DD'
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response(MenuBusinessLogic.get_menu_strategy(store, start, end))


class MenuAdviceAPIView(APIView):
    """AI strategy advice for one menu item of the matrix"""
    permission_classes = [IsAuthenticated, IsStoreMember]

    def post(self, request):
        serializer = MenuAdviceSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        store = get_member_store(request.user, data['store_id'])

        strategy = MenuBusinessLogic.get_menu_strategy(
            store, data.get('start_date'), data.get('end_date'))
        aggregate = next(
            (a for a in strategy['items'] if a['name'] == data['name']), None)

        if aggregate is None:
            logger.info(f"No sales for menu '{data['name']}' in store {store.id}")
            return Response({
                'success': False,
                'error': 'No sales found for this menu'
            }, status=status.HTTP_404_NOT_FOUND)

        advice = AIAssistant.menu_advice(aggregate)
        return Response({
            'success': True,
            'menu': aggregate,
            'advice': advice['text'],
            'fallback': advice['fallback']
        })


class MenuCostViewSet(viewsets.ModelViewSet):
    """Unit costs per menu name. Creating an existing name updates it."""
    serializer_class = MenuCostSerializer
    permission_classes = [IsAuthenticated, IsStoreMember]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['category']
    search_fields = ['name', 'category']
    ordering_fields = ['name', 'cost', 'updated_at']

    def get_queryset(self):
        return Scope.from_request(self.request).apply(MenuCost.objects.all())

    def get_permissions(self):
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsStoreOwnerOrManager()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        menu_cost, created = MenuBusinessLogic.upsert_cost(
            store=data['store'],
            name=data['name'],
            cost=data['cost'],
            price=data.get('price'),
            category=data.get('category')
        )

        return Response(
            self.get_serializer(menu_cost).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)
