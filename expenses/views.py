import logging

from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.utils import parse_date
from stores.permissions import IsStoreMember, IsStoreOwnerOrManager, get_member_store
from stores.scope import Scope
from .business_logic import ExpenseLogic, FixedCostLogic, PurchasePatternAnalyzer
from .models import ExpenseRecord
from .serializers import (
    ExpenseRecordSerializer, ManualExpenseSerializer, FixedCostSerializer
)

logger = logging.getLogger(__name__)


def _date_range(request):
    return (parse_date(request.query_params.get('start_date')),
            parse_date(request.query_params.get('end_date')))


class ExpenseListCreateAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        try:
            start, end = _date_range(request)
        except ValueError:
            return Response({
                'success': False,
                'error': 'Dates must be YYYY-MM-DD'
            }, status=status.HTTP_400_BAD_REQUEST)

        expenses = ExpenseLogic.get_expenses(scope, start, end)
        return Response({
            'success': True,
            'expenses': ExpenseRecordSerializer(expenses, many=True).data
        })

    def post(self, request):
        serializer = ManualExpenseSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        store = get_member_store(request.user, data['store_id'])

        result = ExpenseLogic.submit_manual_expense(
            store=store,
            user=request.user,
            date=data.get('date'),
            amount=data.get('amount'),
            merchant_name=data.get('merchant_name'),
            category=data.get('category'),
            image_url=data.get('image_url')
        )

        if not result['success']:
            return Response(result, status=status.HTTP_400_BAD_REQUEST)
        return Response(result, status=status.HTTP_201_CREATED)


class ExpenseDetailAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def delete(self, request, pk):
        expense = get_object_or_404(ExpenseRecord, pk=pk)
        self.check_object_permissions(request, expense)

        logger.info(f"Deleting expense {expense.id} of store {expense.store_id}")
        expense.delete()
        return Response({'success': True})


class ExpenseSummaryAPIView(APIView):
    """Totals by category for a store (or all stores) and optional range"""
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        try:
            start, end = _date_range(request)
        except ValueError:
            return Response({
                'success': False,
                'error': 'Dates must be YYYY-MM-DD'
            }, status=status.HTTP_400_BAD_REQUEST)

        summary = ExpenseLogic.summarize(
            ExpenseLogic.get_expenses(scope, start, end))
        return Response({'success': True, **summary})


class PurchaseAlertsAPIView(APIView):
    """Merchants overdue for a visit, from the store's expense history"""
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        expenses = ExpenseLogic.get_expenses(scope).values('merchant_name', 'date')
        alerts = PurchasePatternAnalyzer.analyze(expenses)
        return Response({'success': True, 'alerts': alerts})


class FixedCostViewSet(viewsets.ModelViewSet):
    """Monthly fixed costs; members read, owners and managers edit"""
    serializer_class = FixedCostSerializer
    permission_classes = [IsAuthenticated, IsStoreMember]
    filterset_fields = ['category', 'day_of_month']

    def get_queryset(self):
        return FixedCostLogic.get_fixed_costs(Scope.from_request(self.request))

    def get_permissions(self):
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsStoreOwnerOrManager()]
        return super().get_permissions()

    def list(self, request, *args, **kwargs):
        scope = Scope.from_request(request)
        queryset = self.filter_queryset(FixedCostLogic.get_fixed_costs(scope))
        return Response({
            'success': True,
            'monthly_total': FixedCostLogic.monthly_total(scope),
            'fixed_costs': self.get_serializer(queryset, many=True).data
        })

    def perform_create(self, serializer):
        cost = serializer.save(user=self.request.user)
        logger.info(f"Fixed cost {cost.id} '{cost.name}' added to store {cost.store_id}")
