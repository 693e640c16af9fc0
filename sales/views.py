# sales/views.py
import logging

from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import UnrecognizedInput
from core.utils import parse_date
from stores.permissions import IsStoreMember, get_member_store
from stores.scope import Scope
from .business_logic import SalesLogic
from .models import SaleRecord
from .serializers import (
    SaleRecordSerializer, SaleSubmitSerializer, SaleImportSerializer
)

logger = logging.getLogger(__name__)


def _parse_date_param(request, name, default=None):
    try:
        return parse_date(request.query_params.get(name), default), None
    except ValueError:
        return None, Response({
            'success': False,
            'error': f'{name} must be YYYY-MM-DD'
        }, status=status.HTTP_400_BAD_REQUEST)


class SaleListCreateAPIView(APIView):
    """
    GET: sales for ?date= (default today) or ?start_date=&end_date=,
    for one store or every store (?store_id=ALL).
    POST: record a sale.
    """
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)

        start, error = _parse_date_param(request, 'start_date')
        if error:
            return error
        end, error = _parse_date_param(request, 'end_date')
        if error:
            return error

        if start and end:
            sales = SalesLogic.get_sales_in_range(scope, start, end)
        else:
            day, error = _parse_date_param(
                request, 'date', timezone.localdate())
            if error:
                return error
            sales = SalesLogic.get_sales_for_date(scope, day)

        data = SaleRecordSerializer(sales, many=True).data
        return Response({
            'success': True,
            'count': len(data),
            'total_amount': sum(s['amount'] for s in data),
            'sales': data
        })

    def post(self, request):
        serializer = SaleSubmitSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        store = get_member_store(request.user, data['store_id'])

        result = SalesLogic.submit_sale(
            store=store,
            user=request.user,
            date=data['date'],
            amount=data['amount'],
            sale_type=data.get('type') or 'manual',
            items=data.get('items')
        )

        if not result['success']:
            return Response(result, status=status.HTTP_400_BAD_REQUEST)
        return Response(result, status=status.HTTP_201_CREATED)


class SaleDetailAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get_object(self, request, pk):
        sale = get_object_or_404(SaleRecord, pk=pk)
        self.check_object_permissions(request, sale)
        return sale

    def get(self, request, pk):
        return Response(SaleRecordSerializer(self.get_object(request, pk)).data)

    def delete(self, request, pk):
        SalesLogic.delete_sale(self.get_object(request, pk))
        return Response({'success': True}, status=status.HTTP_200_OK)


class SaleImportAPIView(APIView):
    """
    Save records extracted from an uploaded receipt or spreadsheet.
    An extraction with no usable rows is answered with 422.
    """
    permission_classes = [IsAuthenticated, IsStoreMember]

    def post(self, request):
        serializer = SaleImportSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        store = get_member_store(request.user, data['store_id'])

        try:
            result = SalesLogic.import_records(store, request.user, data['records'])
        except UnrecognizedInput as e:
            logger.warning(f"Nothing importable for store {store.id} ({len(data['records'])} rows)")
            return Response({
                'success': False,
                'error': e.message
            }, status=status.HTTP_422_UNPROCESSABLE_ENTITY)

        return Response(result, status=status.HTTP_201_CREATED)


class SalesStatsAPIView(APIView):
    """
    Reference figures for a date (?date=, ?store_id=). With ?amount= the
    response also carries a short reaction to that amount.
    """
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        day, error = _parse_date_param(request, 'date', timezone.localdate())
        if error:
            return error

        stats = SalesLogic.get_sales_stats(scope, day)

        amount = request.query_params.get('amount')
        if amount:
            try:
                stats['message'] = SalesLogic.describe_amount(int(amount), stats)
            except ValueError:
                return Response({
                    'success': False,
                    'error': 'amount must be an integer'
                }, status=status.HTTP_400_BAD_REQUEST)

        return Response({'success': True, 'date': day.isoformat(), **stats})
