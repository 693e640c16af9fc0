# dashboard/api_views.py
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.utils import parse_date
from sales.settlement import MODES, SALES_MODE
from stores.permissions import IsStoreMember, get_member_store
from stores.scope import Scope
from .assistant import AIAssistant
from .business_logic import (
    CalendarAggregator, DashboardSummary, FinancialSnapshotCalculator,
    MonthlyReport, WeeklyInsightGenerator, get_daily_details
)
from .serializers import DailyDetailsSerializer, AssistantQuestionSerializer

logger = logging.getLogger(__name__)


def _bad_request(message):
    return Response({'success': False, 'error': message},
                    status=status.HTTP_400_BAD_REQUEST)


def _year_month(request):
    today = timezone.localdate()
    year = int(request.query_params.get('year', today.year))
    month = int(request.query_params.get('month', today.month))
    if not 1 <= month <= 12:
        raise ValueError('month out of range')
    return year, month


def _snapshot_or_zero(store, day):
    try:
        return FinancialSnapshotCalculator.get_snapshot(store, day), None
    except Exception as e:
        logger.error(f"Snapshot failed for store {store.id} on {day}: {str(e)}", exc_info=True)
        return dict(FinancialSnapshotCalculator.ZERO_SNAPSHOT), str(e)


class DashboardSummaryAPIView(APIView):
    """Today's sales, costs, channel breakdown, alerts and 7-day trend"""
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        return Response(DashboardSummary.get_summary(scope))


class CalendarAPIView(APIView):
    """
    Per-day totals for ?year=&month=, in 'sales' (transaction date) or
    'cashflow' (settlement date) ?mode=.
    """
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        try:
            year, month = _year_month(request)
        except ValueError:
            return _bad_request('year and month must be valid integers')

        mode = request.query_params.get('mode', SALES_MODE)
        if mode not in MODES:
            return _bad_request(f"mode must be one of {', '.join(MODES)}")

        response = {'success': True, 'year': year, 'month': month, 'mode': mode}
        try:
            response['days'] = CalendarAggregator.get_monthly_aggregate(year, month, scope, mode)
        except Exception as e:
            logger.error(f"Calendar failed for {year}-{month} ({mode}, {scope}): {str(e)}", exc_info=True)
            response.update({'success': False, 'error': str(e), 'days': {}})
        return Response(response)


class DailyDetailsAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        try:
            day = parse_date(request.query_params.get('date'), timezone.localdate())
        except ValueError:
            return _bad_request('date must be YYYY-MM-DD')

        details = DailyDetailsSerializer(get_daily_details(scope, day)).data
        return Response({'success': True, 'date': day.isoformat(), **details})


class FinancialSnapshotAPIView(APIView):
    """
    Revenue, labor, expenses, fixed costs and margin for one store and day.
    A failed calculation still answers with a zeroed snapshot.
    """
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        store = get_member_store(request.user, request.query_params.get('store_id'))
        try:
            day = parse_date(request.query_params.get('date'), timezone.localdate())
        except ValueError:
            return _bad_request('date must be YYYY-MM-DD')

        snapshot, error = _snapshot_or_zero(store, day)
        response = {'success': error is None, 'date': day.isoformat(), **snapshot}
        if error:
            response['error'] = error
        return Response(response)


class WeeklyInsightAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        store = get_member_store(request.user, request.query_params.get('store_id'))
        result = WeeklyInsightGenerator.generate(store)
        if not result['success']:
            return Response(result, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(result)


class MonthlyReportAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        scope = Scope.from_request(request)
        try:
            year, month = _year_month(request)
        except ValueError:
            return _bad_request('year and month must be valid integers')

        try:
            report = MonthlyReport.build(year, month, scope)
        except Exception as e:
            logger.error(f"Monthly report error {year}-{month}: {str(e)}", exc_info=True)
            return Response({
                'success': False,
                'error': 'Failed to build monthly report',
                'details': str(e)
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({'success': True, **report})


class DailyBriefingAPIView(APIView):
    """
    AI briefing over today's snapshot. The snapshot is always returned,
    the text falls back to a fixed message when generation fails.
    """
    permission_classes = [IsAuthenticated, IsStoreMember]

    def get(self, request):
        store = get_member_store(request.user, request.query_params.get('store_id'))
        try:
            day = parse_date(request.query_params.get('date'), timezone.localdate())
        except ValueError:
            return _bad_request('date must be YYYY-MM-DD')

        snapshot, _ = _snapshot_or_zero(store, day)
        briefing = AIAssistant.daily_briefing({
            'store': store.name,
            'date': day.isoformat(),
            'snapshot': snapshot
        })

        return Response({
            'success': True,
            'date': day.isoformat(),
            'snapshot': snapshot,
            'briefing': briefing['text'],
            'fallback': briefing['fallback']
        })


class AssistantAPIView(APIView):
    """Chat with the assistant about the current dashboard numbers"""
    permission_classes = [IsAuthenticated, IsStoreMember]

    def post(self, request):
        serializer = AssistantQuestionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        scope = Scope.from_request(request)
        context = dict(serializer.validated_data.get('context') or {})
        context['dashboard'] = DashboardSummary.get_summary(scope)

        reply = AIAssistant.ask(serializer.validated_data['message'], context)
        return Response({'success': True, **reply})
