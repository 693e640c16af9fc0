# expenses/business_logic.py
import logging
from collections import defaultdict

from django.db.models import Sum
from django.utils import timezone

from core.utils import won

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = '필수 정보가 누락되었습니다.'

# Purchase pattern thresholds
MIN_EXPENSES = 5
MIN_VISITS = 3
ALERT_RATIO = 1.8
CRITICAL_RATIO = 2.5
MIN_DAYS_SINCE = 2


class ExpenseLogic:
    """Manual expense entry and per-store expense summaries"""

    @staticmethod
    def submit_manual_expense(store, user, date, amount, merchant_name,
                              category=None, image_url=''):
        from .models import ExpenseRecord, DEFAULT_CATEGORY

        if not amount or amount <= 0 or not merchant_name or not date:
            return {'success': False, 'error': MISSING_FIELDS_MESSAGE}

        try:
            expense = ExpenseRecord.objects.create(
                store=store,
                user=user,
                date=date,
                amount=amount,
                merchant_name=merchant_name.strip(),
                category=category or DEFAULT_CATEGORY,
                image_url=image_url or ''
            )
        except Exception as e:
            logger.error(f"Error saving expense for store {store.id}: {str(e)}", exc_info=True)
            return {'success': False, 'error': f'지출 저장 실패: {str(e)}'}

        logger.info(f"Expense {expense.id} stored: store={store.id} {date} {amount}")
        return {'success': True, 'expense_id': expense.id}

    @staticmethod
    def get_expenses(scope, start=None, end=None):
        from .models import ExpenseRecord

        queryset = scope.apply(ExpenseRecord.objects.all())
        if start:
            queryset = queryset.filter(date__gte=start)
        if end:
            queryset = queryset.filter(date__lte=end)
        return queryset

    @staticmethod
    def summarize(expenses):
        """Total plus per-category totals, largest first"""
        rows = expenses.values('category').annotate(
            total=Sum('amount')).order_by('-total', 'category')
        total = sum(row['total'] for row in rows)

        categories = [{
            'category': row['category'] or '미분류',
            'amount': row['total'],
            'share_percent': won(row['total'] / total * 100) if total else 0
        } for row in rows]

        return {
            'total_amount': total,
            'top_category': categories[0]['category'] if categories else None,
            'by_category': categories
        }


class PurchasePatternAnalyzer:
    """
    Spots merchants that are overdue compared with their usual visit rhythm,
    e.g. a wholesale market visited every 3 days but not seen for a week.
    """

    @staticmethod
    def analyze(expenses, today=None):
        """
        expenses: iterable of objects/dicts with merchant_name and date.
        Returns alert dicts sorted by how overdue the merchant is.
        """
        expenses = list(expenses)
        if len(expenses) < MIN_EXPENSES:
            return []

        today = today or timezone.localdate()

        visits = defaultdict(list)
        for expense in expenses:
            merchant = _field(expense, 'merchant_name')
            visits[merchant].append(_field(expense, 'date'))

        alerts = []
        for merchant, dates in visits.items():
            if len(dates) < MIN_VISITS:
                continue

            dates.sort(reverse=True)
            intervals = [(dates[i] - dates[i + 1]).days
                         for i in range(len(dates) - 1)]
            avg_interval = sum(intervals) / len(intervals)
            days_since = (today - dates[0]).days

            if days_since > avg_interval * ALERT_RATIO and days_since >= MIN_DAYS_SINCE:
                usual = won(avg_interval)
                alerts.append({
                    'merchant': merchant,
                    'avg_interval': usual,
                    'days_since_last': days_since,
                    'message': f"'{merchant}' 방문하신 지 {days_since}일 지났어요! (보통 {usual}일마다 방문)",
                    'severity': 'critical' if days_since > avg_interval * CRITICAL_RATIO else 'warning'
                })

        alerts.sort(key=lambda a: a['days_since_last'] / max(a['avg_interval'], 1), reverse=True)
        logger.info(f"Purchase pattern check: {len(visits)} merchants, {len(alerts)} alerts")
        return alerts


def _field(obj, name):
    return obj[name] if isinstance(obj, dict) else getattr(obj, name)


class FixedCostLogic:

    @staticmethod
    def get_fixed_costs(scope):
        from .models import FixedCost

        return scope.apply(FixedCost.objects.all())

    @staticmethod
    def monthly_total(scope):
        return FixedCostLogic.get_fixed_costs(scope).aggregate(
            total=Sum('amount'))['total'] or 0
