# dashboard/business_logic.py
import logging
from collections import defaultdict
from datetime import date as date_cls, timedelta

from django.db.models import Sum
from django.utils import timezone

from core.conf import get_setting
from core.utils import (
    won, date_key, month_bounds, previous_month, week_bounds, day_bounds
)
from sales.settlement import shift, SALES_MODE

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ['월', '화', '수', '목', '금', '토', '일']


class CalendarAggregator:
    """
    Per-day sales and expense totals for a month view.
    """

    @staticmethod
    def get_window(year, month):
        """
        Sales fetch window: from CALENDAR_LOOKBACK_DAY of the previous
        month through the last day of the month, so settlements delayed
        into this month are caught. Delays longer than the look-back are
        not covered.
        """
        prev_year, prev_month = previous_month(year, month)
        start = date_cls(prev_year, prev_month, get_setting('CALENDAR_LOOKBACK_DAY'))
        return start, month_bounds(year, month)[1]

    @staticmethod
    def aggregate(sales, expenses, year, month, mode=SALES_MODE):
        """
        Bucket records by effective date.

        sales: iterable of (date, amount, type) rows from the fetch window.
        expenses: iterable of (date, amount) rows, never shifted.
        In 'sales' mode only sales originally dated inside the month count.
        In 'cashflow' mode every shifted date is kept, including ones that
        land outside the month.
        """
        buckets = {}

        def bucket(day):
            return buckets.setdefault(date_key(day), {'sales': 0, 'expense': 0})

        for day, amount, channel in sales:
            if mode == SALES_MODE and (day.year, day.month) != (year, month):
                continue
            bucket(shift(day, channel, mode))['sales'] += amount

        for day, amount in expenses:
            bucket(day)['expense'] += amount

        return buckets

    @staticmethod
    def get_monthly_aggregate(year, month, scope, mode=SALES_MODE):
        from sales.models import SaleRecord
        from expenses.models import ExpenseRecord

        window_start, window_end = CalendarAggregator.get_window(year, month)
        month_start, month_end = month_bounds(year, month)

        sales = scope.apply(SaleRecord.objects.filter(
            date__gte=window_start, date__lte=window_end
        )).values_list('date', 'amount', 'type')

        expenses = scope.apply(ExpenseRecord.objects.filter(
            date__gte=month_start, date__lte=month_end
        )).values_list('date', 'amount')

        result = CalendarAggregator.aggregate(sales, expenses, year, month, mode)
        logger.info(f"Calendar {year}-{month:02d} ({mode}, {scope}): {len(result)} active days")
        return result


def get_daily_details(scope, day):
    """Sales, expenses and timeline posts of one day"""
    from sales.business_logic import SalesLogic
    from expenses.business_logic import ExpenseLogic
    from timeline.business_logic import TimelineLogic

    return {
        'sales': SalesLogic.get_sales_for_date(scope, day),
        'expenses': ExpenseLogic.get_expenses(scope, day, day),
        'posts': TimelineLogic.get_daily_posts(scope, day)
    }


class FinancialSnapshotCalculator:
    """
    One day's operating result for a store: revenue against labor,
    expenses and the pro-rated share of monthly fixed costs.
    """

    ZERO_SNAPSHOT = {
        'revenue': 0,
        'labor_cost': 0,
        'expense_cost': 0,
        'fixed_cost_daily': 0,
        'net_profit': 0,
        'profit_margin': 0,
        'rph': 0,
        'total_labor_hours': 0,
        'expense_breakdown': {},
    }

    @staticmethod
    def labor(work_logs):
        """
        (labor cost, hours) for closed logs. Each log's cost is rounded to
        whole won before summing.
        """
        cost = 0
        hours = 0
        for log in work_logs:
            if not log.clock_out:
                continue
            log_hours = (log.clock_out - log.clock_in).total_seconds() / 3600
            hours += log_hours
            cost += won(log_hours * log.wage_snapshot)
        return cost, hours

    @staticmethod
    def compute(revenue, expenses, work_logs, monthly_fixed):
        """
        Pure part of the snapshot.
        expenses: iterable of (amount, category) pairs.
        """
        expense_cost = 0
        breakdown = defaultdict(int)
        for amount, category in expenses:
            expense_cost += amount
            breakdown[category or 'Uncategorized'] += amount

        labor_cost, labor_hours = FinancialSnapshotCalculator.labor(work_logs)
        fixed_daily = won(monthly_fixed / get_setting('FIXED_COST_DAYS_PER_MONTH'))

        net_profit = revenue - (labor_cost + expense_cost + fixed_daily)

        return {
            'revenue': revenue,
            'labor_cost': labor_cost,
            'expense_cost': expense_cost,
            'fixed_cost_daily': fixed_daily,
            'net_profit': net_profit,
            'profit_margin': net_profit / revenue * 100 if revenue > 0 else 0,
            'rph': won(revenue / labor_hours) if labor_hours > 0 else 0,
            'total_labor_hours': labor_hours,
            'expense_breakdown': dict(breakdown),
        }

    @staticmethod
    def get_snapshot(store, day):
        """
        Snapshot for a store and date. Database errors propagate; callers
        fall back to ZERO_SNAPSHOT.
        """
        from sales.models import SaleRecord
        from expenses.models import ExpenseRecord, FixedCost
        from staff.models import WorkLog

        revenue = SaleRecord.objects.filter(
            store=store, date=day).aggregate(total=Sum('amount'))['total'] or 0

        expenses = ExpenseRecord.objects.filter(
            store=store, date=day).values_list('amount', 'category')

        # Logs belong to their clock-in day, even when they run past midnight
        start, end = day_bounds(day)
        work_logs = WorkLog.objects.filter(
            store=store, clock_in__gte=start, clock_in__lt=end,
            clock_out__isnull=False)

        monthly_fixed = FixedCost.objects.filter(
            store=store).aggregate(total=Sum('amount'))['total'] or 0

        snapshot = FinancialSnapshotCalculator.compute(
            revenue, expenses, work_logs, monthly_fixed)
        logger.info(
            f"Snapshot store={store.id} {day}: revenue={revenue} net={snapshot['net_profit']}")
        return snapshot


class WeeklyInsightGenerator:
    """
    This week against last week (Sunday to Saturday) plus menu margin
    health, turned into a short rule-based report.
    """

    @staticmethod
    def sales_direction(change_percent):
        dead_zone = get_setting('TREND_DEAD_ZONE_PERCENT')
        if change_percent > dead_zone:
            return 'up'
        if change_percent < -dead_zone:
            return 'down'
        return 'stable'

    @staticmethod
    def change_percent(this_week, last_week):
        if last_week <= 0:
            return 0
        return (this_week - last_week) / last_week * 100

    @staticmethod
    def margin_score(avg_margin, danger_count):
        return min(100, max(0, avg_margin * 2 - danger_count * 10))

    @staticmethod
    def week_label(start, end):
        return f"{start.month}/{start.day} - {end.month}/{end.day}"

    @staticmethod
    def build_report(this_week_total, last_week_total, menu_items):
        """
        Everything except the dates. menu_items are classifier aggregates.
        """
        change = WeeklyInsightGenerator.change_percent(this_week_total, last_week_total)
        direction = WeeklyInsightGenerator.sales_direction(change)

        danger_threshold = get_setting('DANGER_MARGIN_PERCENT')
        if menu_items:
            avg_margin = sum(m['margin_percent'] for m in menu_items) / len(menu_items)
            danger_count = sum(1 for m in menu_items if m['margin_percent'] < danger_threshold)
            top = max(menu_items, key=lambda m: m['total_profit'])
            top_performer = {'name': top['name'], 'profit': won(top['total_profit'])}
        else:
            avg_margin = 0
            danger_count = 0
            top_performer = {'name': '', 'profit': 0}

        score = WeeklyInsightGenerator.margin_score(avg_margin, danger_count)
        top_name = top_performer['name']

        key_insights = []
        recommendations = []

        if direction == 'up':
            key_insights.append({'icon': '📈', 'text': f"이번주 매출이 지난주 대비 {change:.1f}% 상승했습니다."})
        elif direction == 'down':
            key_insights.append({'icon': '📉', 'text': f"이번주 매출이 지난주 대비 {abs(change):.1f}% 하락했습니다."})
            recommendations.append({'action': '프로모션이나 특가 메뉴를 고려해보세요.', 'priority': 'medium'})

        if danger_count > 0:
            key_insights.append({'icon': '🔥', 'text': f"{danger_count}개 메뉴의 마진율이 {danger_threshold}% 미만으로 위험합니다."})
            recommendations.append({'action': '마진 위험 메뉴의 원가를 재검토하세요.', 'priority': 'high'})

        if avg_margin >= 40:
            key_insights.append({'icon': '✨', 'text': f"평균 마진율 {avg_margin:.1f}%로 양호한 수준입니다."})

        if top_name:
            key_insights.append({'icon': '🌟', 'text': f"{top_name}이(가) 가장 높은 수익을 내고 있습니다."})

        if not recommendations:
            recommendations.append({'action': '현재 전략을 유지하면서 원가 변동을 모니터링하세요.', 'priority': 'low'})

        if this_week_total == 0 and last_week_total == 0:
            summary = '아직 이번주 매출 데이터가 없습니다. 매출을 입력하면 더 정확한 분석이 가능해요!'
        elif direction == 'up' and score >= 70:
            praise = f" 특히 {top_name}이(가) 효자 역할을 톡톡히 하고 있네요." if top_name else ''
            summary = f"사장님, 이번주는 정말 좋은 한 주입니다! 매출도 상승하고 마진 건강도도 양호해요.{praise} 현재 전략을 유지하세요!"
        elif direction == 'down' and danger_count > 0:
            summary = (f"사장님, 이번주는 좀 어려운 한 주네요. 매출이 하락했고 {danger_count}개 메뉴의 마진도 위험합니다. "
                       "원가 절감과 프로모션을 함께 고려해보시는 게 좋겠어요.")
        elif danger_count > 0:
            summary = f"매출은 안정적이지만 {danger_count}개 메뉴의 마진이 낮아요. 메뉴 전략가에서 해당 메뉴들을 확인해보세요!"
        else:
            summary = f"이번주 매장 상태는 전반적으로 안정적입니다. 평균 마진율 {avg_margin:.1f}%를 유지하고 있어요."

        return {
            'sales_trend': {
                'value': this_week_total,
                'change_percent': change,
                'direction': direction
            },
            'margin_health': {
                'score': won(score),
                'avg_margin': avg_margin,
                'danger_count': danger_count
            },
            'top_performer': top_performer,
            'summary': summary,
            'key_insights': key_insights,
            'recommendations': recommendations
        }

    @staticmethod
    def generate(store, today=None):
        from sales.models import SaleRecord
        from menu.business_logic import MenuBusinessLogic

        try:
            today = today or timezone.localdate()
            start, end = week_bounds(today)
            last_start, last_end = start - timedelta(days=7), start - timedelta(days=1)

            sales = SaleRecord.objects.filter(store=store)
            this_week = sales.filter(date__gte=start, date__lte=end).aggregate(
                total=Sum('amount'))['total'] or 0
            last_week = sales.filter(date__gte=last_start, date__lte=last_end).aggregate(
                total=Sum('amount'))['total'] or 0

            menu_items = MenuBusinessLogic.classify(
                MenuBusinessLogic.get_sale_items(store, start, end),
                MenuBusinessLogic.get_cost_lookup(store))

            report = WeeklyInsightGenerator.build_report(this_week, last_week, menu_items)
            report['week_label'] = WeeklyInsightGenerator.week_label(start, end)

            logger.info(
                f"Weekly insight store={store.id} {report['week_label']}: {report['sales_trend']['direction']}")
            return {'success': True, 'data': report}

        except Exception as e:
            logger.error(f"Error generating weekly insight for store {store.id}: {str(e)}", exc_info=True)
            return {'success': False, 'error': str(e)}


class DashboardSummary:
    """Today's figures for the home dashboard"""

    @staticmethod
    def fixed_cost_alerts(fixed_costs, today):
        alerts = []
        horizon = get_setting('FIXED_COST_ALERT_DAYS')
        for cost in fixed_costs:
            diff = cost.day_of_month - today.day
            if 0 <= diff <= horizon:
                when = '오늘' if diff == 0 else f"{diff}일 뒤"
                alerts.append({
                    'message': f"{cost.name} {cost.amount:,}원 ({when}) 예정",
                    'type': 'cost',
                    'days_left': diff
                })
        return alerts

    @staticmethod
    def weekly_trend(sales, expenses, today):
        """Sales minus expenses for today and the six days before"""
        start = today - timedelta(days=6)
        days = {start + timedelta(days=i): {'sales': 0, 'expenses': 0}
                for i in range(7)}

        for day, amount in sales:
            if day in days:
                days[day]['sales'] += amount
        for day, amount in expenses:
            if day in days:
                days[day]['expenses'] += amount

        return [{
            'date': day.isoformat(),
            'label': WEEKDAY_LABELS[day.weekday()],
            'amount': totals['sales'] - totals['expenses'],
            'sales': totals['sales'],
            'expenses': totals['expenses']
        } for day, totals in days.items()]

    @staticmethod
    def get_summary(scope, today=None):
        from sales.models import SaleRecord
        from expenses.models import ExpenseRecord, FixedCost

        today = today or timezone.localdate()

        try:
            start = today - timedelta(days=6)
            week_sales = list(scope.apply(SaleRecord.objects.filter(
                date__gte=start, date__lte=today)).values_list('date', 'amount', 'type'))
            week_expenses = list(scope.apply(ExpenseRecord.objects.filter(
                date__gte=start, date__lte=today)).values_list('date', 'amount'))

            breakdown = defaultdict(int)
            total_sales = 0
            for day, amount, channel in week_sales:
                if day == today:
                    total_sales += amount
                    breakdown[channel or 'manual'] += amount

            today_expenses = sum(amount for day, amount in week_expenses if day == today)

            return {
                'success': True,
                'date': today.isoformat(),
                'sales': total_sales,
                'variable_cost': today_expenses,
                'net_income': total_sales - today_expenses,
                'breakdown': dict(breakdown),
                'alerts': DashboardSummary.fixed_cost_alerts(
                    scope.apply(FixedCost.objects.all()), today),
                'weekly_trend': DashboardSummary.weekly_trend(
                    [(d, a) for d, a, _ in week_sales], week_expenses, today),
                'is_aggregated': scope.is_all
            }

        except Exception as e:
            logger.error(f"Dashboard summary error ({scope}): {str(e)}", exc_info=True)
            return {
                'success': False,
                'error': str(e),
                'date': today.isoformat(),
                'sales': 0,
                'variable_cost': 0,
                'net_income': 0,
                'breakdown': {},
                'alerts': [],
                'weekly_trend': [],
                'is_aggregated': False
            }


class MonthlyReport:

    @staticmethod
    def build(year, month, scope):
        from sales.models import SaleRecord
        from expenses.models import ExpenseRecord, FixedCost

        first, last = month_bounds(year, month)

        sales = scope.apply(SaleRecord.objects.filter(
            date__gte=first, date__lte=last)).values_list('date', 'amount')
        expenses = scope.apply(ExpenseRecord.objects.filter(
            date__gte=first, date__lte=last)).values_list('amount', 'category')
        total_fixed = scope.apply(FixedCost.objects.all()).aggregate(
            total=Sum('amount'))['total'] or 0

        daily = defaultdict(int)
        for day, amount in sales:
            daily[day] += amount

        by_category = defaultdict(int)
        for amount, category in expenses:
            by_category[category or '기타'] += amount

        total_sales = sum(daily.values())
        total_expenses = sum(by_category.values())

        return {
            'year': year,
            'month': month,
            'total_sales': total_sales,
            'total_expenses': total_expenses,
            'total_fixed_cost': total_fixed,
            'net_income': total_sales - total_fixed - total_expenses,
            'expense_by_category': dict(by_category),
            'daily_sales': [{
                'date': (first + timedelta(days=i)).isoformat(),
                'amount': daily.get(first + timedelta(days=i), 0)
            } for i in range(last.day)]
        }
