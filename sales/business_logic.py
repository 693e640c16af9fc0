# sales/business_logic.py
import logging
from collections import OrderedDict
from datetime import timedelta

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Max, Sum

from core.exceptions import UnrecognizedInput
from core.utils import parse_date, won

logger = logging.getLogger(__name__)

FALLBACK_TYPE = 'manual'
CHANNEL_FALLBACK = 'CHANNEL_FALLBACK'


class SalesLogic:
    """
    Recording sales and the per-day statistics shown while typing a new one
    """

    @staticmethod
    def _insert_sale(store, user, date, amount, sale_type, items):
        from .models import SaleRecord, SaleItem

        with transaction.atomic():
            record = SaleRecord(
                store=store, user=user, date=date, amount=amount, type=sale_type)
            record.full_clean()
            record.save()

            for item in items or []:
                SaleItem.objects.create(
                    sale=record,
                    name=item['name'],
                    quantity=item.get('quantity') or 1,
                    unit_price=item.get('unit_price') or 0,
                    total_price=item.get('total_price') or 0
                )

        return record

    @staticmethod
    def submit_sale(store, user, date, amount, sale_type='manual', items=None):
        """
        Store a sale with its channel type. If the channel is rejected by the
        model, store it once more as 'manual' and report the downgrade through
        the 'warning' and 'stored_type' keys.
        """
        if not amount or amount <= 0 or not date:
            return {'success': False, 'error': 'Invalid data'}

        try:
            record = SalesLogic._insert_sale(
                store, user, date, amount, sale_type, items)
            logger.info(
                f"Sale {record.id} stored: store={store.id} {date} {amount} ({sale_type})")
            return {
                'success': True,
                'sale_id': record.id,
                'stored_type': record.type,
                'warning': None
            }
        except (ValidationError, IntegrityError) as e:
            logger.warning(
                f"Sale rejected with type '{sale_type}' for store {store.id}: {e}")
            if sale_type == FALLBACK_TYPE:
                return {'success': False, 'error': str(e)}

        try:
            record = SalesLogic._insert_sale(
                store, user, date, amount, FALLBACK_TYPE, items)
        except (ValidationError, IntegrityError) as e:
            logger.error(
                f"Sale fallback to '{FALLBACK_TYPE}' failed for store {store.id}: {e}",
                exc_info=True)
            return {'success': False, 'error': 'Failed to add sale (even as manual)'}

        logger.warning(
            f"Sale {record.id} stored as '{FALLBACK_TYPE}' instead of '{sale_type}'")
        return {
            'success': True,
            'sale_id': record.id,
            'stored_type': FALLBACK_TYPE,
            'warning': CHANNEL_FALLBACK
        }

    @staticmethod
    def get_sales_for_date(scope, date):
        from .models import SaleRecord

        return scope.apply(SaleRecord.objects.filter(date=date)).select_related(
            'store').prefetch_related('items')

    @staticmethod
    def get_sales_in_range(scope, start, end):
        from .models import SaleRecord

        return scope.apply(SaleRecord.objects.filter(
            date__gte=start, date__lte=end)).prefetch_related('items')

    @staticmethod
    def merge_extracted(records):
        """
        Collapse extracted rows so each (date, platform) pair becomes one sale.
        Rows without a usable date or a positive amount are dropped.
        """
        from .models import SaleRecord

        known_types = {value for value, _ in SaleRecord.TYPE_CHOICES}
        merged = OrderedDict()

        for row in records:
            try:
                date = parse_date(row.get('date'))
                amount = won(row.get('amount') or 0)
            except (TypeError, ValueError, ArithmeticError):
                logger.warning(f"Skipping unreadable extracted row: {row}")
                continue
            if not date or amount <= 0:
                continue

            platform = (row.get('platform') or '').strip().lower()
            sale_type = platform if platform in known_types else 'excel'

            bucket = merged.setdefault((date, sale_type), {
                'date': date, 'type': sale_type, 'amount': 0, 'items': []})
            bucket['amount'] += amount
            bucket['items'].extend(row.get('items') or [])

        return list(merged.values())

    @staticmethod
    def import_records(store, user, records):
        """
        Save the rows produced by the receipt/spreadsheet extractor.
        Raises UnrecognizedInput when nothing usable came out of the file.
        """
        merged = SalesLogic.merge_extracted(records or [])
        if not merged:
            logger.warning(f"Import for store {store.id} produced no records")
            raise UnrecognizedInput()

        with transaction.atomic():
            created = [
                SalesLogic._insert_sale(
                    store, user, row['date'], row['amount'], row['type'], row['items'])
                for row in merged
            ]

        logger.info(
            f"Imported {len(created)} sales for store {store.id} from {len(records)} rows")
        return {
            'success': True,
            'created': len(created),
            'total_amount': sum(r.amount for r in created),
            'sale_ids': [r.id for r in created]
        }

    @staticmethod
    def delete_sale(sale):
        logger.info(f"Deleting sale {sale.id} of store {sale.store_id}")
        sale.delete()

    @staticmethod
    def get_sales_stats(scope, date):
        """
        Reference figures for a day's entry:
        average of the same weekday over the last four weeks, the largest
        single record ever, and last week's same-day total.
        """
        from .models import SaleRecord

        past_days = [date - timedelta(weeks=i) for i in range(1, 5)]
        history = scope.apply(SaleRecord.objects.filter(date__in=past_days))

        amounts = list(history.values_list('amount', flat=True))
        average = won(sum(amounts) / len(amounts)) if amounts else 0

        last_week = history.filter(date=past_days[0]).aggregate(
            total=Sum('amount'))['total'] or 0

        max_record = scope.apply(SaleRecord.objects.all()).aggregate(
            top=Max('amount'))['top'] or 0

        return {
            'average': average,
            'max_record': max_record,
            'last_week_same_day': last_week
        }

    @staticmethod
    def describe_amount(amount, stats):
        """Short reaction to a typed amount, compared against get_sales_stats()"""
        average = stats['average']
        max_record = stats['max_record']
        last_week = stats['last_week_same_day']

        if not amount:
            return None

        if average > 100000 and amount > average * 3:
            return {
                'type': 'warning',
                'text': f"평소보다 3배나 높아요! ({average:,}원). 0을 하나 더 치셨나요?"
            }
        if max_record > 0 and amount > max_record:
            return {
                'type': 'celebrate',
                'text': f"와우! 역대 최고 매출 갱신입니다! 🎉 ({max_record:,}원 돌파)"
            }
        if last_week > 0 and amount > last_week:
            diff = amount - last_week
            pct = won(diff / last_week * 100)
            return {
                'type': 'celebrate',
                'text': f"지난주 같은 요일보다 {pct}% 더 높아요! (+{diff:,}원)"
            }
        if average > 0 and amount > average:
            return {
                'type': 'info',
                'text': f"평균({average:,}원)을 넘겼습니다! 나이스! 👍"
            }
        return None
