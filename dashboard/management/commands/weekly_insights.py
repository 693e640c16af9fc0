# dashboard/management/commands/weekly_insights.py
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from dashboard.business_logic import FinancialSnapshotCalculator, WeeklyInsightGenerator
from stores.models import Store


class Command(BaseCommand):
    help = 'Print daily snapshots and this week\'s insight for every store'

    def add_arguments(self, parser):
        parser.add_argument('--days', type=int, default=7,
                            help='Number of past days to snapshot')
        parser.add_argument('--store', type=int, help='Only this store id')

    def handle(self, *args, **options):
        stores = Store.objects.all()
        if options.get('store'):
            stores = stores.filter(id=options['store'])

        today = timezone.localdate()

        for store in stores:
            self.stdout.write(f"{store.name}")

            for day_offset in range(options['days']):
                target_date = today - timedelta(days=day_offset)
                try:
                    snapshot = FinancialSnapshotCalculator.get_snapshot(store, target_date)
                except Exception as e:
                    self.stdout.write(f"  ✗ {target_date}: {e}")
                    continue
                self.stdout.write(
                    f"  ✓ {target_date}: {snapshot['revenue']:,}원 revenue, "
                    f"{snapshot['net_profit']:,}원 net")

            insight = WeeklyInsightGenerator.generate(store, today)
            if insight['success']:
                self.stdout.write(f"  {insight['data']['week_label']}: {insight['data']['summary']}")
            else:
                self.stdout.write(self.style.WARNING(f"  insight failed: {insight['error']}"))

        self.stdout.write(self.style.SUCCESS('Weekly insights complete!'))
