# menu/business_logic.py
import logging
from collections import OrderedDict

from core.conf import get_setting

logger = logging.getLogger(__name__)

STAR = 'star'
CASHCOW = 'cashcow'
GEM = 'gem'
DOG = 'dog'


def _value(item, name):
    return item[name] if isinstance(item, dict) else getattr(item, name)


class MenuBusinessLogic:
    """
    BCG-style menu matrix: sales volume against profit, split at the
    set's arithmetic means.
    """

    @staticmethod
    def classify(sale_items, cost_lookup):
        """
        Aggregate sale line items by menu name and place each in a quadrant.

        sale_items: dicts/objects with name, quantity and total_price.
        cost_lookup: {name: unit cost}. Names missing from it get an
        estimated cost of DEFAULT_COST_RATIO of the average unit price,
        flagged with cost_estimated=True.

        Returns aggregates sorted by revenue, highest first. Empty input
        gives an empty list.
        """
        totals = OrderedDict()
        for item in sale_items:
            name = _value(item, 'name')
            bucket = totals.setdefault(name, {'quantity': 0, 'revenue': 0})
            bucket['quantity'] += _value(item, 'quantity') or 0
            bucket['revenue'] += _value(item, 'total_price') or 0

        ratio = get_setting('DEFAULT_COST_RATIO')
        aggregates = []

        for name, stats in totals.items():
            quantity = stats['quantity']
            revenue = stats['revenue']
            if quantity <= 0:
                logger.warning(f"Skipping '{name}': no quantity sold")
                continue

            avg_unit_price = revenue / quantity
            estimated = name not in cost_lookup
            cost = avg_unit_price * ratio if estimated else cost_lookup[name]
            total_profit = (avg_unit_price - cost) * quantity

            aggregates.append({
                'name': name,
                'quantity': quantity,
                'revenue': revenue,
                'avg_unit_price': avg_unit_price,
                'cost': cost,
                'cost_estimated': estimated,
                'total_profit': total_profit,
                'margin_percent': total_profit / revenue * 100 if revenue else 0,
                'quadrant': DOG
            })

        if not aggregates:
            return []

        mean_quantity, mean_profit = MenuBusinessLogic.means(aggregates)

        for aggregate in aggregates:
            high_volume = aggregate['quantity'] >= mean_quantity
            high_profit = aggregate['total_profit'] >= mean_profit

            if high_volume and high_profit:
                aggregate['quadrant'] = STAR
            elif high_volume:
                aggregate['quadrant'] = CASHCOW
            elif high_profit:
                aggregate['quadrant'] = GEM
            else:
                aggregate['quadrant'] = DOG

        aggregates.sort(key=lambda a: a['revenue'], reverse=True)
        return aggregates

    @staticmethod
    def means(aggregates):
        """Arithmetic mean quantity and mean total profit"""
        if not aggregates:
            return 0, 0
        count = len(aggregates)
        return (sum(a['quantity'] for a in aggregates) / count,
                sum(a['total_profit'] for a in aggregates) / count)

    @staticmethod
    def get_cost_lookup(store):
        from .models import MenuCost

        return dict(MenuCost.objects.filter(store=store).values_list('name', 'cost'))

    @staticmethod
    def get_sale_items(store, start=None, end=None):
        from sales.models import SaleItem

        items = SaleItem.objects.filter(sale__store=store)
        if start:
            items = items.filter(sale__date__gte=start)
        if end:
            items = items.filter(sale__date__lte=end)
        return items.values('name', 'quantity', 'total_price')

    @staticmethod
    def get_menu_strategy(store, start=None, end=None):
        """Classified menu for a store, with the set averages"""
        try:
            aggregates = MenuBusinessLogic.classify(
                MenuBusinessLogic.get_sale_items(store, start, end),
                MenuBusinessLogic.get_cost_lookup(store))
            mean_quantity, mean_profit = MenuBusinessLogic.means(aggregates)

            logger.info(f"Menu strategy for store {store.id}: {len(aggregates)} items")
            return {
                'success': True,
                'items': aggregates,
                'averages': {
                    'quantity': mean_quantity,
                    'profit': mean_profit
                },
                'estimated_count': sum(1 for a in aggregates if a['cost_estimated'])
            }
        except Exception as e:
            logger.error(f"Error building menu strategy for store {store.id}: {str(e)}", exc_info=True)
            return {
                'success': False,
                'error': str(e),
                'items': [],
                'averages': {'quantity': 0, 'profit': 0},
                'estimated_count': 0
            }

    @staticmethod
    def upsert_cost(store, name, cost, price=None, category=None):
        """Create or update the unit cost for a menu name"""
        from .models import MenuCost

        defaults = {'cost': cost}
        if price is not None:
            defaults['price'] = price
        if category:
            defaults['category'] = category

        menu_cost, created = MenuCost.objects.update_or_create(
            store=store, name=name.strip(), defaults=defaults)

        logger.info(
            f"Menu cost {'created' if created else 'updated'}: {menu_cost.name} = {cost} (store {store.id})")
        return menu_cost, created
