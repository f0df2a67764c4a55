# app_customer_interface/billing.py
from dataclasses import dataclass, field
from decimal import Decimal

from .order_status import is_active
from .table_session import active_orders, created_at


@dataclass
class BillLine:
    name: str
    price: Decimal
    quantity: int = 0

    @property
    def total(self):
        return self.price * self.quantity

    def as_dict(self):
        return {
            'name': self.name,
            'price': str(self.price),
            'quantity': self.quantity,
            'total': str(self.total),
        }


@dataclass
class Bill:
    """Consolidated bill, one line per distinct (name, price)."""
    lines: dict = field(default_factory=dict)

    def add_item(self, name, price, quantity):
        price = Decimal(str(price))
        key = (name, price)
        line = self.lines.get(key)
        if line is None:
            line = self.lines[key] = BillLine(name=name, price=price)
        line.quantity += int(quantity)

    def merge(self, other):
        merged = Bill()
        for bill in (self, other):
            for line in bill.lines.values():
                merged.add_item(line.name, line.price, line.quantity)
        return merged

    @property
    def total(self):
        return sum((line.total for line in self.lines.values()), Decimal('0.00'))

    @property
    def is_empty(self):
        return not self.lines

    def as_dict(self):
        return {
            'lines': [line.as_dict() for line in self.lines.values()],
            'total': str(self.total),
        }


def aggregate_bill(orders):
    """Merge the items of every non-paid order into one bill.

    Orders are folded oldest first so line order follows the order in which
    items were first ordered.
    """
    bill = Bill()
    for order in sorted(active_orders(orders), key=lambda order: (created_at(order), order['id'])):
        for item in order['items']:
            bill.add_item(item['name'], item['price'], item['quantity'])
    return bill


def item_quantities(orders):
    """Total quantity per item name for the kitchen, most-ordered first."""
    totals = {}
    for order in orders:
        if not is_active(order['status']):
            continue
        for item in order['items']:
            totals[item['name']] = totals.get(item['name'], 0) + int(item['quantity'])
    return [
        {'name': name, 'quantity': quantity}
        for name, quantity in sorted(totals.items(), key=lambda entry: (-entry[1], entry[0]))
    ]
