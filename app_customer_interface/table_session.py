"""
Main order / add-on resolution for a table.

A table's session is the set of its non-paid orders. The oldest of them is the
main order; every other one is an add-on (reorder). Nothing here is stored, the
session is recomputed from order payloads on every read so the customer page,
the kitchen board and the owner overview all agree.
"""
from dataclasses import dataclass, field
from datetime import datetime

from django.utils.dateparse import parse_datetime

from .order_status import is_active


def created_at(order):
    value = order['created_at']
    if isinstance(value, datetime):
        return value
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid created_at value: {value!r}")
    return parsed


def _age_key(order):
    return created_at(order), order['id']


@dataclass
class TableSession:
    table: str
    main: dict = None
    add_ons: list = field(default_factory=list)

    @property
    def has_main_order(self):
        return self.main is not None

    @property
    def orders(self):
        if self.main is None:
            return []
        return [self.main] + self.add_ons

    def as_dict(self):
        return {
            'table': self.table,
            'hasMainOrder': self.has_main_order,
            'mainOrderId': self.main['id'] if self.main else None,
            'main': self.main,
            'addOns': self.add_ons,
        }


def active_orders(orders):
    return [order for order in orders if is_active(order['status'])]


def resolve_sessions(orders):
    """Group non-paid orders by table and pick each table's main order.

    Returns ``{table: TableSession}`` for tables with at least one non-paid order.
    The result does not depend on the order of ``orders``.
    """
    by_table = {}
    for order in active_orders(orders):
        by_table.setdefault(order['table'], []).append(order)

    sessions = {}
    for table, table_orders in by_table.items():
        table_orders.sort(key=_age_key)
        sessions[table] = TableSession(table=table, main=table_orders[0], add_ons=table_orders[1:])
    return sessions


def resolve_table_session(orders, table):
    table_orders = [order for order in orders if order['table'] == table]
    return resolve_sessions(table_orders).get(table, TableSession(table=table))


def has_main_order(orders, table):
    return resolve_table_session(orders, table).has_main_order


def order_kind(orders, order_id):
    """'main' or 'add_on' for an active order, None if the order is paid or unknown."""
    for session in resolve_sessions(orders).values():
        if session.main['id'] == order_id:
            return 'main'
        if any(order['id'] == order_id for order in session.add_ons):
            return 'add_on'
    return None
