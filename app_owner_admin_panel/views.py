# app_owner_admin_panel/views.py

from datetime import timedelta
from decimal import Decimal

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from app_customer_interface.billing import aggregate_bill
from app_customer_interface.decorators import json_endpoint
from app_customer_interface.exceptions import ValidationError
from app_customer_interface.order_status import PAID
from app_customer_interface.services import get_order_store
from app_customer_interface.table_session import resolve_sessions
from .decorators import allowed_user

REVENUE_RANGES = ('day', 'week', 'month', 'year')


def range_start(revenue_range, now):
    """Start of the current day/week/month/year in the active time zone; weeks start on Monday."""
    today_start = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
    if revenue_range == 'day':
        return today_start
    if revenue_range == 'week':
        return today_start - timedelta(days=today_start.weekday())
    if revenue_range == 'month':
        return today_start.replace(day=1)
    if revenue_range == 'year':
        return today_start.replace(month=1, day=1)
    raise ValidationError(f"Unknown range '{revenue_range}'. Use one of: {', '.join(REVENUE_RANGES)}.")


@require_GET
@allowed_user(allowed_roles=['Restaurant Owner'])
@json_endpoint
def order_management_view(request):
    """Unpaid tables with their consolidated bills."""
    orders = [order.to_payload() for order in get_order_store().list_active_orders(restaurant=request.restaurant)]

    tables = []
    unpaid_total = Decimal('0.00')
    for table, session in sorted(resolve_sessions(orders).items()):
        bill = aggregate_bill(session.orders)
        unpaid_total += bill.total
        tables.append({
            'table': table,
            'mainOrderId': session.main['id'],
            'orders': session.orders,
            'bill': bill.as_dict(),
        })

    return JsonResponse({
        'success': True,
        'restaurant': request.restaurant.name,
        'tables': tables,
        'totalTables': len(tables),
        'unpaidTotal': str(unpaid_total),
    })


@require_GET
@allowed_user(allowed_roles=['Restaurant Owner'])
@json_endpoint
def get_total_amount(request):
    revenue_range = request.GET.get('range', 'day')
    now = timezone.now()
    start = range_start(revenue_range, now)

    paid_orders = get_order_store().list_orders(
        restaurant=request.restaurant, status=PAID, created_range=(start, now)
    )
    total_amount = sum((order.calculate_total_amount() for order in paid_orders), Decimal('0.00'))

    return JsonResponse({
        'success': True,
        'range': revenue_range,
        'since': start.isoformat(),
        'orderCount': len(paid_orders),
        'total_amount': str(total_amount),
    })
