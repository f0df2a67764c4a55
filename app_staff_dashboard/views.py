# app_staff_dashboard/views.py
from datetime import timedelta

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from app_customer_interface.billing import aggregate_bill, item_quantities
from app_customer_interface.decorators import json_body, json_endpoint
from app_customer_interface.order_status import PENDING
from app_customer_interface.services import get_order_store, get_request_store
from app_customer_interface.table_session import created_at, resolve_sessions
from app_owner_admin_panel.decorators import allowed_user
from app_owner_admin_panel.models import restaurant_for_user

STAFF_ROLES = ['Staff', 'Restaurant Owner']


@require_GET
@json_endpoint
def list_orders_view(request):
    restaurant = restaurant_for_user(request.user)
    orders = get_order_store().list_orders(
        restaurant=restaurant,
        status=request.GET.get('status'),
        table=request.GET.get('table'),
    )
    return JsonResponse({'success': True, 'orders': [order.to_payload() for order in orders]})


@csrf_exempt
@require_http_methods(['PATCH', 'POST'])
@allowed_user(allowed_roles=STAFF_ROLES)
@json_endpoint
def update_order_status_view(request):
    data = json_body(request)
    matched = get_order_store().bulk_update_status(
        data.get('ids'), data.get('status'), restaurant=request.restaurant
    )
    return JsonResponse({'success': True, 'matched': matched})


def is_late(order, warning_minutes, now):
    return order['status'] == PENDING and now - created_at(order) > timedelta(minutes=warning_minutes)


@require_GET
@json_endpoint
def kitchen_board_view(request):
    """Unpaid orders per table, main ticket first, with the kitchen quantity view."""
    restaurant = restaurant_for_user(request.user)
    orders = [order.to_payload() for order in get_order_store().list_active_orders(restaurant=restaurant)]
    warning_minutes = restaurant.dish_time_warning if restaurant else 30
    now = timezone.now()

    tables = []
    for table, session in sorted(resolve_sessions(orders).items(), key=lambda entry: created_at(entry[1].main)):
        tables.append({
            'table': table,
            'main': dict(session.main, late=is_late(session.main, warning_minutes, now)),
            'addOns': [dict(order, late=is_late(order, warning_minutes, now)) for order in session.add_ons],
        })

    return JsonResponse({
        'success': True,
        'tables': tables,
        'itemQuantities': item_quantities([order for order in orders if order['status'] == PENDING]),
        'dishTimeWarning': warning_minutes,
    })


@require_GET
@json_endpoint
def print_bill_view(request, restaurant_id, table):
    table_orders = get_order_store().table_orders(restaurant_id, table)
    bill = aggregate_bill(table_orders)
    return JsonResponse({
        'success': True,
        'table': table,
        'orderIds': [order['id'] for order in table_orders],
        'bill': bill.as_dict(),
        'printedAt': timezone.now().isoformat(),
    })


@require_GET
@json_endpoint
def list_service_requests_view(request):
    restaurant = restaurant_for_user(request.user)
    restaurant_id = request.GET.get('restaurantId') or (restaurant.restaurant_id if restaurant else None)
    requests = get_request_store().list_requests(
        restaurant_id,
        table=request.GET.get('table'),
        status=request.GET.get('status'),
    )
    return JsonResponse({'success': True, 'requests': [service_request.to_payload() for service_request in requests]})


@csrf_exempt
@require_POST
@allowed_user(allowed_roles=STAFF_ROLES)
@json_endpoint
def resolve_service_request_view(request, request_id):
    service_request = get_request_store().resolve_request(request_id, restaurant=request.restaurant)
    return JsonResponse({'success': True, 'request': service_request.to_payload()})


@csrf_exempt
@require_http_methods(['DELETE'])
@allowed_user(allowed_roles=STAFF_ROLES)
@json_endpoint
def delete_service_request_view(request, request_id):
    get_request_store().delete_request(request_id, restaurant=request.restaurant)
    return JsonResponse({'success': True})
