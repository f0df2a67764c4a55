# app_customer_interface/views.py
import logging

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .billing import aggregate_bill
from .decorators import json_body, json_endpoint
from .exceptions import OrderingError
from .order_status import REQUEST_TYPES
from .services import get_order_store, get_request_store
from .table_session import order_kind, resolve_table_session

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
@json_endpoint
def create_order_view(request):
    data = json_body(request)
    store = get_order_store()

    order = store.create_order(data.get('restaurantId'), data.get('table'), data.get('items'))

    # Whether this became the table's main order or a reorder on top of it.
    # The order is already placed; a failed lookup leaves kind unknown.
    try:
        kind = order_kind(store.table_orders(order.restaurant_id, order.table), order.order_id)
    except OrderingError as e:
        logger.warning("Could not resolve kind of order %s: %s", order.order_id, e.message)
        kind = None

    return JsonResponse({
        'success': True,
        'order': order.to_payload(),
        'kind': kind,
    }, status=201)


@require_GET
@json_endpoint
def table_state_view(request, restaurant_id, table):
    """Everything the customer page needs: main order gate, bill and pending requests."""
    table_orders = get_order_store().table_orders(restaurant_id, table)
    session = resolve_table_session(table_orders, table)
    pending_types = get_request_store().pending_request_types(restaurant_id, table)

    return JsonResponse({
        'success': True,
        'table': table,
        'hasMainOrder': session.has_main_order,
        'mainOrderId': session.main['id'] if session.main else None,
        'orders': session.orders,
        'bill': aggregate_bill(table_orders).as_dict(),
        'pendingRequests': {request_type: request_type in pending_types for request_type in REQUEST_TYPES},
        'pollInterval': settings.SERVICE_REQUEST_POLL_SECONDS,
    })


@csrf_exempt
@require_POST
@json_endpoint
def create_service_request_view(request):
    data = json_body(request)
    service_request, created = get_request_store().create_request_once(
        data.get('restaurantId'), data.get('table'), data.get('type')
    )
    return JsonResponse({
        'success': True,
        'request': service_request.to_payload(),
        'created': created,
    }, status=201 if created else 200)
