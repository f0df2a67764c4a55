# app_customer_interface/services.py
import logging
from contextlib import contextmanager

from django.apps import apps
from django.db import DatabaseError, transaction
from django.utils import timezone

from app_owner_admin_panel.models import Restaurant
from .billing import aggregate_bill
from .exceptions import NotFoundError, StoreUnavailableError, ValidationError, InvalidTransitionError
from .forms import OrderForm, OrderItemForm, ServiceRequestForm, first_error
from .models import Order, OrderItem, ServiceRequest
from .order_status import PAID, SERVED, REQUEST_PENDING, REQUEST_RESOLVED, can_transition, validate_status
from .table_session import resolve_table_session

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation):
    """Turn database faults into StoreUnavailableError."""
    try:
        yield
    except DatabaseError as e:
        logger.exception("Store operation '%s' failed", operation)
        raise StoreUnavailableError(str(e)) from e


def clean_restaurant_id(restaurant_id):
    if restaurant_id in (None, ''):
        raise ValidationError("Missing restaurantId.")
    try:
        return int(restaurant_id)
    except (TypeError, ValueError):
        raise ValidationError("Invalid restaurantId.")


def get_restaurant(restaurant_id, lock=False):
    restaurant_id = clean_restaurant_id(restaurant_id)

    queryset = Restaurant.objects.select_for_update() if lock else Restaurant.objects.all()
    try:
        return queryset.get(pk=restaurant_id)
    except Restaurant.DoesNotExist:
        raise NotFoundError(f"Restaurant {restaurant_id} not found.")


class OrderStore:
    """Orders placed at tables and their pending → served → paid lifecycle."""

    def __init__(self, broadcaster):
        self.broadcaster = broadcaster

    def clean_items(self, items):
        if not items or not isinstance(items, list):
            raise ValidationError("Items must be a non-empty list.")

        cleaned = []
        for position, item in enumerate(items, start=1):
            if not isinstance(item, dict):
                raise ValidationError(f"Item {position} is malformed.")
            for key in ('name', 'quantity', 'price'):
                if item.get(key) in (None, ''):
                    raise ValidationError(f"Item {position} is missing '{key}'.")

            form = OrderItemForm(item)
            if not form.is_valid():
                raise ValidationError(f"Item {position} {first_error(form)}")
            cleaned.append(form.cleaned_data)
        return cleaned

    def create_order(self, restaurant_id, table, items):
        table = str(table).strip() if table is not None else ''
        if not table:
            raise ValidationError("Missing table.")
        form = OrderForm({'table': table})
        if not form.is_valid():
            raise ValidationError(first_error(form))
        cleaned_items = self.clean_items(items)

        with store_errors('create_order'):
            with transaction.atomic():
                restaurant = get_restaurant(restaurant_id)
                order = Order.objects.create(restaurant=restaurant, table=table)
                for item in cleaned_items:
                    OrderItem.objects.create(
                        order=order,
                        name=item['name'],
                        quantity=item['quantity'],
                        price=item['price'],
                    )

                payload = order.to_payload()
                transaction.on_commit(lambda: self.broadcaster.publish_new_order(payload))

        logger.info("Order %s placed for table %s (%d items)", order.order_id, table, len(cleaned_items))
        return order

    def _orders(self, restaurant=None):
        queryset = Order.objects.prefetch_related('orderitem_set').order_by('-created_at', '-order_id')
        if restaurant is not None:
            queryset = queryset.filter(restaurant=restaurant)
        return queryset

    def list_orders(self, restaurant=None, status=None, table=None, created_range=None):
        """All orders newest first, optionally scoped to a restaurant.

        ``created_range`` is an inclusive ``(start, end)`` pair of datetimes.
        """
        queryset = self._orders(restaurant)
        if status:
            queryset = queryset.filter(status=validate_status(status))
        if table:
            queryset = queryset.filter(table=table)
        if created_range is not None:
            queryset = queryset.filter(created_at__range=created_range)
        with store_errors('list_orders'):
            return list(queryset)

    def list_active_orders(self, restaurant=None, table=None):
        queryset = self._orders(restaurant).exclude(status=PAID)
        if table:
            queryset = queryset.filter(table=table)
        with store_errors('list_active_orders'):
            return list(queryset)

    def clean_ids(self, ids):
        if not ids or not isinstance(ids, list):
            raise ValidationError("Missing ids or status.")
        try:
            return [int(order_id) for order_id in ids]
        except (TypeError, ValueError):
            raise ValidationError("Order ids must be integers.")

    def bulk_update_status(self, ids, new_status, restaurant=None):
        """Move every matched order to ``new_status`` and return how many matched.

        Ids that match nothing are ignored as long as at least one matches. If
        any matched order cannot make the transition nothing is changed. With
        ``restaurant`` only that restaurant's orders can match.
        """
        validate_status(new_status)
        ids = self.clean_ids(ids)

        with store_errors('bulk_update_status'):
            with transaction.atomic():
                queryset = Order.objects.select_for_update().filter(pk__in=ids)
                if restaurant is not None:
                    queryset = queryset.filter(restaurant=restaurant)
                matched = list(queryset.values_list('order_id', 'status'))
                if not matched:
                    raise NotFoundError("No matching orders found.")

                blocked = [order_id for order_id, status in matched if not can_transition(status, new_status)]
                if blocked:
                    raise InvalidTransitionError(blocked, new_status)

                to_change = [order_id for order_id, status in matched if status != new_status]
                changes = {'status': new_status}
                if new_status == SERVED:
                    changes['served_at'] = timezone.now()
                Order.objects.filter(pk__in=to_change).update(**changes)

        missing = set(ids) - {order_id for order_id, _ in matched}
        if missing:
            logger.warning("Status update to '%s' ignored unknown order ids %s", new_status, sorted(missing))
        logger.info("Orders %s moved to '%s'", to_change, new_status)
        return len(matched)

    def table_orders(self, restaurant_id, table):
        restaurant = get_restaurant(restaurant_id)
        return [order.to_payload() for order in self.list_active_orders(restaurant=restaurant, table=table)]

    def table_session(self, restaurant_id, table):
        return resolve_table_session(self.table_orders(restaurant_id, table), table)

    def table_bill(self, restaurant_id, table):
        return aggregate_bill(self.table_orders(restaurant_id, table))


class ServiceRequestStore:
    """Customer 'call waiter' / 'request bill' actions."""

    def clean(self, restaurant_id, table, request_type):
        form = ServiceRequestForm({'restaurant_id': restaurant_id, 'table': table, 'type': request_type})
        if not form.is_valid():
            raise ValidationError(first_error(form))
        return form.cleaned_data

    def create_request(self, restaurant_id, table, request_type):
        """Always inserts a new pending request; see create_request_once for the guarded variant."""
        data = self.clean(restaurant_id, table, request_type)
        with store_errors('create_request'):
            restaurant = get_restaurant(data['restaurant_id'])
            service_request = ServiceRequest.objects.create(
                restaurant=restaurant,
                table=data['table'],
                request_type=data['type'],
            )
        logger.info("Service request %s (%s) from table %s", service_request.request_id, data['type'], data['table'])
        return service_request

    def pending_request_types(self, restaurant_id, table):
        restaurant_id = clean_restaurant_id(restaurant_id)
        with store_errors('pending_request_types'):
            return set(
                ServiceRequest.objects.filter(
                    restaurant_id=restaurant_id, table=table, status=REQUEST_PENDING
                ).values_list('request_type', flat=True)
            )

    def create_request_once(self, restaurant_id, table, request_type):
        """Insert a pending request unless the table already has one of that type.

        The restaurant row is locked for the check-and-insert so two tabs at the
        same table cannot both create one. Returns ``(request, created)``.
        """
        data = self.clean(restaurant_id, table, request_type)
        with store_errors('create_request_once'):
            with transaction.atomic():
                restaurant = get_restaurant(data['restaurant_id'], lock=True)
                existing = ServiceRequest.objects.filter(
                    restaurant=restaurant,
                    table=data['table'],
                    request_type=data['type'],
                    status=REQUEST_PENDING,
                ).order_by('created_at').first()
                if existing is not None:
                    return existing, False

                service_request = ServiceRequest.objects.create(
                    restaurant=restaurant,
                    table=data['table'],
                    request_type=data['type'],
                )
        logger.info("Service request %s (%s) from table %s", service_request.request_id, data['type'], data['table'])
        return service_request, True

    def list_requests(self, restaurant_id, table=None, status=None):
        restaurant_id = clean_restaurant_id(restaurant_id)
        queryset = ServiceRequest.objects.filter(restaurant_id=restaurant_id).order_by('-created_at', '-request_id')
        if table:
            queryset = queryset.filter(table=table)
        if status:
            queryset = queryset.filter(status=status)
        with store_errors('list_requests'):
            return list(queryset)

    def get_request(self, request_id, restaurant=None):
        queryset = ServiceRequest.objects.all()
        if restaurant is not None:
            queryset = queryset.filter(restaurant=restaurant)
        try:
            return queryset.get(pk=request_id)
        except (ServiceRequest.DoesNotExist, ValueError, TypeError):
            raise NotFoundError("Request not found")

    def resolve_request(self, request_id, restaurant=None):
        with store_errors('resolve_request'):
            service_request = self.get_request(request_id, restaurant)
            if service_request.status != REQUEST_RESOLVED:
                service_request.status = REQUEST_RESOLVED
                service_request.save(update_fields=['status'])
                logger.info("Service request %s resolved", service_request.request_id)
        return service_request

    def delete_request(self, request_id, restaurant=None):
        with store_errors('delete_request'):
            service_request = self.get_request(request_id, restaurant)
            service_request.delete()
        logger.info("Service request %s deleted", request_id)

    def purge_resolved(self, older_than=None):
        queryset = ServiceRequest.objects.filter(status=REQUEST_RESOLVED)
        if older_than is not None:
            queryset = queryset.filter(created_at__lte=older_than)
        with store_errors('purge_resolved'):
            deleted, _ = queryset.delete()
        return deleted


def get_order_store():
    return apps.get_app_config('app_customer_interface').order_store


def get_request_store():
    return apps.get_app_config('app_customer_interface').request_store
