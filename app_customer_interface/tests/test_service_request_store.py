"""
ServiceRequestStore tests: call-waiter / request-bill actions from a table.
"""
from datetime import timedelta

import pytest
from django.db import DatabaseError
from django.utils import timezone

from app_customer_interface.exceptions import NotFoundError, StoreUnavailableError, ValidationError
from app_customer_interface.models import ServiceRequest


@pytest.mark.django_db
class TestCreateRequest:

    def test_creates_pending_request(self, request_store, restaurant):
        service_request = request_store.create_request(restaurant.restaurant_id, 'T4', 'waiter')

        assert service_request.status == 'pending'
        assert service_request.request_type == 'waiter'
        assert service_request.table == 'T4'
        assert service_request.restaurant == restaurant

    def test_accepts_restaurant_id_as_string(self, request_store, restaurant):
        service_request = request_store.create_request(str(restaurant.restaurant_id), 'T4', 'bill')

        assert service_request.restaurant_id == restaurant.restaurant_id

    def test_always_inserts(self, request_store, restaurant):
        first = request_store.create_request(restaurant.restaurant_id, 'T4', 'bill')
        second = request_store.create_request(restaurant.restaurant_id, 'T4', 'bill')

        assert first.request_id != second.request_id
        assert ServiceRequest.objects.filter(table='T4', status='pending').count() == 2

    @pytest.mark.parametrize('restaurant_id, table, request_type, message', [
        (None, 'T4', 'waiter', "restaurantId: This field is required."),
        ('abc', 'T4', 'waiter', "restaurantId: Enter a whole number."),
        (1, '', 'waiter', "table: This field is required."),
        (1, 'T4', None, "type: This field is required."),
        (1, 'T4', 'dessert', "type: Select a valid choice. dessert is not one of the available choices."),
    ])
    def test_invalid_fields_persist_nothing(self, request_store, restaurant, make_request,
                                            restaurant_id, table, request_type, message):
        make_request(restaurant, 'T1')
        before = ServiceRequest.objects.count()

        with pytest.raises(ValidationError) as excinfo:
            request_store.create_request(restaurant_id, table, request_type)

        assert excinfo.value.message == message
        assert ServiceRequest.objects.count() == before

    def test_unknown_restaurant(self, request_store):
        with pytest.raises(NotFoundError):
            request_store.create_request(424242, 'T4', 'waiter')

        assert ServiceRequest.objects.count() == 0

    def test_database_fault_is_store_unavailable(self, request_store, restaurant, monkeypatch):
        def broken_create(**kwargs):
            raise DatabaseError("connection refused")

        monkeypatch.setattr(ServiceRequest.objects, 'create', broken_create)

        with pytest.raises(StoreUnavailableError) as excinfo:
            request_store.create_request(restaurant.restaurant_id, 'T4', 'waiter')

        assert excinfo.value.status_code == 503
        assert excinfo.value.message == "connection refused"


@pytest.mark.django_db
class TestCreateRequestOnce:
    """At most one pending request per (restaurant, table, type)"""

    def test_second_request_returns_the_pending_one(self, request_store, restaurant):
        first, created_first = request_store.create_request_once(restaurant.restaurant_id, 'T4', 'waiter')
        second, created_second = request_store.create_request_once(restaurant.restaurant_id, 'T4', 'waiter')

        assert created_first is True
        assert created_second is False
        assert second.request_id == first.request_id
        assert ServiceRequest.objects.count() == 1

    def test_other_type_or_table_is_independent(self, request_store, restaurant):
        request_store.create_request_once(restaurant.restaurant_id, 'T4', 'waiter')

        _, bill_created = request_store.create_request_once(restaurant.restaurant_id, 'T4', 'bill')
        _, other_table_created = request_store.create_request_once(restaurant.restaurant_id, 'T5', 'waiter')

        assert bill_created is True
        assert other_table_created is True

    def test_resolved_request_allows_a_new_one(self, request_store, restaurant):
        first, _ = request_store.create_request_once(restaurant.restaurant_id, 'T4', 'bill')
        request_store.resolve_request(first.request_id)

        second, created = request_store.create_request_once(restaurant.restaurant_id, 'T4', 'bill')

        assert created is True
        assert second.request_id != first.request_id

    def test_validates_like_create_request(self, request_store, restaurant):
        with pytest.raises(ValidationError):
            request_store.create_request_once(restaurant.restaurant_id, 'T4', 'dessert')

        assert ServiceRequest.objects.count() == 0

    def test_pending_request_types(self, request_store, restaurant, other_restaurant, make_request):
        make_request(restaurant, 'T4', 'bill')
        make_request(restaurant, 'T4', 'waiter', status='resolved')
        make_request(restaurant, 'T5', 'waiter')
        make_request(other_restaurant, 'T4', 'waiter')

        assert request_store.pending_request_types(restaurant.restaurant_id, 'T4') == {'bill'}


@pytest.mark.django_db
class TestListRequests:

    def test_newest_first_for_one_restaurant(self, request_store, restaurant, other_restaurant, make_request):
        old = make_request(restaurant, 'T1', hours_ago=2)
        new = make_request(restaurant, 'T2', 'bill')
        make_request(other_restaurant, 'T1')

        assert request_store.list_requests(restaurant.restaurant_id) == [new, old]

    def test_filters(self, request_store, restaurant, make_request):
        make_request(restaurant, 'T1')
        resolved = make_request(restaurant, 'T1', status='resolved')
        make_request(restaurant, 'T2', status='resolved')

        assert request_store.list_requests(restaurant.restaurant_id, table='T1', status='resolved') == [resolved]

    def test_requires_restaurant(self, request_store):
        with pytest.raises(ValidationError, match="Missing restaurantId."):
            request_store.list_requests(None)


@pytest.mark.django_db
class TestResolveAndDelete:

    def test_resolve(self, request_store, restaurant, make_request):
        service_request = make_request(restaurant, 'T1')

        resolved = request_store.resolve_request(service_request.request_id)

        assert resolved.status == 'resolved'
        service_request.refresh_from_db()
        assert service_request.status == 'resolved'

    def test_resolve_twice_is_harmless(self, request_store, restaurant, make_request):
        service_request = make_request(restaurant, 'T1')

        request_store.resolve_request(service_request.request_id)
        again = request_store.resolve_request(service_request.request_id)

        assert again.status == 'resolved'

    def test_resolving_one_duplicate_leaves_the_other(self, request_store, restaurant):
        first = request_store.create_request(restaurant.restaurant_id, 'T4', 'bill')
        second = request_store.create_request(restaurant.restaurant_id, 'T4', 'bill')

        request_store.resolve_request(first.request_id)

        second.refresh_from_db()
        assert second.status == 'pending'

    def test_resolve_unknown_changes_nothing(self, request_store, restaurant, make_request):
        existing = make_request(restaurant, 'T1')

        with pytest.raises(NotFoundError, match="Request not found"):
            request_store.resolve_request(existing.request_id + 1000)

        existing.refresh_from_db()
        assert existing.status == 'pending'
        assert ServiceRequest.objects.count() == 1

    def test_delete(self, request_store, restaurant, make_request):
        service_request = make_request(restaurant, 'T1', status='resolved')

        request_store.delete_request(service_request.request_id)

        assert not ServiceRequest.objects.filter(pk=service_request.request_id).exists()

    def test_delete_pending(self, request_store, restaurant, make_request):
        service_request = make_request(restaurant, 'T1')

        request_store.delete_request(service_request.request_id)

        assert ServiceRequest.objects.count() == 0

    def test_restaurant_scope_hides_other_requests(self, request_store, restaurant, other_restaurant, make_request):
        theirs = make_request(other_restaurant, 'T1')

        with pytest.raises(NotFoundError):
            request_store.resolve_request(theirs.request_id, restaurant=restaurant)
        with pytest.raises(NotFoundError):
            request_store.delete_request(theirs.request_id, restaurant=restaurant)

        theirs.refresh_from_db()
        assert theirs.status == 'pending'

    def test_delete_unknown(self, request_store):
        with pytest.raises(NotFoundError):
            request_store.delete_request(999)

    def test_non_numeric_id_is_not_found(self, request_store):
        with pytest.raises(NotFoundError):
            request_store.get_request('abc')


@pytest.mark.django_db
class TestPurgeResolved:

    def test_deletes_only_resolved(self, request_store, restaurant, make_request):
        make_request(restaurant, 'T1', status='resolved')
        make_request(restaurant, 'T2', status='resolved')
        pending = make_request(restaurant, 'T3')

        assert request_store.purge_resolved() == 2
        assert list(ServiceRequest.objects.all()) == [pending]

    def test_older_than(self, request_store, restaurant, make_request):
        make_request(restaurant, 'T1', status='resolved', hours_ago=48)
        recent = make_request(restaurant, 'T2', status='resolved', hours_ago=1)

        deleted = request_store.purge_resolved(older_than=timezone.now() - timedelta(hours=24))

        assert deleted == 1
        assert list(ServiceRequest.objects.all()) == [recent]
