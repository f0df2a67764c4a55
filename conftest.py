"""
Root conftest.py for all app tests.

Fixtures defined here are available to every tests/ package.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth.models import Group, User
from django.utils import timezone

from app_customer_interface.models import Order, OrderItem, ServiceRequest
from app_customer_interface.services import OrderStore, ServiceRequestStore
from app_owner_admin_panel.models import ClientProfile, Restaurant


class RecordingBroadcaster:
    """Stands in for OrderBroadcaster; keeps every payload it was asked to publish."""

    def __init__(self):
        self.published = []

    def publish_new_order(self, payload):
        self.published.append(payload)


# ============================================================================
# RESTAURANT FIXTURES
# ============================================================================

@pytest.fixture
def restaurant():
    return Restaurant.objects.create(name='Noodle Bar', address='1 Main St', dish_time_warning=20)


@pytest.fixture
def other_restaurant():
    return Restaurant.objects.create(name='Dumpling House')


# ============================================================================
# STORE FIXTURES
# ============================================================================

@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def order_store(broadcaster):
    """OrderStore wired to a RecordingBroadcaster."""
    return OrderStore(broadcaster=broadcaster)


@pytest.fixture
def request_store():
    return ServiceRequestStore()


@pytest.fixture
def make_order():
    """
    Insert an order directly, bypassing the store (no broadcast).

    Usage:
        order = make_order(restaurant, 'T1', [('Ramen', 2, '9.50')], minutes_ago=10)
    """
    def _make_order(restaurant, table, items, status='pending', minutes_ago=0):
        order = Order.objects.create(
            restaurant=restaurant,
            table=table,
            status=status,
            created_at=timezone.now() - timedelta(minutes=minutes_ago),
        )
        for name, quantity, price in items:
            OrderItem.objects.create(order=order, name=name, quantity=quantity, price=Decimal(price))
        return order
    return _make_order


@pytest.fixture
def make_request():
    def _make_request(restaurant, table, request_type='waiter', status='pending', hours_ago=0):
        return ServiceRequest.objects.create(
            restaurant=restaurant,
            table=table,
            request_type=request_type,
            status=status,
            created_at=timezone.now() - timedelta(hours=hours_ago),
        )
    return _make_request


# ============================================================================
# USER FIXTURES
# ============================================================================

def _user_in_group(username, group_name, restaurant=None):
    user = User.objects.create_user(username=username, password='test-pass-123')
    group, _ = Group.objects.get_or_create(name=group_name)
    user.groups.add(group)
    if restaurant is not None:
        ClientProfile.objects.create(user=user, restaurant=restaurant)
    return user


@pytest.fixture
def owner_user(restaurant):
    return _user_in_group('owner', 'Restaurant Owner', restaurant)


@pytest.fixture
def staff_user(restaurant):
    return _user_in_group('staff', 'Staff', restaurant)


@pytest.fixture
def owner_client(client, owner_user):
    """Django test client logged in as the restaurant owner."""
    client.force_login(owner_user)
    return client


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client
