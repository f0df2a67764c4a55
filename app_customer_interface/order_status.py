# app_customer_interface/order_status.py
from .exceptions import ValidationError

PENDING = 'pending'
SERVED = 'served'
PAID = 'paid'

ORDER_STATUSES = (PENDING, SERVED, PAID)

# Forward-only; 'paid' is terminal.
TRANSITIONS = {
    PENDING: {SERVED, PAID},
    SERVED: {PAID},
    PAID: set(),
}

REQUEST_PENDING = 'pending'
REQUEST_RESOLVED = 'resolved'

WAITER = 'waiter'
BILL = 'bill'
REQUEST_TYPES = (WAITER, BILL)


def validate_status(status):
    if status not in ORDER_STATUSES:
        raise ValidationError(f"Unknown order status '{status}'.")
    return status


def can_transition(current, new):
    """Re-applying the current status is allowed and changes nothing."""
    return current == new or new in TRANSITIONS.get(current, set())


def is_active(status):
    return status != PAID
