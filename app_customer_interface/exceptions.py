"""
Errors raised by the order and service request stores.

Each error carries the HTTP status the JSON endpoints answer with.
"""


class OrderingError(Exception):
    """Base exception for order/request lifecycle errors."""
    status_code = 500

    def __init__(self, message=None):
        self.message = message or self.__class__.__doc__
        super().__init__(self.message)


class ValidationError(OrderingError):
    """Missing or malformed required fields."""
    status_code = 400


class InvalidTransitionError(ValidationError):
    """Raised when a bulk status change would move an order backwards or out of 'paid'."""

    def __init__(self, order_ids, new_status, message=None):
        self.order_ids = list(order_ids)
        self.new_status = new_status
        if message is None:
            ids = ', '.join(str(order_id) for order_id in self.order_ids)
            message = f"Cannot change status of order(s) {ids} to '{new_status}'"
        super().__init__(message)


class NotFoundError(OrderingError):
    """Record not found."""
    status_code = 404


class StoreUnavailableError(OrderingError):
    """Backing store unreachable or the operation faulted."""
    status_code = 503
