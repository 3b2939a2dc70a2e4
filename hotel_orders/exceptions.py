"""
Domain exceptions for the order service.

Every error carries the HTTP status it maps to, so the API layer can render
it without knowing the individual classes.
"""


class OrderError(Exception):
    """Base exception for order-related errors."""

    status_code = 500
    error_code = "ORDER_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(OrderError):
    """Raised when an order, hotel, menu or menu item cannot be found."""

    status_code = 404
    error_code = "NOT_FOUND"


class InvalidInputError(OrderError):
    """Raised for malformed ids, unavailable items or missing delivery details."""

    status_code = 400
    error_code = "INVALID_INPUT"


class ForbiddenError(OrderError):
    """Raised when the actor may not view or manage the order."""

    status_code = 403
    error_code = "FORBIDDEN"


class ConcurrentUpdateError(OrderError):
    """Raised when an order document changed underneath a save."""

    status_code = 409
    error_code = "CONCURRENT_UPDATE"

    def __init__(self, order_id: str, expected_version: int, message: str | None = None):
        self.order_id = order_id
        self.expected_version = expected_version
        if message is None:
            message = f"Order {order_id} was modified concurrently (expected version {expected_version})"
        super().__init__(message)
