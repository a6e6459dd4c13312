"""
Order-related exceptions.
"""

from .base import StoreException


class OrderException(StoreException):
    """Base exception for order-related errors."""
    pass


class OrderNotFoundException(OrderException):
    """Raised when order is not found in database."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order {order_id} not found",
            details={'order_id': order_id}
        )
        self.order_id = order_id


class InvalidOrderStateException(OrderException):
    """Raised when an order status change is not allowed from its current status."""

    def __init__(self, order_id: str, current_state: str, required_state: str):
        super().__init__(
            f"Order {order_id} is in state '{current_state}', cannot move to '{required_state}'",
            details={'order_id': order_id, 'current_state': current_state, 'required_state': required_state}
        )
        self.order_id = order_id
        self.current_state = current_state
        self.required_state = required_state


class ShippingFormValidationException(OrderException):
    """Raised when the checkout form has invalid fields. Carries one localized message per field."""

    def __init__(self, errors: dict[str, str]):
        super().__init__(
            f"Invalid checkout fields: {', '.join(sorted(errors))}",
            details={'errors': errors}
        )
        self.errors = errors


class OrderSubmissionException(OrderException):
    """Raised when saving the order or updating stock fails. The cart is left as it was."""

    def __init__(self, reason: str):
        super().__init__(
            f"Order submission failed: {reason}",
            details={'reason': reason}
        )
        self.reason = reason
