"""
Notification-related exceptions.
"""

from .base import StoreException


class NotificationException(StoreException):
    """Base exception for notification errors."""
    pass


class NotificationDeliveryException(NotificationException):
    """Raised when the mail API rejects or cannot receive a message."""

    def __init__(self, order_id: str, reason: str):
        super().__init__(
            f"Failed to send status email for order {order_id}: {reason}",
            details={'order_id': order_id, 'reason': reason}
        )
        self.order_id = order_id
        self.reason = reason
