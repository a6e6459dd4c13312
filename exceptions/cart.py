"""
Cart-related exceptions.
"""

from .base import StoreException


class CartException(StoreException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartException(CartException):
    """Raised when trying to checkout with empty cart."""

    def __init__(self):
        super().__init__("Cart is empty")


class MissingClientIdException(CartException):
    """Raised when a client-state request does not identify the client."""

    def __init__(self):
        super().__init__("X-Client-Id header is required for client state")


class ClientStateBusyException(CartException):
    """Raised when another request of the same client keeps holding the state lock."""

    def __init__(self, client_id: str, key: str):
        super().__init__(
            f"Client {client_id} is still updating '{key}'",
            details={'client_id': client_id, 'key': key}
        )
        self.client_id = client_id
        self.key = key
