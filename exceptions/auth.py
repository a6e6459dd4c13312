"""
Authentication-related exceptions.
"""

from .base import StoreException


class AuthException(StoreException):
    """Base exception for authentication errors."""
    pass


class InvalidCredentialsException(AuthException):
    """Raised when email/password do not match an active account."""

    def __init__(self):
        super().__init__("Invalid credentials")


class UnauthorizedException(AuthException):
    """Raised when a request carries no valid session token."""

    def __init__(self, reason: str = "Unauthorized"):
        super().__init__(reason, details={'reason': reason})
        self.reason = reason


class AdminRequiredException(AuthException):
    """Raised when a non-admin account calls an admin operation."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User {user_id} is not an admin",
            details={'user_id': user_id}
        )
        self.user_id = user_id


class UserAlreadyExistsException(AuthException):
    """Raised when creating an account for an email that is already registered."""

    def __init__(self, email: str):
        super().__init__(
            f"User {email} already exists",
            details={'email': email}
        )
        self.email = email
