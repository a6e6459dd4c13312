"""
Custom exceptions for the perfume store.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
StoreException (base)
├── CartException
│   ├── EmptyCartException
│   ├── MissingClientIdException
│   └── ClientStateBusyException
├── OrderException
│   ├── OrderNotFoundException
│   ├── InvalidOrderStateException
│   ├── ShippingFormValidationException
│   └── OrderSubmissionException
├── CatalogException
│   ├── ProductNotFoundException
│   ├── CategoryNotFoundException
│   ├── MediaUploadException
│   ├── InvalidImageException
│   └── InvalidFormDataException
├── AuthException
│   ├── InvalidCredentialsException
│   ├── UnauthorizedException
│   ├── AdminRequiredException
│   └── UserAlreadyExistsException
└── NotificationException
    └── NotificationDeliveryException

Usage:
------
Services raise specific exceptions:
    raise OrderNotFoundException(order_id="a1b2c3")

The web layer converts them to localized JSON errors (web/errors.py):
    try:
        await OrderService.get_order(order_id, session)
    except OrderNotFoundException as e:
        message = handle_service_error(e, UIEntity.USER, lang)
"""

from .base import StoreException
from .cart import CartException, EmptyCartException, MissingClientIdException, ClientStateBusyException
from .order import (
    OrderException,
    OrderNotFoundException,
    InvalidOrderStateException,
    ShippingFormValidationException,
    OrderSubmissionException,
)
from .catalog import (
    CatalogException,
    ProductNotFoundException,
    CategoryNotFoundException,
    MediaUploadException,
    InvalidImageException,
    InvalidFormDataException,
)
from .auth import (
    AuthException,
    InvalidCredentialsException,
    UnauthorizedException,
    AdminRequiredException,
    UserAlreadyExistsException,
)
from .notification import NotificationException, NotificationDeliveryException

__all__ = [
    # Base
    'StoreException',

    # Cart
    'CartException',
    'EmptyCartException',
    'MissingClientIdException',
    'ClientStateBusyException',

    # Order
    'OrderException',
    'OrderNotFoundException',
    'InvalidOrderStateException',
    'ShippingFormValidationException',
    'OrderSubmissionException',

    # Catalog
    'CatalogException',
    'ProductNotFoundException',
    'CategoryNotFoundException',
    'MediaUploadException',
    'InvalidImageException',
    'InvalidFormDataException',

    # Auth
    'AuthException',
    'InvalidCredentialsException',
    'UnauthorizedException',
    'AdminRequiredException',
    'UserAlreadyExistsException',

    # Notification
    'NotificationException',
    'NotificationDeliveryException',
]
