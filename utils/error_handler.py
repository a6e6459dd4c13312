"""
Error Handler Utility for HTTP routes

Provides centralized error handling for the storefront and admin API with:
- Localized error messages (en/ar)
- Consistent client experience
- Automatic exception to message mapping
- Logging for debugging

Usage in routes (see web/errors.py):
    from utils.error_handler import handle_service_error

    try:
        order = await OrderService.get_order(order_id, session)
    except StoreException as e:
        message = handle_service_error(e, UIEntity.USER, lang)
"""

import logging

from enums.language import Language
from enums.ui_entity import UIEntity
from exceptions import (
    StoreException,
    EmptyCartException,
    MissingClientIdException,
    ClientStateBusyException,
    OrderNotFoundException,
    InvalidOrderStateException,
    ShippingFormValidationException,
    OrderSubmissionException,
    ProductNotFoundException,
    CategoryNotFoundException,
    MediaUploadException,
    InvalidImageException,
    InvalidFormDataException,
    InvalidCredentialsException,
    UnauthorizedException,
    AdminRequiredException,
    UserAlreadyExistsException,
    NotificationDeliveryException,
)
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

# Map exception types to localization keys
ERROR_MAPPING = {
    # Cart exceptions
    EmptyCartException: "error_empty_cart",
    MissingClientIdException: "error_missing_client_id",
    ClientStateBusyException: "error_client_state_busy",

    # Order exceptions
    OrderNotFoundException: "error_order_not_found",
    InvalidOrderStateException: "error_order_invalid_state",
    ShippingFormValidationException: "error_invalid_shipping_form",
    OrderSubmissionException: "error_order_submission",

    # Catalog exceptions
    ProductNotFoundException: "error_product_not_found",
    CategoryNotFoundException: "error_category_not_found",
    MediaUploadException: "error_media_upload",
    InvalidImageException: "error_invalid_image",
    InvalidFormDataException: "error_invalid_form_data",

    # Auth exceptions
    InvalidCredentialsException: "error_invalid_credentials",
    UnauthorizedException: "error_unauthorized",
    AdminRequiredException: "error_admin_required",
    UserAlreadyExistsException: "error_user_exists",

    # Notification exceptions
    NotificationDeliveryException: "error_notification_failed",
}


def handle_service_error(exception: StoreException,
                         entity: UIEntity = UIEntity.USER,
                         lang: Language | str | None = None) -> str:
    """
    Convert service exception to localized user-friendly error message.

    Args:
        exception: The custom exception raised by a service
        entity: UI entity for localization (ADMIN or USER)
        lang: Request language

    Returns:
        Localized error message string

    Example:
        try:
            order = await OrderService.get_order("a1b2", session)
        except OrderNotFoundException as e:
            message = handle_service_error(e, UIEntity.USER, Language.EN)
    """
    logger.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    localization_key = ERROR_MAPPING.get(type(exception))

    if not localization_key:
        # Unknown exception type - use generic error message
        logger.error(f"Unmapped exception type: {type(exception).__name__}")
        return Localizator.get_text(UIEntity.COMMON, "error_unexpected", lang)

    # Get exception attributes for formatting
    exception_data = {}
    for attribute in ('order_id', 'product_id', 'category_id', 'current_state', 'required_state', 'reason'):
        if hasattr(exception, attribute):
            exception_data[attribute] = getattr(exception, attribute)

    try:
        return Localizator.get_text(entity, localization_key, lang).format(**exception_data)
    except KeyError as e:
        # Missing formatting parameter - log and return without formatting
        logger.error(f"Missing format parameter in error message: {e}")
        return Localizator.get_text(entity, localization_key, lang)


def handle_unexpected_error(exception: Exception,
                            entity: UIEntity = UIEntity.USER,
                            lang: Language | str | None = None) -> str:
    """
    Handle unexpected exceptions (non-StoreException).

    Also logs the full exception for debugging.
    """
    logger.error(f"Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=True)
    return Localizator.get_text(UIEntity.COMMON, "error_unexpected", lang)
