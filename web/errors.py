"""
Exception handlers: StoreException -> localized JSON error.

Response body: {"error": "<message in the request language>", "details": {...}}
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from enums.ui_entity import UIEntity
from exceptions import (
    StoreException,
    OrderNotFoundException,
    ProductNotFoundException,
    CategoryNotFoundException,
    InvalidCredentialsException,
    UnauthorizedException,
    AdminRequiredException,
    UserAlreadyExistsException,
    ClientStateBusyException,
    NotificationDeliveryException,
    OrderSubmissionException,
    MediaUploadException,
)
from utils.error_handler import handle_service_error, handle_unexpected_error
from web.dependencies import resolve_request_language

logger = logging.getLogger(__name__)

STATUS_CODES = [
    ((OrderNotFoundException, ProductNotFoundException, CategoryNotFoundException), status.HTTP_404_NOT_FOUND),
    ((InvalidCredentialsException, UnauthorizedException), status.HTTP_401_UNAUTHORIZED),
    ((AdminRequiredException,), status.HTTP_403_FORBIDDEN),
    ((UserAlreadyExistsException, ClientStateBusyException), status.HTTP_409_CONFLICT),
    ((NotificationDeliveryException,), status.HTTP_502_BAD_GATEWAY),
    ((OrderSubmissionException, MediaUploadException), status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_code_for(exception: StoreException) -> int:
    for exception_types, status_code in STATUS_CODES:
        if isinstance(exception, exception_types):
            return status_code
    # Validation and state errors (empty cart, bad form, invalid transition, missing client id)
    return status.HTTP_400_BAD_REQUEST


def _entity_for(request: Request) -> UIEntity:
    return UIEntity.ADMIN if request.url.path.startswith("/api/admin") else UIEntity.USER


async def store_exception_handler(request: Request, exc: StoreException) -> JSONResponse:
    language = resolve_request_language(request)
    message = handle_service_error(exc, _entity_for(request), language)
    details = dict(exc.details)
    # Failure reasons can carry internals; only admins see them
    if _entity_for(request) == UIEntity.USER:
        details.pop("reason", None)
    return JSONResponse(status_code=status_code_for(exc), content={"error": message, "details": details})


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    language = resolve_request_language(request)
    message = handle_unexpected_error(exc, _entity_for(request), language)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message, "details": {}})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreException, store_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
