"""Security Headers Middleware

Adds security headers to HTTP responses of the storefront API.

Controlled by SECURITY_HEADERS_ENABLED (default on) and HSTS_ENABLED
(only turn on when the app is served over HTTPS).
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all HTTP responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if not config.SECURITY_HEADERS_ENABLED:
            return response

        # Prevent MIME type sniffing (uploaded images are served from /media)
        response.headers["X-Content-Type-Options"] = "nosniff"

        # Prevent clickjacking of the admin console
        response.headers["X-Frame-Options"] = "DENY"

        if config.HSTS_ENABLED:
            # max-age: 31536000 seconds = 1 year
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        response.headers["Permissions-Policy"] = (
            "geolocation=(), microphone=(), camera=(), "
            "usb=(), magnetometer=(), gyroscope=()"
        )

        return response
