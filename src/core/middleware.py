"""
Security middleware for the recovery service
Adds hardening headers and request audit logging
"""
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.core.logger import get_logger


# The service only serves JSON, so nothing may be loaded or framed
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none';",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for header, value in SECURITY_HEADERS.items():
            response.headers[header] = value

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log requests for audit purposes"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger = get_logger("requests")

        client_ip = request.client.host if request.client else "unknown"
        logger.info(f"{request.method} {request.url.path} - IP: {client_ip}")

        response = await call_next(request)

        logger.info(f"{request.method} {request.url.path} - Status: {response.status_code}")

        return response
