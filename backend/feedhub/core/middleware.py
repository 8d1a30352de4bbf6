# FILE: backend/feedhub/core/middleware.py
# Cross-cutting HTTP middleware, registered in main.py.
# Order (outermost first): CORS -> token validation -> security headers -> gzip -> access log -> unhandled errors.

import logging
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .errors import AppError, unhandled_error_handler
from .logging_config import ACCESS_LOGGER_NAME
from .security import decode_token, extract_bearer_token

logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER_NAME)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,PATCH,DELETE",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

SECURITY_HEADERS = {
    "X-DNS-Prefetch-Control": "off",
    "X-Frame-Options": "SAMEORIGIN",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Download-Options": "noopen",
    "X-Content-Type-Options": "nosniff",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "X-XSS-Protection": "0",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Allows any origin. OPTIONS is answered here with an empty 200."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response


class TokenValidationMiddleware(BaseHTTPMiddleware):
    """
    Marks every request as authenticated or not; never rejects.
    Handlers that need a user check ``request.state.is_auth`` themselves.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.is_auth = False
        request.state.user_id = None

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token:
            try:
                payload = decode_token(token)
            except AppError as e:
                logger.debug(f"Bearer token rejected: {e.message}")
            else:
                user_id = payload.get("id") or payload.get("sub")
                if user_id:
                    request.state.is_auth = True
                    request.state.user_id = str(user_id)

        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Writes an Apache 'combined' line per request to the access logger, failures included."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        status_code, length = 500, "-"
        try:
            response = await call_next(request)
            status_code = response.status_code
            length = response.headers.get("content-length", "-")
            return response
        finally:
            access_logger.info(format_combined(request, status_code, length))


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Innermost layer: turns unexpected exceptions into the generic 500 envelope
    so the outer layers (CORS, security headers, access log) still see a response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_error_handler(request, exc)


def format_combined(request: Request, status_code: int, length: str = "-") -> str:
    client_host = request.client.host if request.client else "-"
    timestamp = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S %z")
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    http_version = request.scope.get("http_version", "1.1")
    referer = request.headers.get("referer", "-")
    user_agent = request.headers.get("user-agent", "-")
    return (
        f'{client_host} - - [{timestamp}] "{request.method} {target} HTTP/{http_version}" '
        f'{status_code} {length} "{referer}" "{user_agent}"'
    )
