# FILE: backend/feedhub/core/errors.py
# Single error type raised by services, resolvers and endpoints.
# The HTTP handlers below and the GraphQL formatter both read from it.

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    UPSTREAM = "UPSTREAM"
    INTERNAL = "INTERNAL"


DEFAULT_STATUS = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: 422,
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    ErrorKind.UPSTREAM: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """Tagged application error: kind + message, with optional status and payload."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code or DEFAULT_STATUS[kind]
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "status": self.status_code, "data": self.data}

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.value}, status={self.status_code}, message={self.message!r})"


def not_authenticated(message: str = "Not authenticated!") -> AppError:
    return AppError(ErrorKind.UNAUTHENTICATED, message)


async def app_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, AppError):
        return await unhandled_error_handler(request, exc)
    logger.info(f"{request.method} {request.url.path} -> {exc!r}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "data": exc.data},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "An error occurred.", "data": None},
    )


def from_validation_error(exc: ValidationError, message: str = "Invalid input.") -> AppError:
    """Maps a pydantic ValidationError onto a VALIDATION AppError with per-field details."""
    details = [
        {"field": ".".join(str(part) for part in err["loc"]) or "input", "message": err["msg"]}
        for err in exc.errors()
    ]
    return AppError(ErrorKind.VALIDATION, message, data=details)
