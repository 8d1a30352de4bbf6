# FILE: backend/feedhub/api/endpoints/dependencies.py
# Request-scoped auth state written by TokenValidationMiddleware.

from dataclasses import dataclass
from typing import Annotated, Optional

from bson import ObjectId
from fastapi import Depends, Request

from ...core.errors import AppError, not_authenticated
from ...models.common import parse_object_id

@dataclass(frozen=True)
class RequestContext:
    is_auth: bool
    user_id: Optional[str] = None

def get_request_context(request: Request) -> RequestContext:
    is_auth = bool(getattr(request.state, "is_auth", False))
    user_id = getattr(request.state, "user_id", None) if is_auth else None
    return RequestContext(is_auth=is_auth and user_id is not None, user_id=user_id)

def require_user_id(context: Annotated[RequestContext, Depends(get_request_context)]) -> str:
    if not context.is_auth or context.user_id is None:
        raise not_authenticated()
    return context.user_id

def require_user_object_id(context: RequestContext) -> ObjectId:
    """Same check as require_user_id, for callers outside FastAPI's DI (GraphQL resolvers)."""
    user_id = require_user_id(context)
    try:
        return parse_object_id(user_id, "user id")
    except AppError:
        # a signed token whose id is not an ObjectId identifies nobody
        raise not_authenticated()
