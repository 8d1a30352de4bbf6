from typing import Any, Type, TypeVar

from bson import ObjectId
from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
from strawberry.types import Info

from ..api.endpoints.dependencies import get_request_context, require_user_object_id
from ..core.db import get_async_db
from ..core.errors import from_validation_error

ModelT = TypeVar("ModelT", bound=BaseModel)


async def get_context(request: Request, db: Any = Depends(get_async_db)) -> dict[str, Any]:
    """Merged by strawberry with its default context (request, response, background_tasks)."""
    return {"db": db, "auth": get_request_context(request)}


def current_user_id(info: Info) -> ObjectId:
    return require_user_object_id(info.context["auth"])


def validated(model: Type[ModelT], **values: Any) -> ModelT:
    try:
        return model(**values)
    except ValidationError as e:
        raise from_validation_error(e)
