# FILE: backend/feedhub/models/common.py
# Reusable ObjectId type for Mongo-backed pydantic models.

from bson import ObjectId
from pydantic import BeforeValidator
from typing import Annotated

from ..core.errors import AppError, ErrorKind

def validate_object_id(v):
    if isinstance(v, ObjectId):
        return v
    if ObjectId.is_valid(v):
        return ObjectId(v)
    raise ValueError("Invalid ObjectId")

PyObjectId = Annotated[
    ObjectId,
    BeforeValidator(validate_object_id),
]

def parse_object_id(value: str, label: str = "id") -> ObjectId:
    """Converts a client-supplied id, raising a VALIDATION AppError when malformed."""
    try:
        return validate_object_id(value)
    except (ValueError, TypeError):
        raise AppError(ErrorKind.VALIDATION, f"Invalid {label}.", data=[{"field": label, "message": "Not a valid id."}])
