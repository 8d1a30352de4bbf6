# FILE: backend/feedhub/services/user_service.py
# Async user operations over the Motor database handle.
# Emails are stored lower-cased so lookups stay case-insensitive.

from bson import ObjectId
from datetime import datetime, timezone
from typing import Any, Optional
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
import structlog

from ..core.errors import AppError, ErrorKind
from ..core.security import create_access_token, get_password_hash, verify_password
from ..models.user import DEFAULT_STATUS, UserCreate, UserInDB

logger = structlog.get_logger(__name__)

async def get_user_by_email(db: Any, email: str) -> Optional[UserInDB]:
    user_dict = await db.users.find_one({"email": email.strip().lower()})
    if user_dict:
        return UserInDB.model_validate(user_dict)
    return None

async def get_user_by_id(db: Any, user_id: ObjectId) -> Optional[UserInDB]:
    user_dict = await db.users.find_one({"_id": user_id})
    if user_dict:
        return UserInDB.model_validate(user_dict)
    return None

async def create(db: Any, obj_in: UserCreate) -> UserInDB:
    email = obj_in.email.lower()
    if await db.users.find_one({"email": email}):
        raise AppError(ErrorKind.VALIDATION, "User exists already!", data=[{"field": "email", "message": "E-Mail address already in use."}])

    now = datetime.now(timezone.utc)
    user_data = {
        "email": email,
        "name": obj_in.name,
        "password": get_password_hash(obj_in.password),
        "status": DEFAULT_STATUS,
        "created_at": now,
        "updated_at": now,
    }
    try:
        result = await db.users.insert_one(user_data)
    except DuplicateKeyError:
        raise AppError(ErrorKind.VALIDATION, "User exists already!", data=[{"field": "email", "message": "E-Mail address already in use."}])

    new_user = await db.users.find_one({"_id": result.inserted_id})
    if not new_user:
        raise AppError(ErrorKind.INTERNAL, "User creation failed")
    logger.info("user.created", user_id=str(result.inserted_id))
    return UserInDB.model_validate(new_user)

async def authenticate(db: Any, email: str, password: str) -> UserInDB:
    user = await get_user_by_email(db, email)
    if not user:
        raise AppError(ErrorKind.NOT_FOUND, "User not found.")
    if not verify_password(password, user.password):
        logger.warning("user.login_failed", user_id=str(user.id))
        raise AppError(ErrorKind.UNAUTHENTICATED, "Password is incorrect.")
    return user

async def login(db: Any, email: str, password: str) -> tuple[str, UserInDB]:
    """Returns a fresh access token for valid credentials."""
    user = await authenticate(db, email, password)
    token = create_access_token({"id": str(user.id), "email": user.email})
    logger.info("user.logged_in", user_id=str(user.id))
    return token, user

async def update_status(db: Any, user_id: ObjectId, status: str) -> UserInDB:
    updated = await db.users.find_one_and_update(
        {"_id": user_id},
        {"$set": {"status": status, "updated_at": datetime.now(timezone.utc)}},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise AppError(ErrorKind.NOT_FOUND, "No user found!")
    return UserInDB.model_validate(updated)
