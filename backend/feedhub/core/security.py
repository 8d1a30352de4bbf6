from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from jose import jwt, JWTError

from .config import settings
from .errors import AppError, ErrorKind

# --- Password Hashing Context ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Checks if the plain password matches the hashed password."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hashes the plain password."""
    return pwd_context.hash(password)

# --- JWT Token Functions ---

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Creates a signed JWT carrying the user id in both 'id' and 'sub'."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    user_id = data.get("id")
    if not user_id or not isinstance(user_id, str):
        raise ValueError("User ID ('id') must be provided and must be a string")

    if not settings.SECRET_KEY:
        raise ValueError("SECRET_KEY is not configured")

    to_encode.update({"exp": expire, "sub": user_id})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_token(token: str) -> dict[str, Any]:
    """
    Decodes and verifies a JWT, including its expiry.
    Raises an UNAUTHENTICATED AppError for anything python-jose rejects.
    """
    if not token or not isinstance(token, str):
        raise AppError(ErrorKind.UNAUTHENTICATED, "Token must be a non-empty string")

    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise AppError(ErrorKind.UNAUTHENTICATED, f"Token validation failed: {e}")

def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Returns the token from an 'Authorization: Bearer <token>' header value, or None."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
