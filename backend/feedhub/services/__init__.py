# FILE: backend/feedhub/services/__init__.py

from . import (
    post_service,
    storage_service,
    user_service,
    weather_service,
)
