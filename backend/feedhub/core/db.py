# FILE: backend/feedhub/core/db.py
# Async MongoDB (Motor) connection shared by the whole process.
# The driver's pool is safe for concurrent use, so a single handle is kept.

import logging
from typing import Any, Generator, Optional
from urllib.parse import urlparse

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConnectionFailure

from .config import settings

logger = logging.getLogger(__name__)

async_mongo_client: Optional[Any] = None
async_db_instance: Optional[Any] = None

async def connect_to_motor():
    global async_mongo_client, async_db_instance
    if async_db_instance is not None:
        return

    logger.info("--- [DB] Attempting to connect to Async MongoDB (Motor)... ---")
    try:
        client = AsyncIOMotorClient(settings.mongo_uri, serverSelectionTimeoutMS=5000)
        await client.admin.command('ping')
        db_name = urlparse(settings.mongo_uri).path.lstrip('/') or settings.MONGO_DEFAULT_DB
        if not db_name:
            raise ValueError("Database name not found in DATABASE_URI or MONGO_DEFAULT_DB.")

        async_mongo_client = client
        async_db_instance = client[db_name]
        logger.info(f"--- [DB] Successfully connected to Async MongoDB (Motor): '{db_name}' ---")
    except (ConnectionFailure, ValueError) as e:
        logger.critical(f"--- [DB] CRITICAL: Could not connect to Async MongoDB (Motor): {e} ---")
        raise

# --- Dependency Providers ---
def get_async_db() -> Generator[Any, None, None]:
    if async_db_instance is None:
        raise RuntimeError("Asynchronous database is not connected. Check application lifespan.")
    yield async_db_instance

# --- Shutdown Logic ---
def close_mongo_connections():
    global async_mongo_client, async_db_instance
    if async_mongo_client:
        async_mongo_client.close()
        logger.info("--- [DB] Async MongoDB (Motor) connection closed. ---")
    async_mongo_client = None
    async_db_instance = None
