# FILE: backend/feedhub/core/lifespan.py
# Startup: logging -> image directory -> MongoDB -> indexes. Serving starts only after Mongo answers.
# Shutdown: weather poll tasks are cancelled before the Mongo client is closed.

from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
import logging
from pymongo import ASCENDING, DESCENDING

from . import db
from .config import settings
from .logging_config import configure_logging
from .websocket_manager import manager

logger = logging.getLogger(__name__)

async def create_mongo_indexes(app: FastAPI):
    """Unique emails for login; creator/date indexes for the feed queries."""
    try:
        if not hasattr(app.state, "mongo_db"):
            logger.warning("--- [Indexes] MongoDB not found in app.state. Skipping indexing. ---")
            return

        mongo_db = app.state.mongo_db
        await mongo_db.users.create_index([("email", ASCENDING)], unique=True)
        await mongo_db.posts.create_index([("created_at", DESCENDING)])
        await mongo_db.posts.create_index([("creator", ASCENDING), ("created_at", DESCENDING)])
        logger.info("--- [Lifespan] Database Indexes Verified/Created. ---")
    except Exception as e:
        logger.error(f"--- [Lifespan] Index Creation Failed: {e} ---")

async def perform_shutdown():
    logger.info("--- [Lifespan] Application shutdown sequence initiated. ---")
    await manager.shutdown()
    db.close_mongo_connections()
    logger.info("--- [Lifespan] All connections closed. Shutdown complete. ---")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(access_log_path=settings.ACCESS_LOG_PATH)
    logger.info("--- [Lifespan] Application startup sequence initiated. ---")

    Path(settings.IMAGES_DIR).mkdir(parents=True, exist_ok=True)

    await db.connect_to_motor()
    app.state.mongo_db = db.async_db_instance
    await create_mongo_indexes(app)

    logger.info("--- [Lifespan] All resources initialized. Application is ready. ---")

    yield

    await perform_shutdown()
