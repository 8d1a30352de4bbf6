# FILE: backend/feedhub/services/storage_service.py
# Local disk storage for post images.
# 1. Only png/jpg/jpeg are persisted; anything else is reported back as RejectedType.
# 2. Stored names are "<UTC timestamp>-<original basename>".
# 3. clear_image never raises: failures are logged and reported as False.

import asyncio
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Optional

import structlog
from fastapi import UploadFile

from ..core.config import settings
from ..models.upload import NoFile, RejectedType, UploadedFile, UploadOutcome

logger = structlog.get_logger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/png", "image/jpg", "image/jpeg"})

def images_root() -> Path:
    return Path(settings.IMAGES_DIR)

def build_storage_name(filename: str, now: Optional[datetime] = None) -> str:
    # Client filenames may carry directories (or Windows separators); keep the basename only.
    basename = os.path.basename(filename.replace("\\", "/")) or "upload"
    moment = now or datetime.now(timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H-%M-%S-%f')}Z-{basename}"

def _write_file(source: BinaryIO, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    source.seek(0)
    with open(destination, "wb") as target:
        shutil.copyfileobj(source, target)

async def store_image(file: Optional[UploadFile]) -> UploadOutcome:
    """Persists an uploaded image if its declared type is allowed."""
    if file is None or not file.filename:
        return NoFile()

    if file.content_type not in ALLOWED_IMAGE_TYPES:
        logger.info("storage.image_rejected", filename=file.filename, content_type=file.content_type)
        return RejectedType(filename=file.filename, content_type=file.content_type)

    destination = images_root() / build_storage_name(file.filename)
    await asyncio.to_thread(_write_file, file.file, destination)
    logger.info("storage.image_stored", path=destination.as_posix(), content_type=file.content_type)
    return UploadedFile(
        path=destination.as_posix(),
        original_filename=file.filename,
        content_type=file.content_type,
    )

def clear_image(file_path: str) -> bool:
    """Deletes a previously stored image. Paths outside the images directory are refused."""
    if not file_path:
        return False
    root = images_root().resolve()
    target = Path(file_path).resolve()
    if target == root or root not in target.parents:
        logger.warning("storage.delete_refused", path=file_path, reason="outside images directory")
        return False
    try:
        target.unlink()
        logger.info("storage.image_deleted", path=file_path)
        return True
    except OSError as e:
        logger.error("storage.delete_failed", path=file_path, error=str(e))
        return False
