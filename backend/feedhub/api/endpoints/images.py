# FILE: backend/feedhub/api/endpoints/images.py
# Image upload for posts. The post document is updated separately through
# GraphQL with the returned filePath; the two calls are independent.

import asyncio
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from ...core.errors import AppError, ErrorKind
from ...models.upload import NoFile, RejectedType
from ...services import storage_service
from .dependencies import require_user_id

router = APIRouter(tags=["Images"])
logger = logging.getLogger(__name__)

@router.put("/post-image")
async def upload_post_image(
    user_id: Annotated[str, Depends(require_user_id)],
    image: Annotated[Optional[UploadFile], File()] = None,
    old_path: Annotated[Optional[str], Form(alias="oldPath")] = None,
):
    """
    Stores an optional image and clears ``oldPath`` when given.

    - no file        -> 200 {"message": "no file attached"}
    - wrong type     -> 415 (nothing stored)
    - stored         -> 201 {"message": "file stored", "filePath": ...}
    """
    outcome = await storage_service.store_image(image)

    if old_path:
        await asyncio.to_thread(storage_service.clear_image, old_path)

    if isinstance(outcome, RejectedType):
        raise AppError(
            ErrorKind.UNSUPPORTED_MEDIA_TYPE,
            "Unsupported file type. Allowed types: png, jpg, jpeg.",
            data={"filename": outcome.filename, "content_type": outcome.content_type},
        )

    if isinstance(outcome, NoFile):
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "no file attached"})

    logger.info(f"User {user_id} stored image {outcome.path}")
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "file stored", "filePath": outcome.path},
    )
