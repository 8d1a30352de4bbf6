# FILE: backend/feedhub/services/post_service.py
# Post CRUD over Motor. Ownership checks compare the stored creator id
# with the authenticated user id; the stored image is cleared on replace/delete.

import asyncio
from datetime import datetime, timezone
from typing import Any, List, Tuple

import structlog
from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument

from ..core.errors import AppError, ErrorKind
from ..models.post import PostInDB, PostInput
from . import storage_service

logger = structlog.get_logger(__name__)

# Sentinel the web client sends when the user kept the current image.
KEEP_IMAGE = "undefined"

class PostService:
    def __init__(self, db: Any):
        self.db = db

    async def list_posts(self, page: int, per_page: int) -> Tuple[List[PostInDB], int]:
        """Newest first; page numbers below 1 are treated as the first page."""
        page = max(page, 1)
        total = await self.db.posts.count_documents({})
        cursor = self.db.posts.find(
            {},
            sort=[("created_at", DESCENDING)],
            skip=(page - 1) * per_page,
            limit=per_page,
        )
        docs = await cursor.to_list(length=per_page)
        return [PostInDB.model_validate(doc) for doc in docs], total

    async def list_posts_by_creator(self, creator_id: ObjectId) -> List[PostInDB]:
        cursor = self.db.posts.find({"creator": creator_id}, sort=[("created_at", DESCENDING)])
        docs = await cursor.to_list(length=None)
        return [PostInDB.model_validate(doc) for doc in docs]

    async def get_post(self, post_id: ObjectId) -> PostInDB:
        doc = await self.db.posts.find_one({"_id": post_id})
        if not doc:
            raise AppError(ErrorKind.NOT_FOUND, "No post found!")
        return PostInDB.model_validate(doc)

    async def create_post(self, creator_id: ObjectId, data: PostInput) -> PostInDB:
        if not await self.db.users.find_one({"_id": creator_id}, {"_id": 1}):
            raise AppError(ErrorKind.UNAUTHENTICATED, "Invalid user.")

        now = datetime.now(timezone.utc)
        post_data = {
            "title": data.title,
            "content": data.content,
            "image_url": data.image_url,
            "creator": creator_id,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.db.posts.insert_one(post_data)
        logger.info("post.created", post_id=str(result.inserted_id), creator_id=str(creator_id))
        return await self.get_post(result.inserted_id)

    async def _get_owned_post(self, post_id: ObjectId, user_id: ObjectId) -> PostInDB:
        post = await self.get_post(post_id)
        if post.creator != user_id:
            raise AppError(ErrorKind.FORBIDDEN, "Not authorized!")
        return post

    async def update_post(self, post_id: ObjectId, user_id: ObjectId, data: PostInput) -> PostInDB:
        post = await self._get_owned_post(post_id, user_id)

        image_url = post.image_url if data.image_url == KEEP_IMAGE else data.image_url
        updated = await self.db.posts.find_one_and_update(
            {"_id": post_id},
            {"$set": {
                "title": data.title,
                "content": data.content,
                "image_url": image_url,
                "updated_at": datetime.now(timezone.utc),
            }},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise AppError(ErrorKind.NOT_FOUND, "No post found!")

        if image_url != post.image_url:
            await asyncio.to_thread(storage_service.clear_image, post.image_url)
        logger.info("post.updated", post_id=str(post_id))
        return PostInDB.model_validate(updated)

    async def delete_post(self, post_id: ObjectId, user_id: ObjectId) -> bool:
        post = await self._get_owned_post(post_id, user_id)
        await self.db.posts.delete_one({"_id": post_id})
        await asyncio.to_thread(storage_service.clear_image, post.image_url)
        logger.info("post.deleted", post_id=str(post_id))
        return True
