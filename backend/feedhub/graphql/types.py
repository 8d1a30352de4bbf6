"""
GraphQL object and input types.

Field names follow the public schema (``_id``, ``imageUrl``, ``createdAt`` ...);
strawberry camel-cases the Python attribute names.
"""

from datetime import datetime
from typing import List

import strawberry
from bson import ObjectId
from strawberry.types import Info

from ..models.post import PostInDB
from ..models.user import UserInDB
from ..services import user_service
from ..services.post_service import PostService


def _iso(value: datetime) -> str:
    return value.isoformat()


@strawberry.type
class User:
    id: strawberry.ID = strawberry.field(name="_id")
    name: str
    email: str
    status: str

    @strawberry.field
    async def posts(self, info: Info) -> List["Post"]:
        service = PostService(info.context["db"])
        posts = await service.list_posts_by_creator(ObjectId(self.id))
        return [Post.from_model(post) for post in posts]

    @classmethod
    def from_model(cls, user: UserInDB) -> "User":
        return cls(id=strawberry.ID(str(user.id)), name=user.name, email=user.email, status=user.status)


@strawberry.type
class Post:
    id: strawberry.ID = strawberry.field(name="_id")
    title: str
    content: str
    image_url: str
    created_at: str
    updated_at: str
    creator_id: strawberry.Private[str]

    @strawberry.field
    async def creator(self, info: Info) -> User:
        user = await user_service.get_user_by_id(info.context["db"], ObjectId(self.creator_id))
        if user is None:
            # Creator account was removed; keep the post readable.
            return User(id=strawberry.ID(self.creator_id), name="[deleted]", email="", status="")
        return User.from_model(user)

    @classmethod
    def from_model(cls, post: PostInDB) -> "Post":
        return cls(
            id=strawberry.ID(str(post.id)),
            title=post.title,
            content=post.content,
            image_url=post.image_url,
            created_at=_iso(post.created_at),
            updated_at=_iso(post.updated_at),
            creator_id=str(post.creator),
        )


@strawberry.type
class AuthData:
    token: str
    user_id: str


@strawberry.type
class PostData:
    posts: List[Post]
    total_posts: int


@strawberry.input
class UserInputData:
    email: str
    name: str
    password: str


@strawberry.input
class PostInputData:
    title: str
    content: str
    image_url: str
