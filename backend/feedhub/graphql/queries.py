from typing import Optional

import strawberry
from strawberry.types import Info

from ..core.config import settings
from ..core.errors import AppError, ErrorKind
from ..models.common import parse_object_id
from ..services import user_service
from ..services.post_service import PostService
from .context import current_user_id
from .types import AuthData, Post, PostData, User


@strawberry.type
class Query:
    @strawberry.field
    async def login(self, info: Info, email: str, password: str) -> AuthData:
        token, user = await user_service.login(info.context["db"], email, password)
        return AuthData(token=token, user_id=str(user.id))

    @strawberry.field
    async def posts(self, info: Info, page: Optional[int] = 1) -> PostData:
        current_user_id(info)
        service = PostService(info.context["db"])
        posts, total = await service.list_posts(page or 1, settings.POSTS_PER_PAGE)
        return PostData(posts=[Post.from_model(post) for post in posts], total_posts=total)

    @strawberry.field
    async def post(self, info: Info, id: strawberry.ID) -> Post:
        current_user_id(info)
        service = PostService(info.context["db"])
        post = await service.get_post(parse_object_id(id, "post id"))
        return Post.from_model(post)

    @strawberry.field
    async def user(self, info: Info) -> User:
        user_id = current_user_id(info)
        user = await user_service.get_user_by_id(info.context["db"], user_id)
        if user is None:
            raise AppError(ErrorKind.NOT_FOUND, "No user found!")
        return User.from_model(user)
