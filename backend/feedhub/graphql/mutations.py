import strawberry
from strawberry.types import Info

from ..models.common import parse_object_id
from ..models.post import PostInput
from ..models.user import UserCreate, UserStatusUpdate
from ..services import user_service
from ..services.post_service import PostService
from .context import current_user_id, validated
from .types import Post, PostInputData, User, UserInputData


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_user(self, info: Info, user_input: UserInputData) -> User:
        data = validated(UserCreate, email=user_input.email, name=user_input.name, password=user_input.password)
        user = await user_service.create(info.context["db"], data)
        return User.from_model(user)

    @strawberry.mutation
    async def create_post(self, info: Info, post_input: PostInputData) -> Post:
        user_id = current_user_id(info)
        data = validated(PostInput, title=post_input.title, content=post_input.content, image_url=post_input.image_url)
        post = await PostService(info.context["db"]).create_post(user_id, data)
        return Post.from_model(post)

    @strawberry.mutation
    async def update_post(self, info: Info, id: strawberry.ID, post_input: PostInputData) -> Post:
        user_id = current_user_id(info)
        post_id = parse_object_id(id, "post id")
        data = validated(PostInput, title=post_input.title, content=post_input.content, image_url=post_input.image_url)
        post = await PostService(info.context["db"]).update_post(post_id, user_id, data)
        return Post.from_model(post)

    @strawberry.mutation
    async def delete_post(self, info: Info, id: strawberry.ID) -> bool:
        user_id = current_user_id(info)
        return await PostService(info.context["db"]).delete_post(parse_object_id(id, "post id"), user_id)

    @strawberry.mutation
    async def update_status(self, info: Info, status: str) -> User:
        user_id = current_user_id(info)
        data = validated(UserStatusUpdate, status=status)
        user = await user_service.update_status(info.context["db"], user_id, data.status)
        return User.from_model(user)
