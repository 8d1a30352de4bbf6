"""
GraphQL Schema

Builds the strawberry schema and the FastAPI router that serves it at /graphql.
Resolver errors raised as AppError are reported as {message, status, data};
every other GraphQL error keeps the standard shape.
"""

import logging
from typing import Any, List, Optional

import strawberry
from fastapi import Request
from graphql import GraphQLError
from strawberry.extensions import QueryDepthLimiter
from strawberry.fastapi import GraphQLRouter
from strawberry.http import GraphQLHTTPResponse
from strawberry.types import ExecutionResult

from ..core.errors import AppError
from .context import get_context
from .mutations import Mutation
from .queries import Query

logger = logging.getLogger(__name__)


def format_error(error: GraphQLError) -> dict[str, Any]:
    original = error.original_error
    if isinstance(original, AppError):
        return {"message": error.message or "An error occurred", "status": original.status_code, "data": original.data}
    return error.formatted


class FeedSchema(strawberry.Schema):
    def process_errors(self, errors: List[GraphQLError], execution_context: Optional[Any] = None) -> None:
        for error in errors:
            original = error.original_error
            if isinstance(original, AppError):
                logger.info(f"GraphQL {error.path}: {original!r}")
            else:
                logger.error(f"GraphQL error at {error.path}: {error.message}", exc_info=original)


class FeedGraphQLRouter(GraphQLRouter):
    async def process_result(self, request: Request, result: ExecutionResult) -> GraphQLHTTPResponse:
        data: GraphQLHTTPResponse = {"data": result.data}
        if result.errors:
            data["errors"] = [format_error(err) for err in result.errors]
        if result.extensions:
            data["extensions"] = result.extensions
        return data


schema = FeedSchema(
    query=Query,
    mutation=Mutation,
    extensions=[
        # user -> posts -> creator -> posts ... is otherwise unbounded
        lambda: QueryDepthLimiter(max_depth=10),
    ],
)

graphql_router = FeedGraphQLRouter(schema, context_getter=get_context, graphql_ide="graphiql")
