"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLError
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from ..errors import UserServiceError
from ..logging import get_logger
from ..repository import UserRepository
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


class UserGraphSchema(strawberry.Schema):
    """Schema that reports execution errors through structlog."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        for error in errors:
            original = error.original_error
            path = list(error.path) if error.path else None
            if isinstance(original, UserServiceError):
                logger.warning(
                    "GraphQL execution error",
                    code=original.code.value,
                    path=path,
                    error=error.message,
                )
            elif original is None:
                # Parse and validation errors, raised before any resolver runs
                logger.warning("GraphQL request rejected", error=error.message)
            else:
                logger.error(
                    "GraphQL execution error",
                    path=path,
                    error=error.message,
                    exc_info=original,
                )


schema = UserGraphSchema(query=Query, mutation=Mutation)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Ensures every type reference resolves so the server fails fast instead of
    erroring on the first request.

    Raises:
        Exception: If the schema is invalid or introspection fails
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router(
    repository: UserRepository, *, graphiql: bool = False
) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI bound to a storage handle."""

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return {
            "request": request,
            "repository": repository,
        }

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if graphiql else None,
        context_getter=get_context,
    )
