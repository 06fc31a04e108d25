"""
Root GraphQL query definitions
"""

import strawberry

from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(name="getUser")
    async def get_user(self, info: strawberry.Info, id: strawberry.ID) -> User | None:
        """Get a user by ID. Returns null when no such user exists."""
        from ..resolvers.user import resolve_user_by_id

        return await resolve_user_by_id(info, id)

    @strawberry.field(name="getUsers")
    async def get_users(self, info: strawberry.Info) -> list[User | None] | None:
        """Get every user."""
        from ..resolvers.user import resolve_users

        return await resolve_users(info)
