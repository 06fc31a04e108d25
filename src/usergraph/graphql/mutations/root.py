"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.user import User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createUser")
    async def create_user(self, info: strawberry.Info, name: str, email: str) -> User:
        """Create a new user."""
        from ..resolvers.user import create_user

        return await create_user(info, name, email)

    @strawberry.mutation(name="updateUser")
    async def update_user(
        self,
        info: strawberry.Info,
        id: strawberry.ID,
        name: str | None = strawberry.UNSET,
        email: str | None = strawberry.UNSET,
    ) -> User:
        """Update an existing user. Omitted fields keep their stored value."""
        from ..resolvers.user import update_user

        return await update_user(info, id, name=name, email=email)

    @strawberry.mutation(name="deleteUser")
    async def delete_user(self, info: strawberry.Info, id: strawberry.ID) -> bool:
        """Delete a user. Returns false when the user does not exist."""
        from ..resolvers.user import delete_user

        return await delete_user(info, id)
