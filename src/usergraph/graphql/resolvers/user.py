from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...errors import InvalidUserInputError, UserNotFoundError
from ...logging import get_logger
from ...repository import UserChanges

if TYPE_CHECKING:
    from ...repository import UserRepository
    from ..types.user import User

logger = get_logger(__name__)


def get_repository(info: strawberry.Info) -> UserRepository:
    """Return the storage handle the application placed in the GraphQL context."""
    return info.context["repository"]


def parse_user_id(value: str) -> UUID | None:
    """Parse an opaque ``ID`` into a primary key. Malformed ids match no user."""
    try:
        return UUID(str(value))
    except ValueError:
        return None


def require_non_empty(field: str, value: str) -> str:
    """Reject empty and whitespace-only values for required columns."""
    if not value.strip():
        raise InvalidUserInputError(field)
    return value


def optional_change(field: str, value: str | None) -> str | None:
    """Collapse the absent / null / value tri-state into "keep" (None) or a new value."""
    if value is strawberry.UNSET or value is None:
        return None
    return require_non_empty(field, value)


# Query resolvers
async def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    user_id = parse_user_id(id)
    if user_id is None:
        logger.info("Malformed user id", user_id=id)
        return None

    record = await get_repository(info).get(user_id)
    if record is None:
        logger.info("User not found", user_id=id)
        return None

    from ..types.user import User as UserType

    return UserType.from_record(record)


async def resolve_users(info: strawberry.Info) -> list[User]:
    records = await get_repository(info).list_all()

    from ..types.user import User as UserType

    return [UserType.from_record(record) for record in records]


# Mutation resolvers
async def create_user(info: strawberry.Info, name: str, email: str) -> User:
    """
    Create a new user.

    The database assigns the id; a duplicate email fails with
    EmailAlreadyExistsError.
    """
    require_non_empty("name", name)
    require_non_empty("email", email)

    record = await get_repository(info).create(name=name, email=email)
    logger.info("User created", user_id=str(record.id))

    from ..types.user import User as UserType

    return UserType.from_record(record)


async def update_user(
    info: strawberry.Info,
    id: str,
    name: str | None = strawberry.UNSET,
    email: str | None = strawberry.UNSET,
) -> User:
    """
    Update the supplied fields of an existing user.

    Omitted and null arguments leave the stored value untouched.
    """
    changes = UserChanges(
        name=optional_change("name", name),
        email=optional_change("email", email),
    )

    user_id = parse_user_id(id)
    if user_id is None:
        raise UserNotFoundError(id)

    record = await get_repository(info).update(user_id, changes)
    logger.info("User updated", user_id=id, updated_fields=changes.fields())

    from ..types.user import User as UserType

    return UserType.from_record(record)


async def delete_user(info: strawberry.Info, id: str) -> bool:
    """Delete a user. Deleting an unknown id is not an error and returns False."""
    user_id = parse_user_id(id)
    if user_id is None:
        return False

    deleted = await get_repository(info).delete(user_id)
    if deleted:
        logger.info("User deleted", user_id=id)
    else:
        logger.info("User not found for deletion", user_id=id)
    return deleted
