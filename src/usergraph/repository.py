"""Repository for the users table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from .database import Database
from .dbmodels import USERS_EMAIL_CONSTRAINT, UserRecord
from .errors import EmailAlreadyExistsError, UserNotFoundError

UNIQUE_VIOLATION_SQLSTATE = "23505"


@dataclass(frozen=True)
class UserChanges:
    """Fields to overwrite on update. ``None`` means "keep the stored value"."""

    name: str | None = None
    email: str | None = None

    def fields(self) -> list[str]:
        return [k for k, v in (("name", self.name), ("email", self.email)) if v is not None]


class UserRepository(Protocol):
    """Storage handle used by the GraphQL resolvers."""

    async def get(self, user_id: UUID) -> UserRecord | None:
        """Return the user with this id, or None."""
        ...

    async def list_all(self) -> list[UserRecord]:
        """Return every user in storage order."""
        ...

    async def create(self, *, name: str, email: str) -> UserRecord:
        """
        Insert a user and return it with its generated id.

        Raises:
            EmailAlreadyExistsError: If the email is already taken
        """
        ...

    async def update(self, user_id: UUID, changes: UserChanges) -> UserRecord:
        """
        Apply ``changes`` to an existing user and return the merged record.

        Raises:
            UserNotFoundError: If no user has this id
            EmailAlreadyExistsError: If the new email is already taken
        """
        ...

    async def delete(self, user_id: UUID) -> bool:
        """Delete a user. Returns False when there was nothing to delete."""
        ...


def is_unique_email_violation(error: IntegrityError) -> bool:
    orig = error.orig
    if USERS_EMAIL_CONSTRAINT in str(orig):
        return True
    return getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE


class SqlAlchemyUserRepository:
    """UserRepository backed by an async SQLAlchemy session per call."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def get(self, user_id: UUID) -> UserRecord | None:
        async with self.database.session() as session:
            return await session.get(UserRecord, user_id)

    async def list_all(self) -> list[UserRecord]:
        async with self.database.session() as session:
            result = await session.execute(select(UserRecord))
            return list(result.scalars().all())

    async def create(self, *, name: str, email: str) -> UserRecord:
        record = UserRecord(name=name, email=email)
        try:
            async with self.database.session() as session:
                session.add(record)
                await session.flush()
                await session.refresh(record)
        except IntegrityError as e:
            if is_unique_email_violation(e):
                raise EmailAlreadyExistsError(email) from e
            raise
        return record

    async def update(self, user_id: UUID, changes: UserChanges) -> UserRecord:
        try:
            async with self.database.session() as session:
                record = await session.get(UserRecord, user_id)
                if record is None:
                    raise UserNotFoundError(str(user_id))

                if changes.name is not None:
                    record.name = changes.name
                if changes.email is not None:
                    record.email = changes.email

                await session.flush()
                await session.refresh(record)
        except IntegrityError as e:
            if changes.email is not None and is_unique_email_violation(e):
                raise EmailAlreadyExistsError(changes.email) from e
            raise
        return record

    async def delete(self, user_id: UUID) -> bool:
        async with self.database.session() as session:
            record = await session.get(UserRecord, user_id)
            if record is None:
                return False
            await session.delete(record)
        return True
