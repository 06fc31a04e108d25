"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import UserRecord


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: strawberry.ID
    name: str
    email: str

    @classmethod
    def from_record(cls, record: "UserRecord") -> "User":
        return cls(id=strawberry.ID(str(record.id)), name=record.name, email=record.email)
