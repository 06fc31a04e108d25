"""
Typed error taxonomy for user operations.

Each error carries a stable ``code``. graphql-core copies the ``extensions``
attribute of an exception raised inside a resolver onto the located GraphQL
error, so clients receive ``errors[].extensions.code`` without string
matching on messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    BAD_USER_INPUT = "BAD_USER_INPUT"


class UserServiceError(Exception):
    """Base class for errors surfaced to GraphQL clients."""

    code: ErrorCode

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": self.code.value, **self.details}


class UserNotFoundError(UserServiceError):
    """Raised when an operation requires a user that does not exist."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}", id=user_id)


class EmailAlreadyExistsError(UserServiceError):
    """Raised when the unique email constraint rejects a write."""

    code = ErrorCode.CONSTRAINT_VIOLATION

    def __init__(self, email: str) -> None:
        super().__init__(f"A user with email '{email}' already exists", field="email")


class InvalidUserInputError(UserServiceError):
    """Raised when a required field is supplied as an empty string."""

    code = ErrorCode.BAD_USER_INPUT

    def __init__(self, field: str) -> None:
        super().__init__(f"'{field}' must not be empty", field=field)
