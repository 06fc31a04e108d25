"""
Shared pytest fixtures and configuration for all tests.
"""

import dataclasses
import os
import shutil
import subprocess
import uuid
from collections.abc import AsyncGenerator, Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from pytest_postgresql.exceptions import ExecutableMissingException

from usergraph.dbmodels import UserRecord
from usergraph.errors import EmailAlreadyExistsError, UserNotFoundError
from usergraph.repository import UserChanges

PROJECT_DIR = Path(__file__).parent.parent


class InMemoryUserRepository:
    """UserRepository double that keeps rows in a dict.

    Mirrors the storage rules the resolvers rely on: ids are generated on
    insert, email is unique, and callers only ever see copies of rows.
    """

    def __init__(self) -> None:
        self.rows: dict[uuid.UUID, UserRecord] = {}

    def _copy(self, record: UserRecord) -> UserRecord:
        return dataclasses.replace(record)

    def _email_taken(self, email: str, exclude: uuid.UUID | None = None) -> bool:
        return any(r.email == email and r.id != exclude for r in self.rows.values())

    async def get(self, user_id: uuid.UUID) -> UserRecord | None:
        record = self.rows.get(user_id)
        return self._copy(record) if record else None

    async def list_all(self) -> list[UserRecord]:
        return [self._copy(r) for r in self.rows.values()]

    async def create(self, *, name: str, email: str) -> UserRecord:
        if self._email_taken(email):
            raise EmailAlreadyExistsError(email)
        now = datetime.now(UTC)
        record = UserRecord(
            id=uuid.uuid4(), name=name, email=email, created_at=now, updated_at=now
        )
        self.rows[record.id] = record
        return self._copy(record)

    async def update(self, user_id: uuid.UUID, changes: UserChanges) -> UserRecord:
        record = self.rows.get(user_id)
        if record is None:
            raise UserNotFoundError(str(user_id))
        if changes.email is not None and self._email_taken(changes.email, exclude=user_id):
            raise EmailAlreadyExistsError(changes.email)
        if changes.name is not None:
            record.name = changes.name
        if changes.email is not None:
            record.email = changes.email
        record.updated_at = datetime.now(UTC)
        return self._copy(record)

    async def delete(self, user_id: uuid.UUID) -> bool:
        return self.rows.pop(user_id, None) is not None


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def graphql_context(repository: InMemoryUserRepository) -> dict[str, Any]:
    """Context dict as built by the FastAPI GraphQL router."""
    return {"request": MagicMock(), "repository": repository}


def postgres_available() -> bool:
    """Whether pytest-postgresql can find `pg_ctl` (on PATH or in pg_config's bindir)."""
    if shutil.which("pg_ctl"):
        return True

    pg_config = shutil.which("pg_config")
    if pg_config is None:
        return False

    result = subprocess.run([pg_config, "--bindir"], capture_output=True, text=True, check=False)
    bindir = result.stdout.strip()
    return bool(bindir) and (Path(bindir) / "pg_ctl").exists()


@pytest.fixture(scope="function")
def test_database(request: pytest.FixtureRequest) -> Generator[str, None, None]:
    """Return the DSN for a throwaway pytest-postgresql database."""
    if not postgres_available():
        pytest.skip("PostgreSQL server binaries not available")

    try:
        postgresql = request.getfixturevalue("postgresql")
    except ExecutableMissingException as e:
        pytest.skip(f"PostgreSQL server binaries not available: {e}")

    info = postgresql.info
    dsn = (
        f"postgresql://{info.user}:{getattr(info, 'password', '') or ''}"
        f"@{info.host}:{info.port}/{info.dbname}"
    )
    yield dsn


@pytest.fixture(scope="function")
def alembic_migrate(test_database: str) -> Generator[str, None, None]:
    """Run Alembic upgrade to head against the test database."""
    from alembic import command
    from alembic.config import Config

    os.environ["DATABASE_URL"] = test_database
    cfg = Config(str(PROJECT_DIR / "alembic.ini"))
    command.upgrade(cfg, "head")
    yield test_database
    command.downgrade(cfg, "base")


@pytest_asyncio.fixture(scope="function")
async def database(alembic_migrate: str) -> AsyncGenerator[Any, None]:
    """Database handle bound to the migrated test database."""
    from usergraph.config import Settings
    from usergraph.database import Database

    db = Database.from_settings(Settings(database_url=alembic_migrate))
    yield db
    await db.dispose()


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
