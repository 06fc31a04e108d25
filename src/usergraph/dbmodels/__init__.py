"""
Database models for usergraph (authoritative table definitions).

Tables are declared as data with SQLAlchemy Core and mapped imperatively
onto plain dataclasses, so the entity types carry no ORM declarations of
their own. ``target_metadata`` is exposed for Alembic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Column,
    DateTime,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    UniqueConstraint,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import registry

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=naming_convention)
mapper_registry = registry(metadata=metadata)

USERS_EMAIL_CONSTRAINT = "users_email_key"

users_table = Table(
    "users",
    metadata,
    Column("id", Uuid, server_default=text("gen_random_uuid()")),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column(
        "created_at",
        DateTime(True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    Column(
        "updated_at",
        DateTime(True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.now(),
    ),
    PrimaryKeyConstraint("id", name="users_pkey"),
    UniqueConstraint("email", name=USERS_EMAIL_CONSTRAINT),
)


@dataclass
class UserRecord:
    """A persisted user row.

    ``id`` and the timestamps are None until the row has been flushed; the
    ORM leaves None-valued columns out of the INSERT so the server defaults
    apply.
    """

    name: str
    email: str
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


mapper_registry.map_imperatively(UserRecord, users_table)

target_metadata = metadata

__all__ = [
    "USERS_EMAIL_CONSTRAINT",
    "UserRecord",
    "mapper_registry",
    "metadata",
    "target_metadata",
    "users_table",
]
