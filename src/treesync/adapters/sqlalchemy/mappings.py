"""SQLAlchemy mapping metadata for the treesync domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    TypeDecorator,
    Uuid,
    event,
    orm,
)
from sqlalchemy.orm import configure_mappers

from treesync.domain.model import (
    Family,
    FamilyMember,
    Gender,
    LineageType,
    Relationship,
    RelationshipType,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.pool import ConnectionPoolEntry

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    """Stores aware UTC timestamps; SQLite hands them back naive."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        del dialect
        if value is None:
            return None
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        del dialect
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Family tree tables -------------------------------------------------------------
# ids are client-assigned, hence no column defaults on the primary keys

family_table = Table(
    "family",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("name", String, nullable=False),
    Column("description", String, nullable=True),
    Column("owner_id", UUIDColumnType, nullable=False),
    Column("group_id", UUIDColumnType, nullable=False, index=True),
    Column("lineage_type", Enum(LineageType, native_enum=False), nullable=True),
    Column("synced_at", UTCDateTime(), nullable=True),
)

family_member_table = Table(
    "family_member",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column(
        "family_id",
        UUIDColumnType,
        ForeignKey("family.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("full_name", String, nullable=False),
    Column("gender", Enum(Gender, native_enum=False), nullable=False),
    Column("generation", Integer, nullable=False, default=0),
    Column("date_of_birth", Date, nullable=True),
    Column("date_of_death", Date, nullable=True),
    Column("is_alive", Boolean, nullable=True),
    Column("biography", JSON, nullable=True),
    Column("position_x", Float, nullable=True),
    Column("position_y", Float, nullable=True),
)

relationship_table = Table(
    "family_relationship",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column(
        "family_id",
        UUIDColumnType,
        ForeignKey("family.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "from_member_id",
        UUIDColumnType,
        ForeignKey("family_member.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "to_member_id",
        UUIDColumnType,
        ForeignKey("family_member.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("type", Enum(RelationshipType, native_enum=False), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Map the family tree entities onto their tables (idempotent)."""

    log.info("Mapping family tree entities")

    mapper_registry.map_imperatively(Family, family_table)
    mapper_registry.map_imperatively(FamilyMember, family_member_table)
    mapper_registry.map_imperatively(Relationship, relationship_table)

    configure_mappers()
    return mapper_registry


def _enable_sqlite_foreign_keys(dbapi_connection: object, _record: ConnectionPoolEntry) -> None:
    cursor = dbapi_connection.cursor()  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType, reportUnknownVariableType]
    cursor.execute("PRAGMA foreign_keys=ON")  # pyright: ignore[reportUnknownMemberType]
    cursor.close()  # pyright: ignore[reportUnknownMemberType]


def enforce_foreign_keys(engine: Engine) -> None:
    """Turn on SQLite foreign key enforcement for connections opened from now on.

    SQLite ignores ``ON DELETE CASCADE`` and dangling references unless the
    pragma is set per connection. Other dialects enforce them natively.
    """

    if engine.dialect.name != "sqlite":
        return
    if event.contains(engine, "connect", _enable_sqlite_foreign_keys):
        return
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
