"""Alembic environment for treesync."""

from __future__ import annotations

from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from treesync.adapters.sqlalchemy.mappings import mapper_registry, start_mappers
from treesync.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config

start_mappers()
target_metadata = mapper_registry.metadata

_CONFIGURE_OPTIONS: dict[str, object] = {
    "target_metadata": target_metadata,
    # SQLite cannot ALTER constraints in place
    "render_as_batch": True,
    "compare_type": True,
}


def _run(connection: Connection) -> None:
    context.configure(connection=connection, **_CONFIGURE_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url") or get_database_config().uri
    context.configure(url=url, literal_binds=True, **_CONFIGURE_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        _run(connection)
        return

    url = config.get_main_option("sqlalchemy.url") or get_database_config().uri
    engine = create_engine(url, poolclass=pool.NullPool, future=True)
    try:
        with engine.connect() as fresh_connection:
            _run(fresh_connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
