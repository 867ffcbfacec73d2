"""Alembic migrations for the family tree schema.

Revisions live in ``versions/`` next to this module; no ``alembic.ini`` is
needed because the configuration is assembled in code.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from treesync.config import get_database_config

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent
HEAD: Final[str] = "head"

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def alembic_config(*, database_uri: str | None = None) -> Config:
    """Return an Alembic ``Config`` pointing at the bundled revisions."""

    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    if database_uri is not None:
        config.set_main_option("sqlalchemy.url", database_uri)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Migrate the database behind ``engine`` (or ``database_uri``) to the latest revision."""

    if engine is None:
        command.upgrade(
            alembic_config(database_uri=database_uri or get_database_config().uri), HEAD
        )
        return

    config = alembic_config()
    with engine.begin() as connection:
        # env.py reuses this connection instead of opening its own
        config.attributes["connection"] = connection
        command.upgrade(config, HEAD)
