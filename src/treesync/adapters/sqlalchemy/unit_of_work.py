"""SQLAlchemy-backed unit of work for family tree syncs.

``startup()`` binds the module to one engine (migrated to the latest schema);
every ``SqlAlchemyFamilyTreeUnitOfWork`` then opens a fresh session on it,
pinned to the configured isolation level.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from treesync.adapters.sqlalchemy.mappings import enforce_foreign_keys, start_mappers
from treesync.adapters.sqlalchemy.migrations import upgrade_head
from treesync.adapters.sqlalchemy.repositories import (
    SqlAlchemyFamilyMemberRepository,
    SqlAlchemyFamilyRepository,
    SqlAlchemyRelationshipRepository,
)
from treesync.config import SyncConfig, get_database_config, get_sync_config
from treesync.domain.ports.unit_of_work import FamilyTreeRepositories
from treesync.domain.sync.errors import StorageFailureError

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the adapter is used before ``startup()`` or started twice."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None
    isolation_level: str | None = None

    def bind(self, engine: Engine, isolation_level: str) -> None:
        self.engine = engine
        self.sessions = sessionmaker(bind=engine, expire_on_commit=False)
        self.isolation_level = isolation_level

    def reset(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.sessions = None
        self.isolation_level = None

    def require_sessions(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError(
                "SQLAlchemy adapter not started; call "
                "treesync.adapters.sqlalchemy.startup() first."
            )
        return self.sessions


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    isolation_level: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one), migrating it to head."""

    if _STATE.engine is not None and not force:
        raise StartupError("SQLAlchemy adapter already started. Pass force=True to rebind.")
    requested_level = (
        SyncConfig(isolation_level=isolation_level).isolation_level
        if isolation_level is not None
        else get_sync_config().isolation_level
    )

    if engine is None:
        database = get_database_config()
        engine = create_engine(database_uri or database.uri, echo=database.echo, future=True)
    enforce_foreign_keys(engine)
    start_mappers()
    upgrade_head(engine=engine)

    # SQLite only knows SERIALIZABLE and READ UNCOMMITTED
    level = "SERIALIZABLE" if engine.dialect.name == "sqlite" else requested_level
    if _STATE.engine is not None and _STATE.engine is not engine:
        _STATE.engine.dispose()
    _STATE.bind(engine, level)
    log.info("SQLAlchemy adapter started: dialect=%s, isolation=%s", engine.dialect.name, level)


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; mainly for tests."""

    _STATE.reset()


class SqlAlchemyFamilyTreeUnitOfWork:
    """One session and one transaction per ``with`` block.

    Leaving the block without ``commit()`` discards the work. A
    ``SQLAlchemyError`` raised while opening the transaction, or escaping the
    block, is re-raised as ``StorageFailureError``.
    """

    def __init__(self) -> None:
        self.session_factory = _STATE.require_sessions()
        self.isolation_level = _STATE.isolation_level
        self._active: Session | None = None
        self._repositories: FamilyTreeRepositories | None = None

    def __enter__(self) -> SqlAlchemyFamilyTreeUnitOfWork:
        if self._active is not None:
            raise StartupError("Unit of work already entered")
        session = self.session_factory()
        try:
            if self.isolation_level is not None:
                # has to be the first statement of the transaction
                session.connection(execution_options={"isolation_level": self.isolation_level})
            else:
                session.connection()
        except SQLAlchemyError as exc:
            session.close()
            raise StorageFailureError(f"Could not open transaction: {exc}") from exc
        self._active = session
        self._repositories = FamilyTreeRepositories(
            families=SqlAlchemyFamilyRepository(session),
            members=SqlAlchemyFamilyMemberRepository(session),
            relationships=SqlAlchemyRelationshipRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._active = None
            self._repositories = None
        if isinstance(exc_value, SQLAlchemyError):
            raise StorageFailureError(f"Transaction rolled back: {exc_value}") from exc_value
        return False

    @property
    def session(self) -> Session:
        if self._active is None:
            raise StartupError("Unit of work is not active")
        return self._active

    @property
    def repositories(self) -> FamilyTreeRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not active")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from treesync.domain.ports.unit_of_work import FamilyTreeUnitOfWork

    _uow_check: FamilyTreeUnitOfWork = SqlAlchemyFamilyTreeUnitOfWork()
