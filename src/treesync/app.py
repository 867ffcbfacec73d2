"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from treesync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyFamilyTreeUnitOfWork,
    is_started,
    startup,
)
from treesync.config import get_sync_config
from treesync.domain.ports.unit_of_work import FamilyTreeUnitOfWork
from treesync.domain.sync import find_tree_snapshot, sync_family_tree

if TYPE_CHECKING:
    from uuid import UUID

    from treesync.config import SyncConfig
    from treesync.domain.sync import SyncResult, TreeDraft, TreeSnapshot

UnitOfWorkFactory = Callable[[], FamilyTreeUnitOfWork]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def sync_draft(
    *,
    requester_id: UUID,
    group_id: UUID,
    draft: TreeDraft,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    sync_config: SyncConfig | None = None,
) -> SyncResult:
    """Synchronise one family tree draft using the configured adapters.

    The requester is expected to be authorised for ``group_id`` already.
    """

    config = sync_config or get_sync_config()
    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyFamilyTreeUnitOfWork
    log.info(
        "Syncing draft: group=%s, requester=%s, family=%s",
        group_id,
        requester_id,
        draft.family.id,
    )
    return sync_family_tree(
        requester_id=requester_id,
        group_id=group_id,
        draft=draft,
        unit_of_work_factory=effective_uow,
        lock_family_row=config.lock_family_row,
    )


def get_family_tree(
    *,
    group_id: UUID,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> TreeSnapshot | None:
    """Return the stored tree of the family contained in ``group_id``."""

    if unit_of_work_factory is None:
        _ensure_started()
    effective_uow = unit_of_work_factory or SqlAlchemyFamilyTreeUnitOfWork
    with effective_uow() as uow:
        snapshot = find_tree_snapshot(uow, group_id=group_id)
    if snapshot is None:
        log.info("No family stored for group %s", group_id)
    return snapshot
