"""Sync orchestrator: one atomic unit of work per family tree draft."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from treesync.domain.sync.drafts import SyncResult
from treesync.domain.sync.errors import SyncError, SyncStage
from treesync.domain.sync.family import upsert_family
from treesync.domain.sync.members import reconcile_members
from treesync.domain.sync.relationships import reconcile_relationships
from treesync.domain.sync.snapshot import load_tree_snapshot

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from treesync.domain.ports.unit_of_work import FamilyTreeUnitOfWork
    from treesync.domain.sync.drafts import TreeDraft

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def sync_family_tree(
    *,
    requester_id: UUID,
    group_id: UUID,
    draft: TreeDraft,
    unit_of_work_factory: Callable[[], FamilyTreeUnitOfWork],
    lock_family_row: bool = True,
    now_provider: Callable[[], datetime] = _utcnow,
) -> SyncResult:
    """Reconcile ``draft`` against storage and return the canonical tree.

    Family upsert, member reconciliation and relationship reconciliation run
    sequentially inside one unit of work. Any failure, cancellation included,
    rolls the unit of work back so the stored tree is left as it was.
    """

    family_id = draft.family.id
    stage = SyncStage.STARTED
    log.info(
        "Starting family sync: family=%s, group=%s, members=%s, relationships=%s",
        family_id,
        group_id,
        len(draft.members),
        len(draft.relationships),
    )

    try:
        with unit_of_work_factory() as uow:
            stage = _advance(stage, SyncStage.FAMILY_UPSERTING, family_id)
            family = upsert_family(
                uow,
                requester_id=requester_id,
                group_id=group_id,
                draft=draft.family,
                lock=lock_family_row,
            )

            stage = _advance(stage, SyncStage.MEMBERS_RECONCILING, family_id)
            members = reconcile_members(uow, family_id=family.id, drafts=draft.members)

            stage = _advance(stage, SyncStage.RELATIONSHIPS_RECONCILING, family_id)
            relationships = reconcile_relationships(
                uow,
                family_id=family.id,
                drafts=draft.relationships,
                identities=members.identities,
            )

            family.synced_at = now_provider()
            snapshot = load_tree_snapshot(uow, family)
            uow.commit()
            stage = _advance(stage, SyncStage.COMMITTED, family_id)
    except BaseException as exc:
        if isinstance(exc, SyncError) and exc.stage is None:
            exc.stage = stage
        log.warning(
            "Family sync rolled back: family=%s, stage=%s, error=%s",
            family_id,
            stage,
            type(exc).__name__,
        )
        _advance(stage, SyncStage.ROLLED_BACK, family_id)
        raise

    log.info(
        "Finished family sync: family=%s, members=%s (created=%s, updated=%s, pruned=%s), "
        "relationships=%s (replaced=%s)",
        family_id,
        len(snapshot.members),
        members.created,
        members.updated,
        members.pruned,
        len(snapshot.relationships),
        relationships.pruned,
    )
    return SyncResult(
        snapshot=snapshot,
        members_created=members.created,
        members_updated=members.updated,
        members_pruned=members.pruned,
        relationships_pruned=relationships.pruned,
    )


def _advance(current: SyncStage, target: SyncStage, family_id: UUID) -> SyncStage:
    log.debug("Family %s: %s -> %s", family_id, current, target)
    return target
