"""Relationship reconciliation: full replace of the family's edge set."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from treesync.domain.model import Relationship, new_id
from treesync.domain.sync.errors import DanglingReferenceError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from treesync.domain.ports.unit_of_work import FamilyTreeUnitOfWork
    from treesync.domain.sync.drafts import RelationshipDraft
    from treesync.domain.sync.identity import MemberIdentityTable

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RelationshipReconciliation:
    relationships: tuple[Relationship, ...]
    pruned: int = 0


def reconcile_relationships(
    uow: FamilyTreeUnitOfWork,
    *,
    family_id: UUID,
    drafts: Sequence[RelationshipDraft],
    identities: MemberIdentityTable,
) -> RelationshipReconciliation:
    """Replace every relationship of ``family_id`` with ``drafts``.

    Endpoints resolve through ``identities``; any unresolved endpoint fails the
    whole batch. Self references and duplicate pairs are stored as given. Each
    stored relationship receives a fresh server id.
    """

    repository = uow.repositories.relationships
    pruned = repository.clear(family_id)

    missing: set[UUID] = set()
    offending: list[str] = []
    resolved: list[tuple[UUID, UUID, RelationshipDraft]] = []
    for draft in drafts:
        from_id = identities.resolve(draft.from_member_id)
        to_id = identities.resolve(draft.to_member_id)
        if from_id is None or to_id is None:
            missing.update(
                member_id
                for member_id in (draft.from_member_id, draft.to_member_id)
                if member_id not in identities
            )
            offending.append(draft.id)
            continue
        resolved.append((from_id, to_id, draft))

    if offending:
        raise DanglingReferenceError(
            family_id=family_id,
            missing_member_ids=missing,
            relationship_ids=offending,
        )

    created: list[Relationship] = []
    for from_id, to_id, draft in resolved:
        relationship = Relationship(
            id=new_id(),
            family_id=family_id,
            from_member_id=from_id,
            to_member_id=to_id,
            type=draft.type,
        )
        repository.add(relationship)
        created.append(relationship)

    log.debug(
        "Replaced relationships of family %s: pruned=%s, created=%s",
        family_id,
        pruned,
        len(created),
    )
    return RelationshipReconciliation(relationships=tuple(created), pruned=pruned)
