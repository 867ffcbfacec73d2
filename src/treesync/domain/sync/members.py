"""Member reconciliation: set-difference prune plus upsert by durable id."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from treesync.domain.model import FamilyMember
from treesync.domain.sync.errors import IdentityConflictError
from treesync.domain.sync.identity import MemberIdentityTable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from treesync.domain.ports.unit_of_work import FamilyTreeUnitOfWork
    from treesync.domain.sync.drafts import MemberDraft

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MemberReconciliation:
    identities: MemberIdentityTable
    created: int = 0
    updated: int = 0
    pruned: int = 0


def reconcile_members(
    uow: FamilyTreeUnitOfWork,
    *,
    family_id: UUID,
    drafts: Iterable[MemberDraft],
) -> MemberReconciliation:
    """Make the persisted member set of ``family_id`` equal to ``drafts``.

    Members absent from the drafts are deleted (their relationships go with
    them); every draft overwrites the full state of the member with its id.
    """

    repository = uow.repositories.members
    # last occurrence wins for repeated ids
    by_id: dict[UUID, MemberDraft] = {draft.id: draft for draft in drafts}

    owners = repository.owners_of(by_id.keys())
    conflicts = {
        member_id: owner for member_id, owner in owners.items() if owner != family_id
    }
    if conflicts:
        raise IdentityConflictError(family_id=family_id, conflicts=conflicts)

    pruned = repository.prune(family_id, keep=by_id.keys())

    created = 0
    updated = 0
    for member_id, draft in by_id.items():
        member = repository.get(member_id)
        if member is None:
            repository.add(_new_member(family_id, draft))
            created += 1
        else:
            _overwrite_member(member, family_id, draft)
            updated += 1

    log.debug(
        "Reconciled members of family %s: created=%s, updated=%s, pruned=%s",
        family_id,
        created,
        updated,
        pruned,
    )
    return MemberReconciliation(
        identities=MemberIdentityTable.of(by_id.keys()),
        created=created,
        updated=updated,
        pruned=pruned,
    )


def _new_member(family_id: UUID, draft: MemberDraft) -> FamilyMember:
    return FamilyMember(
        id=draft.id,
        family_id=family_id,
        full_name=draft.full_name,
        gender=draft.gender,
        generation=draft.generation,
        date_of_birth=draft.date_of_birth,
        date_of_death=draft.date_of_death,
        is_alive=draft.is_alive,
        biography=_copy_biography(draft),
        position_x=draft.position_x,
        position_y=draft.position_y,
    )


def _overwrite_member(member: FamilyMember, family_id: UUID, draft: MemberDraft) -> None:
    # full replacement: absent optionals are written as absent
    member.family_id = family_id
    member.full_name = draft.full_name
    member.gender = draft.gender
    member.generation = draft.generation
    member.date_of_birth = draft.date_of_birth
    member.date_of_death = draft.date_of_death
    member.is_alive = draft.is_alive
    member.biography = _copy_biography(draft)
    member.position_x = draft.position_x
    member.position_y = draft.position_y


def _copy_biography(draft: MemberDraft) -> dict[str, object] | None:
    return dict(draft.biography) if draft.biography is not None else None
