"""Family upsert: first step of every sync transaction."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from treesync.domain.model import Family

if TYPE_CHECKING:
    from uuid import UUID

    from treesync.domain.ports.unit_of_work import FamilyTreeUnitOfWork
    from treesync.domain.sync.drafts import FamilyDraft

log = getLogger(__name__)


def upsert_family(
    uow: FamilyTreeUnitOfWork,
    *,
    requester_id: UUID,
    group_id: UUID,
    draft: FamilyDraft,
    lock: bool = True,
) -> Family:
    """Create the family with the client id or overwrite its mutable fields.

    The row is read with ``for_update`` so concurrent syncs of the same family
    serialize on it.
    """

    families = uow.repositories.families
    family = families.get(draft.id, for_update=lock)
    if family is None:
        family = Family(
            id=draft.id,
            name=draft.name,
            description=draft.description,
            lineage_type=draft.lineage_type,
            owner_id=requester_id,
            group_id=group_id,
        )
        families.add(family)
        log.debug("Creating %s %s for group %s", family.entity_type, family.id, group_id)
        return family

    family.rename(
        name=draft.name,
        description=draft.description,
        lineage_type=draft.lineage_type,
    )
    family.reassign(owner_id=requester_id, group_id=group_id)
    log.debug("Updating %s %s for group %s", family.entity_type, family.id, group_id)
    return family
