"""Read-back of the canonical family tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from treesync.domain.sync.drafts import TreeSnapshot

if TYPE_CHECKING:
    from uuid import UUID

    from treesync.domain.model import Family
    from treesync.domain.ports.unit_of_work import FamilyTreeUnitOfWork


def load_tree_snapshot(uow: FamilyTreeUnitOfWork, family: Family) -> TreeSnapshot:
    """Read every persisted member and relationship of ``family``."""

    repositories = uow.repositories
    return TreeSnapshot(
        family=family,
        members=tuple(repositories.members.list_for_family(family.id)),
        relationships=tuple(repositories.relationships.list_for_family(family.id)),
    )


def find_tree_snapshot(uow: FamilyTreeUnitOfWork, *, group_id: UUID) -> TreeSnapshot | None:
    """Return the snapshot of the family contained in ``group_id``, if any."""

    family = uow.repositories.families.get_by_group(group_id)
    if family is None:
        return None
    return load_tree_snapshot(uow, family)
