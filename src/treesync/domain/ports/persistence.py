"""Ports for persisting the family tree aggregate."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

from treesync.domain.model import Family, FamilyMember, Relationship

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from uuid import UUID

TEntity = TypeVar("TEntity")


@runtime_checkable
class Repository(Protocol[TEntity]):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class FamilyRepository(Repository[Family], Protocol):
    """Persistence contract for family root records."""

    def get(self, family_id: UUID, *, for_update: bool = False) -> Family | None: ...

    def get_by_group(self, group_id: UUID) -> Family | None: ...


@runtime_checkable
class FamilyMemberRepository(Repository[FamilyMember], Protocol):
    """Persistence contract for family members."""

    def get(self, member_id: UUID) -> FamilyMember | None: ...

    def owners_of(self, member_ids: Collection[UUID]) -> dict[UUID, UUID]:
        """Return ``{member_id: family_id}`` for the ids that already exist."""
        ...

    def prune(self, family_id: UUID, *, keep: Collection[UUID]) -> int:
        """Delete members of ``family_id`` whose id is not in ``keep``."""
        ...

    def list_for_family(self, family_id: UUID) -> Sequence[FamilyMember]: ...


@runtime_checkable
class RelationshipRepository(Repository[Relationship], Protocol):
    """Persistence contract for relationships."""

    def clear(self, family_id: UUID) -> int:
        """Delete every relationship of ``family_id``."""
        ...

    def list_for_family(self, family_id: UUID) -> Sequence[Relationship]: ...
