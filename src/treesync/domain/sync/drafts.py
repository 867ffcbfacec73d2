"""Client-authored drafts and the canonical views returned after a sync.

Drafts arrive structurally valid; field-level validation happens before they
reach the domain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID

    from treesync.domain.model import (
        Biography,
        Family,
        FamilyMember,
        Gender,
        LineageType,
        Relationship,
        RelationshipType,
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class FamilyDraft:
    id: UUID
    name: str
    description: str | None = None
    lineage_type: LineageType | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class MemberDraft:
    id: UUID
    full_name: str
    gender: Gender
    generation: int = 0
    date_of_birth: date | None = None
    date_of_death: date | None = None
    is_alive: bool | None = None
    biography: Biography | None = None
    position_x: float | None = None
    position_y: float | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationshipDraft:
    """Edge draft; ``id`` is a client echo id and is never persisted."""

    id: str
    from_member_id: UUID
    to_member_id: UUID
    type: RelationshipType


@dataclass(frozen=True, slots=True, kw_only=True)
class TreeDraft:
    """Full snapshot of one family tree as edited by the client."""

    family: FamilyDraft
    members: tuple[MemberDraft, ...] = field(default_factory=tuple["MemberDraft", ...])
    relationships: tuple[RelationshipDraft, ...] = field(
        default_factory=tuple["RelationshipDraft", ...]
    )

    @property
    def member_ids(self) -> frozenset[UUID]:
        return frozenset(member.id for member in self.members)


@dataclass(frozen=True, slots=True)
class TreeSnapshot:
    """Canonical server view of one family tree."""

    family: Family
    members: tuple[FamilyMember, ...]
    relationships: tuple[Relationship, ...]

    @property
    def member_ids(self) -> frozenset[UUID]:
        return frozenset(member.id for member in self.members)


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of one family tree sync."""

    snapshot: TreeSnapshot
    members_created: int = 0
    members_updated: int = 0
    members_pruned: int = 0
    relationships_pruned: int = 0

    @property
    def family(self) -> Family:
        return self.snapshot.family

    @property
    def members(self) -> tuple[FamilyMember, ...]:
        return self.snapshot.members

    @property
    def relationships(self) -> tuple[Relationship, ...]:
        return self.snapshot.relationships
