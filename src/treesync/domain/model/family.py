"""Family tree entities.

Aggregate root:
- Family owns its FamilyMembers and Relationships (strict composition, linked by
  ``family_id`` rather than object references).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, TypeAlias

from treesync.domain.model.entity import Entity
from treesync.domain.model.enums import EntityType

if TYPE_CHECKING:
    from datetime import date, datetime
    from uuid import UUID

    from treesync.domain.model.enums import Gender, LineageType, RelationshipType

Biography: TypeAlias = dict[str, Any]


@dataclass(eq=False, kw_only=True)
class Family(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.FAMILY

    name: str
    owner_id: UUID
    group_id: UUID
    description: str | None = None
    lineage_type: LineageType | None = None
    synced_at: datetime | None = None

    def rename(
        self,
        *,
        name: str,
        description: str | None,
        lineage_type: LineageType | None,
    ) -> None:
        self.name = name
        self.description = description
        self.lineage_type = lineage_type

    def reassign(self, *, owner_id: UUID, group_id: UUID) -> None:
        self.owner_id = owner_id
        self.group_id = group_id


@dataclass(eq=False, kw_only=True)
class FamilyMember(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.FAMILY_MEMBER

    family_id: UUID
    full_name: str
    gender: Gender
    generation: int = 0
    date_of_birth: date | None = None
    date_of_death: date | None = None
    is_alive: bool | None = None
    biography: Biography | None = None
    # layout only; never interpreted by the domain
    position_x: float | None = None
    position_y: float | None = None


@dataclass(eq=False, kw_only=True)
class Relationship(Entity):
    """Directed, typed edge between two members of the same family."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.RELATIONSHIP

    family_id: UUID
    from_member_id: UUID
    to_member_id: UUID
    type: RelationshipType

    @property
    def endpoints(self) -> tuple[UUID, UUID]:
        return (self.from_member_id, self.to_member_id)

    @property
    def is_self_reference(self) -> bool:
        return self.from_member_id == self.to_member_id
