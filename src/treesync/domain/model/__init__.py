"""Public domain model surface."""

from __future__ import annotations

from treesync.domain.model.entity import Entity, new_id
from treesync.domain.model.enums import EntityType, Gender, LineageType, RelationshipType
from treesync.domain.model.family import Biography, Family, FamilyMember, Relationship

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_id",
    # family tree
    "Biography",
    "Family",
    "FamilyMember",
    "Relationship",
    # enums
    "EntityType",
    "Gender",
    "LineageType",
    "RelationshipType",
]
