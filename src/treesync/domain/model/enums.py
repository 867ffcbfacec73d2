"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Discriminator for log messages and error reporting."""

    FAMILY = "family"
    FAMILY_MEMBER = "family_member"
    RELATIONSHIP = "relationship"


class Gender(StrEnum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class LineageType(StrEnum):
    PATRIARCHAL = "PATRIARCHAL"
    MATRIARCHAL = "MATRIARCHAL"


class RelationshipType(StrEnum):
    PARENT = "PARENT"
    SPOUSE = "SPOUSE"
    SIBLING = "SIBLING"
