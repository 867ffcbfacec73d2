"""SQLAlchemy adapter package for treesync."""

from __future__ import annotations

from .mappings import (
    enforce_foreign_keys,
    family_member_table,
    family_table,
    mapper_registry,
    relationship_table,
    start_mappers,
)
from .repositories import (
    SqlAlchemyFamilyMemberRepository,
    SqlAlchemyFamilyRepository,
    SqlAlchemyRelationshipRepository,
)
from .unit_of_work import (
    SqlAlchemyFamilyTreeUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyFamilyMemberRepository",
    "SqlAlchemyFamilyRepository",
    "SqlAlchemyFamilyTreeUnitOfWork",
    "SqlAlchemyRelationshipRepository",
    "StartupError",
    "enforce_foreign_keys",
    "family_member_table",
    "family_table",
    "mapper_registry",
    "relationship_table",
    "shutdown",
    "start_mappers",
    "startup",
]
