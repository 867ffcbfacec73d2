"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    FamilyMemberRepository,
    FamilyRepository,
    RelationshipRepository,
    Repository,
)
from .unit_of_work import (
    FamilyTreeRepositories,
    FamilyTreeUnitOfWork,
)

__all__ = [
    "FamilyMemberRepository",
    "FamilyRepository",
    "FamilyTreeRepositories",
    "FamilyTreeUnitOfWork",
    "RelationshipRepository",
    "Repository",
]
