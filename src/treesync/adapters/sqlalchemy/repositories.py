"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, select

from treesync.adapters.sqlalchemy.mappings import (
    family_member_table,
    family_table,
    relationship_table,
)
from treesync.domain.model import Family, FamilyMember, Relationship

if TYPE_CHECKING:
    import uuid
    from collections.abc import Collection, Sequence

    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import Session


class SqlAlchemyFamilyRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Family) -> None:
        self.session.add(entity)

    def get(self, family_id: uuid.UUID, *, for_update: bool = False) -> Family | None:
        stmt = select(Family).where(family_table.c.id == family_id)
        if for_update:
            # ignored by SQLite, which serializes writers on the database lock
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_group(self, group_id: uuid.UUID) -> Family | None:
        stmt = (
            select(Family)
            .where(family_table.c.group_id == group_id)
            .order_by(family_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyFamilyMemberRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: FamilyMember) -> None:
        self.session.add(entity)

    def get(self, member_id: uuid.UUID) -> FamilyMember | None:
        return self.session.get(FamilyMember, member_id)

    def owners_of(self, member_ids: Collection[uuid.UUID]) -> dict[uuid.UUID, uuid.UUID]:
        if not member_ids:
            return {}
        stmt = select(family_member_table.c.id, family_member_table.c.family_id).where(
            family_member_table.c.id.in_(list(member_ids))
        )
        return {member_id: family_id for member_id, family_id in self.session.execute(stmt)}

    def prune(self, family_id: uuid.UUID, *, keep: Collection[uuid.UUID]) -> int:
        stmt = delete(FamilyMember).where(family_member_table.c.family_id == family_id)
        if keep:
            stmt = stmt.where(family_member_table.c.id.not_in(list(keep)))
        result = cast("CursorResult[tuple[()]]", self.session.execute(stmt))
        return result.rowcount

    def list_for_family(self, family_id: uuid.UUID) -> Sequence[FamilyMember]:
        stmt = (
            select(FamilyMember)
            .where(family_member_table.c.family_id == family_id)
            .order_by(
                family_member_table.c.generation,
                family_member_table.c.full_name,
                family_member_table.c.id,
            )
        )
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyRelationshipRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Relationship) -> None:
        self.session.add(entity)

    def clear(self, family_id: uuid.UUID) -> int:
        stmt = delete(Relationship).where(relationship_table.c.family_id == family_id)
        result = cast("CursorResult[tuple[()]]", self.session.execute(stmt))
        return result.rowcount

    def list_for_family(self, family_id: uuid.UUID) -> Sequence[Relationship]:
        stmt = (
            select(Relationship)
            .where(relationship_table.c.family_id == family_id)
            .order_by(
                relationship_table.c.from_member_id,
                relationship_table.c.to_member_id,
                relationship_table.c.type,
            )
        )
        return self.session.execute(stmt).scalars().all()


if TYPE_CHECKING:
    from treesync.domain.ports.persistence import (
        FamilyMemberRepository,
        FamilyRepository,
        RelationshipRepository,
    )

    _session_stub = cast("Session", object())
    _family_repo: FamilyRepository = SqlAlchemyFamilyRepository(_session_stub)
    _member_repo: FamilyMemberRepository = SqlAlchemyFamilyMemberRepository(_session_stub)
    _relationship_repo: RelationshipRepository = SqlAlchemyRelationshipRepository(_session_stub)
