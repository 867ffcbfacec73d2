"""Translate wire payloads into domain drafts and snapshots back into payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from treesync.adapters.draft_json.schema import (
    FamilyView,
    MemberView,
    RelationshipView,
    TreeDraftPayload,
    TreeSnapshotView,
)
from treesync.domain.sync import FamilyDraft, MemberDraft, RelationshipDraft, TreeDraft

if TYPE_CHECKING:
    from treesync.domain.model import Family, FamilyMember, Relationship
    from treesync.domain.sync import TreeSnapshot


def parse_tree_draft(raw: str | bytes) -> TreeDraft:
    """Validate a JSON document and translate it into a ``TreeDraft``."""

    return translate_tree_draft(TreeDraftPayload.model_validate_json(raw))


def translate_tree_draft(payload: TreeDraftPayload) -> TreeDraft:
    family = payload.family
    return TreeDraft(
        family=FamilyDraft(
            id=family.id,
            name=family.name,
            description=family.description,
            lineage_type=family.lineage_type,
        ),
        members=tuple(
            MemberDraft(
                id=member.id,
                full_name=member.full_name,
                gender=member.gender,
                generation=member.generation,
                date_of_birth=member.date_of_birth,
                date_of_death=member.date_of_death,
                is_alive=member.is_alive,
                biography=member.biography,
                position_x=member.position_x,
                position_y=member.position_y,
            )
            for member in payload.members
        ),
        relationships=tuple(
            RelationshipDraft(
                id=relationship.id,
                from_member_id=relationship.from_member_id,
                to_member_id=relationship.to_member_id,
                type=relationship.type,
            )
            for relationship in payload.relationships
        ),
    )


def snapshot_view(snapshot: TreeSnapshot) -> TreeSnapshotView:
    return TreeSnapshotView(
        family=_family_view(snapshot.family),
        members=[_member_view(member) for member in snapshot.members],
        relationships=[_relationship_view(item) for item in snapshot.relationships],
    )


def dump_snapshot(snapshot: TreeSnapshot, *, indent: int | None = 2) -> str:
    """Serialize ``snapshot`` using the camelCase wire format."""

    return snapshot_view(snapshot).model_dump_json(by_alias=True, indent=indent)


def _family_view(family: Family) -> FamilyView:
    return FamilyView(
        id=family.id,
        name=family.name,
        description=family.description,
        owner_id=family.owner_id,
        group_id=family.group_id,
        lineage_type=family.lineage_type,
        synced_at=family.synced_at,
    )


def _member_view(member: FamilyMember) -> MemberView:
    return MemberView(
        id=member.id,
        family_id=member.family_id,
        full_name=member.full_name,
        gender=member.gender,
        generation=member.generation,
        date_of_birth=member.date_of_birth,
        date_of_death=member.date_of_death,
        is_alive=member.is_alive,
        biography=member.biography,
        position_x=member.position_x,
        position_y=member.position_y,
    )


def _relationship_view(relationship: Relationship) -> RelationshipView:
    return RelationshipView(
        id=relationship.id,
        family_id=relationship.family_id,
        from_member_id=relationship.from_member_id,
        to_member_id=relationship.to_member_id,
        type=relationship.type,
    )
