"""Pydantic models for the JSON wire format of drafts and snapshots.

Keys are camelCase as sent by the canvas editor; ``localId`` is accepted as an
alias of ``id`` on every draft entity.
"""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003
from typing import Any
from uuid import UUID  # noqa: TC003

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from treesync.domain.model import Gender, LineageType, RelationshipType  # noqa: TC001


class WireBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FamilyPayload(WireBaseModel):
    id: UUID = Field(validation_alias=AliasChoices("id", "localId"))
    name: str
    description: str | None = None
    lineage_type: LineageType | None = None


class MemberPayload(WireBaseModel):
    id: UUID = Field(validation_alias=AliasChoices("id", "localId"))
    full_name: str
    gender: Gender
    generation: int = 0
    date_of_birth: date | None = None
    date_of_death: date | None = None
    is_alive: bool | None = None
    biography: dict[str, Any] | None = None
    position_x: float | None = None
    position_y: float | None = None


class RelationshipPayload(WireBaseModel):
    id: str = Field(validation_alias=AliasChoices("id", "localId"))
    from_member_id: UUID
    to_member_id: UUID
    type: RelationshipType


class TreeDraftPayload(WireBaseModel):
    family: FamilyPayload
    members: list[MemberPayload] = Field(default_factory=list["MemberPayload"])
    relationships: list[RelationshipPayload] = Field(
        default_factory=list["RelationshipPayload"]
    )


class FamilyView(WireBaseModel):
    id: UUID
    name: str
    description: str | None = None
    owner_id: UUID
    group_id: UUID
    lineage_type: LineageType | None = None
    synced_at: datetime | None = None


class MemberView(WireBaseModel):
    id: UUID
    family_id: UUID
    full_name: str
    gender: Gender
    generation: int
    date_of_birth: date | None = None
    date_of_death: date | None = None
    is_alive: bool | None = None
    biography: dict[str, Any] | None = None
    position_x: float | None = None
    position_y: float | None = None


class RelationshipView(WireBaseModel):
    id: UUID
    family_id: UUID
    from_member_id: UUID
    to_member_id: UUID
    type: RelationshipType


class TreeSnapshotView(WireBaseModel):
    family: FamilyView
    members: list[MemberView]
    relationships: list[RelationshipView]
