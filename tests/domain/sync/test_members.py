from __future__ import annotations

from uuid import uuid4

import pytest

from tests.helpers.family_trees import FakeUnitOfWorkFactory, make_member_draft
from treesync.domain.model import Family, FamilyMember, Gender
from treesync.domain.sync import IdentityConflictError, reconcile_members


@pytest.fixture
def factory() -> FakeUnitOfWorkFactory:
    return FakeUnitOfWorkFactory()


def _seed_family(factory: FakeUnitOfWorkFactory, *members: str) -> tuple[Family, list[FamilyMember]]:
    family = Family(name="Seeded", owner_id=uuid4(), group_id=uuid4())
    factory.store.families[family.id] = family
    stored: list[FamilyMember] = []
    for name in members:
        member = FamilyMember(family_id=family.id, full_name=name, gender=Gender.OTHER)
        factory.store.members[member.id] = member
        stored.append(member)
    return family, stored


def test_reconcile_creates_members_with_client_ids(factory: FakeUnitOfWorkFactory) -> None:
    family, _ = _seed_family(factory)
    drafts = [make_member_draft("A"), make_member_draft("B", generation=1)]

    with factory() as uow:
        result = reconcile_members(uow, family_id=family.id, drafts=drafts)
        uow.commit()

    assert result.created == 2
    assert result.updated == 0
    assert result.pruned == 0
    assert set(factory.store.members) == {draft.id for draft in drafts}
    assert set(result.identities) == {draft.id for draft in drafts}
    assert factory.store.members[drafts[1].id].generation == 1


def test_reconcile_prunes_members_absent_from_draft(factory: FakeUnitOfWorkFactory) -> None:
    family, (kept, dropped) = _seed_family(factory, "Kept", "Dropped")

    with factory() as uow:
        result = reconcile_members(
            uow,
            family_id=family.id,
            drafts=[make_member_draft("Kept renamed", member_id=kept.id)],
        )
        uow.commit()

    assert result.pruned == 1
    assert result.updated == 1
    assert dropped.id not in factory.store.members
    assert factory.store.members[kept.id].full_name == "Kept renamed"


def test_empty_draft_prunes_every_member(factory: FakeUnitOfWorkFactory) -> None:
    family, _ = _seed_family(factory, "A", "B", "C")

    with factory() as uow:
        result = reconcile_members(uow, family_id=family.id, drafts=[])
        uow.commit()

    assert result.pruned == 3
    assert len(result.identities) == 0
    assert factory.store.members == {}


def test_update_is_full_replacement(factory: FakeUnitOfWorkFactory) -> None:
    family, (member,) = _seed_family(factory, "Full")
    member.biography = {"occupation": "weaver"}
    member.position_x = 10.0
    member.is_alive = True

    with factory() as uow:
        reconcile_members(
            uow,
            family_id=family.id,
            drafts=[make_member_draft("Full", member_id=member.id, gender=Gender.FEMALE)],
        )
        uow.commit()

    stored = factory.store.members[member.id]
    assert stored.gender is Gender.FEMALE
    assert stored.biography is None
    assert stored.position_x is None
    assert stored.is_alive is None


def test_repeated_draft_id_keeps_last_occurrence(factory: FakeUnitOfWorkFactory) -> None:
    family, _ = _seed_family(factory)
    member_id = uuid4()

    with factory() as uow:
        result = reconcile_members(
            uow,
            family_id=family.id,
            drafts=[
                make_member_draft("First", member_id=member_id),
                make_member_draft("Second", member_id=member_id),
            ],
        )
        uow.commit()

    assert result.created == 1
    assert factory.store.members[member_id].full_name == "Second"


def test_biography_is_copied_from_draft(factory: FakeUnitOfWorkFactory) -> None:
    family, _ = _seed_family(factory)
    biography = {"hometown": "Hue", "achievements": ["poet"]}
    draft = make_member_draft("Bio", biography=biography)

    with factory() as uow:
        reconcile_members(uow, family_id=family.id, drafts=[draft])
        uow.commit()

    stored = factory.store.members[draft.id]
    assert stored.biography == biography
    assert stored.biography is not biography


def test_ids_owned_by_another_family_are_rejected(factory: FakeUnitOfWorkFactory) -> None:
    family, (own,) = _seed_family(factory, "Own")
    other_family, (foreign,) = _seed_family(factory, "Foreign")

    with pytest.raises(IdentityConflictError) as excinfo, factory() as uow:
        reconcile_members(
            uow,
            family_id=family.id,
            drafts=[
                make_member_draft("Own", member_id=own.id),
                make_member_draft("Stolen", member_id=foreign.id),
            ],
        )

    assert excinfo.value.entity_ids == frozenset({foreign.id})
    assert excinfo.value.conflicts == {foreign.id: other_family.id}
    assert excinfo.value.family_id == family.id
    assert factory.store.members[foreign.id].family_id == other_family.id
    assert factory.last.rolled_back is True
