from __future__ import annotations

from uuid import uuid4

from tests.helpers.family_trees import FakeFamilyRepository, FakeUnitOfWorkFactory
from treesync.domain.model import LineageType
from treesync.domain.sync import FamilyDraft, upsert_family


def test_upsert_creates_family_with_client_id() -> None:
    factory = FakeUnitOfWorkFactory()
    requester = uuid4()
    group = uuid4()
    draft = FamilyDraft(id=uuid4(), name="Nguyen", lineage_type=LineageType.PATRIARCHAL)

    with factory() as uow:
        family = upsert_family(uow, requester_id=requester, group_id=group, draft=draft)
        uow.commit()

    assert family.id == draft.id
    assert family.owner_id == requester
    assert family.group_id == group
    assert factory.store.families[draft.id].lineage_type is LineageType.PATRIARCHAL


def test_upsert_overwrites_existing_family_fields() -> None:
    factory = FakeUnitOfWorkFactory()
    family_id = uuid4()
    with factory() as uow:
        upsert_family(
            uow,
            requester_id=uuid4(),
            group_id=uuid4(),
            draft=FamilyDraft(id=family_id, name="Old", description="first"),
        )
        uow.commit()

    new_owner = uuid4()
    new_group = uuid4()
    with factory() as uow:
        family = upsert_family(
            uow,
            requester_id=new_owner,
            group_id=new_group,
            draft=FamilyDraft(id=family_id, name="New"),
        )
        uow.commit()

    stored = factory.store.families[family_id]
    assert len(factory.store.families) == 1
    assert family.id == family_id
    assert stored.name == "New"
    assert stored.description is None
    assert stored.owner_id == new_owner
    assert stored.group_id == new_group


def test_upsert_locks_the_family_row_unless_disabled() -> None:
    factory = FakeUnitOfWorkFactory()
    draft = FamilyDraft(id=uuid4(), name="Locked")

    with factory() as uow:
        upsert_family(uow, requester_id=uuid4(), group_id=uuid4(), draft=draft)
        families = uow.repositories.families
        assert isinstance(families, FakeFamilyRepository)
        assert families.locked == [draft.id]

    with factory() as uow:
        upsert_family(uow, requester_id=uuid4(), group_id=uuid4(), draft=draft, lock=False)
        families = uow.repositories.families
        assert isinstance(families, FakeFamilyRepository)
        assert families.locked == []
