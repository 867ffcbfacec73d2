from __future__ import annotations

from uuid import uuid4

from treesync.domain.sync import MemberIdentityTable


def test_resolve_returns_confirmed_ids_only() -> None:
    known = uuid4()
    table = MemberIdentityTable.of([known])

    assert table.resolve(known) == known
    assert table.resolve(uuid4()) is None


def test_table_supports_membership_and_length() -> None:
    ids = [uuid4(), uuid4(), uuid4()]
    table = MemberIdentityTable.of(ids)

    assert len(table) == 3
    assert all(member_id in table for member_id in ids)
    assert uuid4() not in table
    assert set(table) == set(ids)


def test_tables_are_independent_values() -> None:
    shared = uuid4()
    first = MemberIdentityTable.of([shared])
    second = MemberIdentityTable.of([])

    assert shared in first
    assert shared not in second
    assert len(MemberIdentityTable.of([shared, shared])) == 1
