"""Identity model for a single sync transaction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class MemberIdentityTable:
    """Member ids confirmed by the member reconciler.

    Member ids are client-assigned and persisted as-is, so resolution is a
    membership test. The table lives for one transaction only.
    """

    member_ids: frozenset[UUID]

    @classmethod
    def of(cls, member_ids: Iterable[UUID]) -> MemberIdentityTable:
        return cls(frozenset(member_ids))

    def resolve(self, member_id: UUID) -> UUID | None:
        """Return the persisted id for ``member_id`` or ``None`` when unknown."""
        return member_id if member_id in self.member_ids else None

    def __contains__(self, member_id: object) -> bool:
        return member_id in self.member_ids

    def __iter__(self) -> Iterator[UUID]:
        return iter(self.member_ids)

    def __len__(self) -> int:
        return len(self.member_ids)
