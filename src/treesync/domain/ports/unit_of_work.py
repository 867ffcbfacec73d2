"""Transaction boundary for one family tree sync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from treesync.domain.ports.persistence import (
        FamilyMemberRepository,
        FamilyRepository,
        RelationshipRepository,
    )


@dataclass(frozen=True, slots=True)
class FamilyTreeRepositories:
    """Repositories sharing the transaction of one unit of work."""

    families: FamilyRepository
    members: FamilyMemberRepository
    relationships: RelationshipRepository


@runtime_checkable
class FamilyTreeUnitOfWork(Protocol):
    """Everything done through ``repositories`` commits or rolls back together.

    Entering opens the transaction. Leaving with an exception rolls it back;
    leaving without ``commit()`` discards it. Storage errors surface as
    ``StorageFailureError``, on entry as well as on exit.
    """

    @property
    def repositories(self) -> FamilyTreeRepositories: ...

    def __enter__(self) -> FamilyTreeUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
