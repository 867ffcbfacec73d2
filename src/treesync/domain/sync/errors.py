"""Errors raised while synchronizing a family tree.

Every error aborts the whole sync; the caller decides whether to retry.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID


class SyncStage(StrEnum):
    """Progress of one sync call. ROLLED_BACK is equivalent to the pre-call state."""

    STARTED = "started"
    FAMILY_UPSERTING = "family_upserting"
    MEMBERS_RECONCILING = "members_reconciling"
    RELATIONSHIPS_RECONCILING = "relationships_reconciling"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class SyncError(RuntimeError):
    """Base class for sync failures."""

    stage: SyncStage | None = None


class IdentityConflictError(SyncError):
    """Raised when draft ids are already owned by a different family."""

    def __init__(self, *, family_id: UUID, conflicts: dict[UUID, UUID]) -> None:
        self.family_id = family_id
        self.conflicts = dict(conflicts)
        listed = ", ".join(sorted(str(entity_id) for entity_id in self.conflicts))
        super().__init__(f"Ids owned by another family than {family_id}: {listed}")

    @property
    def entity_ids(self) -> frozenset[UUID]:
        return frozenset(self.conflicts)


class DanglingReferenceError(SyncError):
    """Raised when relationships name members missing from the reconciled member set."""

    def __init__(
        self,
        *,
        family_id: UUID,
        missing_member_ids: Iterable[UUID],
        relationship_ids: Iterable[str],
    ) -> None:
        self.family_id = family_id
        self.missing_member_ids = frozenset(missing_member_ids)
        self.relationship_ids = tuple(relationship_ids)
        listed = ", ".join(sorted(str(member_id) for member_id in self.missing_member_ids))
        super().__init__(
            f"{len(self.relationship_ids)} relationship(s) of family {family_id} "
            f"reference unknown members: {listed}"
        )


class StorageFailureError(SyncError):
    """Raised when the underlying transaction could not complete.

    Retrying the whole sync is safe.
    """
