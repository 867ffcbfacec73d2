"""Family graph synchronization.

Flow of one sync call, inside a single unit of work:
1) upsert the family root record (row locked for update)
2) reconcile members: reject foreign ids, prune absent ids, upsert by id
3) reconcile relationships: delete all, resolve endpoints, recreate
4) read back the canonical snapshot and commit
"""

from __future__ import annotations

from .drafts import (
    FamilyDraft,
    MemberDraft,
    RelationshipDraft,
    SyncResult,
    TreeDraft,
    TreeSnapshot,
)
from .errors import (
    DanglingReferenceError,
    IdentityConflictError,
    StorageFailureError,
    SyncError,
    SyncStage,
)
from .family import upsert_family
from .identity import MemberIdentityTable
from .members import MemberReconciliation, reconcile_members
from .orchestrator import sync_family_tree
from .relationships import RelationshipReconciliation, reconcile_relationships
from .snapshot import find_tree_snapshot, load_tree_snapshot

__all__ = [
    "DanglingReferenceError",
    "FamilyDraft",
    "IdentityConflictError",
    "MemberDraft",
    "MemberIdentityTable",
    "MemberReconciliation",
    "RelationshipDraft",
    "RelationshipReconciliation",
    "StorageFailureError",
    "SyncError",
    "SyncResult",
    "SyncStage",
    "TreeDraft",
    "TreeSnapshot",
    "find_tree_snapshot",
    "load_tree_snapshot",
    "reconcile_members",
    "reconcile_relationships",
    "sync_family_tree",
    "upsert_family",
]
