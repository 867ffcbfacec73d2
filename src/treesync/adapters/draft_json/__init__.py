"""JSON wire adapter for family tree drafts."""

from __future__ import annotations

from .schema import TreeDraftPayload, TreeSnapshotView
from .translator import dump_snapshot, parse_tree_draft, snapshot_view, translate_tree_draft

__all__ = [
    "TreeDraftPayload",
    "TreeSnapshotView",
    "dump_snapshot",
    "parse_tree_draft",
    "snapshot_view",
    "translate_tree_draft",
]
