from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv
from pydantic import ValidationError

from treesync.adapters.draft_json import dump_snapshot, parse_tree_draft
from treesync.app import get_family_tree, sync_draft
from treesync.config import configure_logging
from treesync.domain.sync import DanglingReferenceError, IdentityConflictError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from treesync.domain.sync import TreeDraft

log = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise family tree drafts")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Reconcile a JSON draft against storage")
    sync.add_argument("draft", type=Path, help="Path to the JSON draft, or - for stdin")
    sync.add_argument(
        "--group-id",
        type=str,
        required=True,
        help="Group containing the family",
    )
    sync.add_argument(
        "--requester-id",
        type=str,
        required=True,
        help="User performing the sync; becomes the family owner",
    )

    show = subparsers.add_parser("show", help="Print the stored tree of a group")
    show.add_argument(
        "--group-id",
        type=str,
        required=True,
        help="Group containing the family",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _read_draft(path: Path) -> TreeDraft:
    raw = sys.stdin.read() if str(path) == "-" else path.read_text(encoding="utf-8")
    try:
        return parse_tree_draft(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid draft: {exc}") from exc


def _sync_command(args: argparse.Namespace) -> int:
    try:
        group_id = _parse_uuid(args.group_id)
        requester_id = _parse_uuid(args.requester_id)
        draft = _read_draft(args.draft)
    except (OSError, ValueError):
        log.exception("Could not read sync arguments")
        return EXIT_USAGE

    result = sync_draft(requester_id=requester_id, group_id=group_id, draft=draft)
    log.info(
        "Synced family %s: members=%s (created=%s, updated=%s, pruned=%s), relationships=%s",
        result.family.id,
        len(result.members),
        result.members_created,
        result.members_updated,
        result.members_pruned,
        len(result.relationships),
    )
    print(dump_snapshot(result.snapshot))  # noqa: T201
    return 0


def _show_command(args: argparse.Namespace) -> int:
    try:
        group_id = _parse_uuid(args.group_id)
    except ValueError:
        log.exception("Could not read show arguments")
        return EXIT_USAGE

    snapshot = get_family_tree(group_id=group_id)
    if snapshot is None:
        log.error("No family stored for group %s", group_id)
        return EXIT_FAILURE
    print(dump_snapshot(snapshot))  # noqa: T201
    return 0


_COMMANDS = {"sync": _sync_command, "show": _show_command}


def main(argv: Sequence[str] | None = None) -> None:
    """Parse ``argv``, run the selected command and exit non-zero on failure."""
    args = _parse_args(list(argv) if argv is not None else sys.argv[1:])
    configure_logging(level=logging.getLevelNamesMapping()[args.log_level])

    try:
        status = _COMMANDS[args.command](args)
    except (IdentityConflictError, DanglingReferenceError) as exc:
        # stale or corrupted draft; the stored tree is untouched
        log.error("Draft rejected: %s", exc)  # noqa: TRY400
        status = EXIT_FAILURE
    except Exception:
        log.exception("Fatal error during %s", args.command)
        status = EXIT_FAILURE
    if status:
        sys.exit(status)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Exit quietly on Ctrl+C; an in-flight sync is rolled back."""
    log.info("Interrupted by user")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
