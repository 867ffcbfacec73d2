from __future__ import annotations

import json
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

import pytest

from treesync.domain.model import Family
from treesync.domain.sync import (
    DanglingReferenceError,
    StorageFailureError,
    SyncResult,
    TreeDraft,
    TreeSnapshot,
)
from treesync.ui import cli

if TYPE_CHECKING:
    from pathlib import Path


def _write_draft(tmp_path: Path, family_id: UUID) -> Path:
    path = tmp_path / "draft.json"
    path.write_text(
        json.dumps(
            {
                "family": {"localId": str(family_id), "name": "Cli"},
                "members": [
                    {"localId": str(uuid4()), "fullName": "Only", "gender": "OTHER"},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def _snapshot(family_id: UUID, group_id: UUID) -> TreeSnapshot:
    family = Family(id=family_id, name="Cli", owner_id=uuid4(), group_id=group_id)
    return TreeSnapshot(family=family, members=(), relationships=())


def test_sync_command_runs_sync_and_prints_snapshot(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    family_id = uuid4()
    group_id = uuid4()
    requester_id = uuid4()
    captured: dict[str, object] = {}

    def fake_sync(*, requester_id: UUID, group_id: UUID, draft: TreeDraft) -> SyncResult:
        captured.update(requester_id=requester_id, group_id=group_id, draft=draft)
        return SyncResult(snapshot=_snapshot(draft.family.id, group_id))

    monkeypatch.setattr(cli, "sync_draft", fake_sync)

    cli.main(
        [
            "sync",
            str(_write_draft(tmp_path, family_id)),
            "--group-id",
            str(group_id),
            "--requester-id",
            str(requester_id),
        ]
    )

    assert captured["requester_id"] == requester_id
    assert captured["group_id"] == group_id
    draft = captured["draft"]
    assert isinstance(draft, TreeDraft)
    assert draft.family.id == family_id
    assert len(draft.members) == 1
    output = json.loads(capsys.readouterr().out)
    assert output["family"]["id"] == str(family_id)
    assert output["family"]["groupId"] == str(group_id)


def test_invalid_uuid_exits_with_usage_code(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            [
                "sync",
                str(_write_draft(tmp_path, uuid4())),
                "--group-id",
                "not-a-uuid",
                "--requester-id",
                str(uuid4()),
            ]
        )

    assert excinfo.value.code == cli.EXIT_USAGE


def test_invalid_draft_exits_with_usage_code(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"members": []}), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            ["sync", str(path), "--group-id", str(uuid4()), "--requester-id", str(uuid4())]
        )

    assert excinfo.value.code == cli.EXIT_USAGE


def test_missing_draft_file_exits_with_usage_code(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            [
                "sync",
                str(tmp_path / "missing.json"),
                "--group-id",
                str(uuid4()),
                "--requester-id",
                str(uuid4()),
            ]
        )

    assert excinfo.value.code == cli.EXIT_USAGE


@pytest.mark.parametrize(
    "error",
    [
        DanglingReferenceError(
            family_id=uuid4(), missing_member_ids=[uuid4()], relationship_ids=["edge"]
        ),
        StorageFailureError("database is locked"),
    ],
)
def test_sync_failures_exit_with_failure_code(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    error: Exception,
) -> None:
    def fake_sync(**_: object) -> SyncResult:
        raise error

    monkeypatch.setattr(cli, "sync_draft", fake_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            [
                "sync",
                str(_write_draft(tmp_path, uuid4())),
                "--group-id",
                str(uuid4()),
                "--requester-id",
                str(uuid4()),
            ]
        )

    assert excinfo.value.code == cli.EXIT_FAILURE


def test_show_command_prints_stored_snapshot(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    family_id = uuid4()
    group_id = uuid4()

    def fake_get(*, group_id: UUID) -> TreeSnapshot:
        return _snapshot(family_id, group_id)

    monkeypatch.setattr(cli, "get_family_tree", fake_get)

    cli.main(["show", "--group-id", str(group_id)])

    output = json.loads(capsys.readouterr().out)
    assert output["family"]["id"] == str(family_id)
    assert output["members"] == []


def test_show_command_without_family_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "get_family_tree", lambda **_: None)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["show", "--group-id", str(uuid4())])

    assert excinfo.value.code == cli.EXIT_FAILURE
