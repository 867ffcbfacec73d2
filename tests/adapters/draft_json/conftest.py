from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def draft_json() -> str:
    path = Path(__file__).resolve().parents[2] / "data" / "draft_nguyen.json"
    return path.read_text(encoding="utf-8")
