"""Transaction settings for family tree syncs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .env import env_flag
from .errors import ConfigurationError

DEFAULT_ISOLATION_LEVEL: Final[str] = "SERIALIZABLE"
# read committed lets one sync's prune race another's upsert on the same member id
SUPPORTED_ISOLATION_LEVELS: Final[frozenset[str]] = frozenset({"REPEATABLE READ", "SERIALIZABLE"})


@dataclass(frozen=True, slots=True)
class SyncConfig:
    isolation_level: str = DEFAULT_ISOLATION_LEVEL
    lock_family_row: bool = True

    def __post_init__(self) -> None:
        if self.isolation_level not in SUPPORTED_ISOLATION_LEVELS:
            supported = ", ".join(sorted(SUPPORTED_ISOLATION_LEVELS))
            raise ConfigurationError(
                f"Unsupported isolation level {self.isolation_level!r} (expected one of: {supported})"
            )


def get_sync_config() -> SyncConfig:
    raw_level = os.getenv("TREESYNC_ISOLATION_LEVEL")
    level = (
        " ".join(raw_level.replace("_", " ").split()).upper()
        if raw_level and raw_level.strip()
        else DEFAULT_ISOLATION_LEVEL
    )
    return SyncConfig(
        isolation_level=level,
        lock_family_row=env_flag("TREESYNC_LOCK_FAMILY_ROW", default=True),
    )
