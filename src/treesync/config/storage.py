"""Where the family tree database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_flag

APP_DIR_NAME: Final[str] = "treesync"
DEFAULT_DB_FILENAME: Final[str] = "treesync.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local data directory used when no ``DATABASE_URI`` is given."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def database_path(self) -> Path:
        directory = self.data_dir.expanduser().resolve()
        directory.mkdir(parents=True, exist_ok=True)
        return directory / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    echo: bool = False


def _platform_data_home() -> Path:
    if os.name == "nt":
        local_app_data = os.getenv("LOCALAPPDATA")
        return Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
    xdg_data_home = os.getenv("XDG_DATA_HOME")
    return Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    explicit = os.getenv("TREESYNC_DATA_DIR")
    data_dir = Path(explicit) if explicit else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    echo = env_flag("TREESYNC_SQL_ECHO", default=False)
    uri = os.getenv("DATABASE_URI") or (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri, echo=echo)
