"""Typed readers for environment variables."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Read every variable in ``names``; blank values count as missing."""

    values = {name: os.getenv(name, "") for name in names}
    missing = sorted(name for name, value in values.items() if not value.strip())
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
    return values


def require_env_var(name: str) -> str:
    """Return a required environment variable by name."""

    return require_env_vars([name])[name]


def env_flag(name: str, *, default: bool) -> bool:
    """Read a boolean flag such as ``1``/``0`` or ``true``/``false``."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {raw!r}")
