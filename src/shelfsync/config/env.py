"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


def require_env_vars(
    names: Sequence[str],
    *,
    fallback_files: Mapping[str, Path] | None = None,
    aliases: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank.

    ``fallback_files`` maps a variable name to a file whose stripped content is
    used when the variable is unset, for credentials kept in a local ``.config``
    directory instead of the environment. ``aliases`` maps a variable name to an
    older name that is read when the current one is unset.
    """

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if (value is None or not value.strip()) and aliases and name in aliases:
            value = os.getenv(aliases[name])
        if (value is None or not value.strip()) and fallback_files and name in fallback_files:
            value = _read_secret_file(fallback_files[name])
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value.strip()

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def require_env_var(name: str) -> str:
    """Return a required environment variable by name."""

    return require_env_vars([name])[name]


def optional_env_var(name: str) -> str | None:
    """Return an environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _read_secret_file(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
