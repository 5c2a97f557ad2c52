"""Locating and reading reqctl configuration.

Settings live either in a dedicated ``reqctl.toml`` or in the ``[tool.reqctl]``
table of a ``pyproject.toml``.  The nearest directory (starting at the CWD and
moving towards the filesystem root) holding either file wins; within one
directory ``reqctl.toml`` is preferred.  ``REQCTL_CONFIG`` names a file
directly and disables the search.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "reqctl.toml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TABLE = ("tool", "reqctl")
CONFIG_ENV_VAR = "REQCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: CWD), if any.

    A ``pyproject.toml`` only counts when its ``[tool.reqctl]`` table holds settings.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        dedicated = candidate_dir / CONFIG_FILENAME
        if dedicated.is_file():
            return dedicated
        pyproject = candidate_dir / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def read_config_table(path: Path) -> dict[str, Any]:
    """Settings mapping stored in *path*.

    For a ``pyproject.toml`` this is the ``[tool.reqctl]`` table (empty when
    absent); any other file is read as a whole.  Raises
    ``tomllib.TOMLDecodeError`` for malformed TOML.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name != PYPROJECT_FILENAME:
        return data
    for key in PYPROJECT_TABLE:
        data = data.get(key, {})
        if not isinstance(data, dict):
            return {}
    return data


def _has_tool_table(pyproject: Path) -> bool:
    # A broken pyproject.toml belongs to some other tool; skip it while searching.
    try:
        return bool(read_config_table(pyproject))
    except (OSError, tomllib.TOMLDecodeError):
        return False
