"""Parse YAML, JSON, or TOML requirement documents into a Project tree.

The syntax is not declared anywhere; each supported syntax is tried in turn
and the first one that both parses *and* validates as a Project wins.  When
none does, a single :class:`ProjectParseError` is raised.  The per-syntax
reasons are kept on the exception for debug logging only.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable
from importlib import resources
from io import StringIO
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarstring import LiteralScalarString

from reqctl.domain.models import Project

logger = logging.getLogger(__name__)

DEMO_RESOURCE = "data/demo.yml"


class ProjectParseError(Exception):
    """Raised when no supported syntax yields a valid requirement document."""

    def __init__(self, attempts: dict[str, str], source: str | None = None) -> None:
        where = f" in {source}" if source else ""
        super().__init__(f"No valid requirement document found{where} (tried YAML, JSON, TOML)")
        self.attempts = attempts
        self.source = source


def _load_yaml(text: str) -> Any:
    return YAML(typ="safe", pure=True).load(text)


_LOADERS: tuple[tuple[str, Callable[[str], Any]], ...] = (
    ("yaml", _load_yaml),
    ("json", json.loads),
    ("toml", tomllib.loads),
)


def parse_project(text: str, *, source: str | None = None) -> Project:
    """Parse *text* into a Project, trying YAML, then JSON, then TOML."""
    attempts: dict[str, str] = {}
    for syntax, loader in _LOADERS:
        try:
            project = Project.model_validate(loader(text))
        except (YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError, ValidationError) as exc:
            attempts[syntax] = str(exc).splitlines()[0] if str(exc) else type(exc).__name__
            continue
        logger.debug("Parsed %s as %s", source or "<text>", syntax)
        return project

    logger.debug("Parse attempts for %s failed: %s", source or "<text>", attempts)
    raise ProjectParseError(attempts, source)


def load_project(path: Path) -> Project:
    """Read *path* as UTF-8 and parse it.  OSError propagates unchanged."""
    return parse_project(path.read_text(encoding="utf-8"), source=str(path))


def demo_project() -> Project:
    """The packaged demo catalogue (the requirements of reqctl itself)."""
    text = resources.files("reqctl").joinpath(DEMO_RESOURCE).read_text(encoding="utf-8")
    return parse_project(text, source=DEMO_RESOURCE)


def dump_yaml(data: dict[str, Any]) -> str:
    """Dump *data* as block-style YAML, keeping key order.

    Multi-line strings are written as literal block scalars.
    """
    yaml = YAML()
    yaml.default_flow_style = False
    yaml.width = 4096
    stream = StringIO()
    yaml.dump(_to_yaml_nodes(data), stream)
    return stream.getvalue()


def _to_yaml_nodes(value: Any) -> Any:
    if isinstance(value, dict):
        return CommentedMap((key, _to_yaml_nodes(item)) for key, item in value.items())
    if isinstance(value, list):
        return [_to_yaml_nodes(item) for item in value]
    if isinstance(value, str) and "\n" in value:
        return LiteralScalarString(value)
    return value
