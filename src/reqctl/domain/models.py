"""Requirement tree models: project, topics, requirements, definitions, config defaults.

The tree is a strict ownership hierarchy: a Project owns its Topics, a Topic
owns its Requirements and nested subtopics.  Mappings are plain ``dict``s, so
iteration follows insertion order, which is the order the document was
written in.  Rendering and report order depend on it.

All models are frozen.  A tree is built once from parsed input and is only
read afterwards.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer, WithJsonSchema

VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)", re.ASCII)


class VersionParseError(ValueError):
    """Raised when a version string is not exactly ``major.minor.patch``."""


class Version(BaseModel):
    """Semantic version triple of non-negative integers."""

    model_config = {"frozen": True}

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``"<uint>.<uint>.<uint>"``; any other shape raises VersionParseError."""
        match = VERSION_PATTERN.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            msg = f"invalid version {text!r}: expected a string in the format 'major.minor.patch'"
            raise VersionParseError(msg)
        major, minor, patch = (int(part) for part in match.groups())
        return cls(major=major, minor=minor, patch=patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def _coerce_version(value: Any) -> Version:
    if isinstance(value, Version):
        return value
    return Version.parse(value)


def _version_text(value: Version) -> str:
    return str(value)


def _trimmed(value: str) -> str:
    return value.strip()


def _scalar_text(value: Any) -> Any:
    """Plain YAML/JSON/TOML scalars as the text they were written as."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return value


# Versions travel as strings on the wire, never as objects.
ProjectVersion = Annotated[
    Version,
    BeforeValidator(_coerce_version),
    PlainSerializer(_version_text, return_type=str),
    WithJsonSchema({"type": "string", "pattern": r"^\d+\.\d+\.\d+$"}),
]

# Numbers and booleans are accepted wherever text is expected (`default_value: 8080`, `1:`).
ScalarStr = Annotated[str, BeforeValidator(_scalar_text)]

# Surrounding whitespace is insignificant (YAML block scalars keep a trailing newline).
TrimmedStr = Annotated[ScalarStr, PlainSerializer(_trimmed, return_type=str)]


class Requirement(BaseModel):
    """A single requirement item."""

    model_config = {"frozen": True}

    name: ScalarStr
    description: TrimmedStr
    additional_info: list[ScalarStr] = Field(default_factory=list)


class Topic(BaseModel):
    """A group of requirements with optional nested subtopics."""

    model_config = {"frozen": True}

    name: ScalarStr
    requirements: dict[ScalarStr, Requirement] = Field(default_factory=dict)
    subtopics: dict[ScalarStr, Topic] = Field(default_factory=dict)


class Definition(BaseModel):
    """A terminology definition."""

    model_config = {"frozen": True}

    name: ScalarStr
    value: ScalarStr
    additional_info: list[ScalarStr] = Field(default_factory=list)


class ConfigDefault(BaseModel):
    """A configuration parameter and its default.

    ``default_value`` of None means the parameter has no default and must be
    supplied at start-up.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    name: ScalarStr
    typ: ScalarStr = Field(alias="type")
    valid_values: list[ScalarStr] | None = None
    unit: ScalarStr | None = None
    default_value: ScalarStr | None = None
    hint: ScalarStr | None = None


class Project(BaseModel):
    """Root of a requirement catalogue."""

    model_config = {"frozen": True}

    name: ScalarStr
    version: ProjectVersion
    description: TrimmedStr
    topics: dict[ScalarStr, Topic] = Field(default_factory=dict)
    definitions: list[Definition] = Field(default_factory=list)
    config_defaults: list[ConfigDefault] = Field(default_factory=list)

    def iter_topics(self) -> Iterator[tuple[int, str, Topic]]:
        """Yield ``(depth, id, topic)`` for every topic in the tree, depth-first pre-order."""
        yield from _walk(self.topics, 0)

    def to_document(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping with empty and unset fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)

    @classmethod
    def json_schema(cls) -> dict[str, Any]:
        """JSON schema describing the requirement document format."""
        return cls.model_json_schema(by_alias=True)


def _walk(topics: dict[str, Topic], depth: int) -> Iterator[tuple[int, str, Topic]]:
    for topic_id, topic in topics.items():
        yield depth, topic_id, topic
        yield from _walk(topic.subtopics, depth + 1)
