"""Markdown rendering of a requirement catalogue.

``render_lines`` walks the tree and produces the document line by line;
``render`` joins the lines and runs the normative keyword emphasis pass
(RFC 2119 key words become ``**_MUST_**`` and so on).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from reqctl.domain.models import ConfigDefault, Project, Requirement, Topic

KEYWORD_NOTICE = """\
The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", "SHALL NOT", "SHOULD", "SHOULD NOT", \
"RECOMMENDED",
"MAY", and "OPTIONAL" in this document are to be interpreted as described in
[RFC 2119](https://datatracker.ietf.org/doc/html/rfc2119)."""

# Order matters: a phrase must come before any shorter phrase it starts with.
NORMATIVE_KEYWORDS: tuple[str, ...] = (
    "must not",
    "must",
    "required",
    "shall not",
    "shall",
    "should not",
    "should",
    "recommended",
    "may",
    "optional",
)

TOC_MARKER = "[[_TOC_]]"
TOPIC_BASE_LEVEL = 3

_EMPHASIS_RE = re.compile(
    r"(?P<done>\*\*_[^*\n]+?_\*\*)|(?P<word>"
    + "|".join(re.escape(word) for word in NORMATIVE_KEYWORDS)
    + ")",
    re.IGNORECASE,
)


def topic_heading(level: int, topic_id: str, topic: Topic) -> str:
    """Heading line for a topic; depth is encoded as *level* ``#`` markers."""
    return f"{'#' * level} _{topic_id.strip()}_ - {topic.name.strip()}"


def emphasize_keywords(text: str) -> str:
    """Upper-case and wrap every normative keyword in ``**_..._**``.

    Case-insensitive, single pass.  Spans already wrapped in ``**_..._**``
    are copied through unchanged, so the pass is idempotent.
    """

    def _replace(match: re.Match[str]) -> str:
        if match.group("done") is not None:
            return match.group("done")
        return f"**_{match.group('word').upper()}_**"

    return _EMPHASIS_RE.sub(_replace, text)


def render_lines(project: Project, *, toc: bool = False) -> list[str]:
    """Render *project* into Markdown lines (before keyword emphasis)."""
    lines = [f"# Requirements for {project.name.strip()}", ""]
    if toc:
        lines.extend([TOC_MARKER, ""])
    lines.extend(KEYWORD_NOTICE.splitlines())
    lines.extend(
        [
            "",
            f"**VERSION: {project.version}**",
            "",
            "## Description",
            project.description.strip(),
            "",
        ]
    )

    if project.topics:
        lines.append("## Requirements")
        _add_topics(lines, project.topics, TOPIC_BASE_LEVEL)

    if project.definitions:
        lines.append("## Definitions")
        for definition in project.definitions:
            lines.append(f"- {definition.name.strip()}: {definition.value.strip()}")
            lines.extend(_notes(definition.additional_info))
        lines.append("")

    if project.config_defaults:
        lines.append("## Config Defaults")
        for default in project.config_defaults:
            lines.extend(_config_default_lines(default))
            lines.append("")

    return lines


def render(project: Project, *, toc: bool = False) -> str:
    """Render *project* into a Markdown document with emphasized keywords."""
    return emphasize_keywords("\n".join(render_lines(project, toc=toc)))


# ── Tree walk ─────────────────────────────────────────────────────────


def _add_topics(lines: list[str], topics: dict[str, Topic], level: int) -> None:
    for topic_id, topic in topics.items():
        lines.append(topic_heading(level, topic_id, topic))
        if topic.requirements:
            _add_requirements(lines, topic.requirements)
            lines.append("")
        if topic.subtopics:
            _add_topics(lines, topic.subtopics, level + 1)
            lines.append("")


def _add_requirements(lines: list[str], requirements: dict[str, Requirement]) -> None:
    for req_id, requirement in requirements.items():
        lines.append(
            f"- **_{req_id.strip()}_ - {requirement.name.strip()}:** "
            f"{requirement.description.strip()}"
        )
        lines.extend(_notes(requirement.additional_info))


def _notes(notes: Iterable[str]) -> list[str]:
    return [f"  - {note.strip()}" for note in notes]


def _config_default_lines(default: ConfigDefault) -> list[str]:
    lines = [f"- **{default.name.strip()}**", f"  - Type: {default.typ.strip()}"]
    if default.unit is not None:
        lines.append(f"  - Unit: {default.unit.strip()}")
    if default.valid_values is not None:
        lines.append(f"  - Valid Values: _{', '.join(default.valid_values).strip()}_")

    hint = f" {default.hint.strip()}" if default.hint is not None else ""
    if default.default_value is not None:
        lines.append(f"  - Default Value: _{default.default_value.strip()}_{hint}")
    else:
        lines.append(f"  - Required: This value must be provided as a start parameter.{hint}")
    return lines
