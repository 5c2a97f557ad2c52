"""Human-readable summaries of ServiceResults.

:func:`render_result` picks a renderer by ``result.op``; ops without one get
the generic "status line plus scalar fields" view.  Document bodies
(``data["content"]``) are never echoed here: they go to stdout or a file
through :meth:`AppContext.emit_document`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.padding import Padding
from rich.text import Text
from rich.tree import Tree

from reqctl.output.console import STATUS_COLORS, create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from reqctl.services.result import ServiceResult

_COUNT_KEYS = tuple(STATUS_COLORS)
_SUMMARY_KEYS = ("project", "version", "path", "output_file")
_FIELD_STYLES = {"path": "req.path", "output_file": "req.path", "project": "req.title"}

# Span durations (ms) above which the telemetry view highlights a step.
_SLOW_MS = 100
_VERY_SLOW_MS = 1000


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as console text; plain text when not on a terminal."""
    console = create_console()
    if result.ok:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line for ``--quiet``: counts for check, otherwise OK/ERROR."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"
    if result.op == "check":
        return " ".join(f"{key}={result.data.get(key, 0)}" for key in _COUNT_KEYS)
    return f"OK: {result.op}"


# ── Building blocks ───────────────────────────────────────────────────


def _header(console: Console, result: ServiceResult, message: str | None = None) -> None:
    label = Text("OK", style="req.ok") if result.ok else Text("ERROR", style="req.error")
    line = Text.assemble(label, (f"  {result.op}", "req.op"))
    if message is not None:
        line.append(f" — {message}")
    console.print(line)


def _field(console: Console, key: str, value: Any) -> None:
    console.print(
        Text.assemble((f"  {key}:", "req.key"), " ", (str(value), _FIELD_STYLES.get(key, "")))
    )


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            console.print(Padding(_span_tree(value), (0, 0, 0, 4)))
        else:
            console.print(Text(f"    {key}: {value}"))


def _span_tree(span: dict[str, Any], parent: Tree | None = None) -> Tree:
    """Span dicts from :meth:`Span.to_dict` as a Rich tree, slow steps highlighted."""
    duration = span.get("duration_ms", 0.0)
    if duration > _VERY_SLOW_MS:
        style = "bold red"
    elif duration > _SLOW_MS:
        style = "yellow"
    else:
        style = "dim"

    label = Text.assemble((f"{duration:.2f}ms", style), "  ", span.get("name", "?"))
    annotations = span.get("annotations")
    if annotations:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")", "dim")

    node = Tree(label) if parent is None else parent.add(label)
    for child in span.get("children", []):
        _span_tree(child, node)
    return node


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    error = result.error
    _header(console, result, error.message if error else "Unknown error")
    if verbose and error and error.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in error.detail.items():
            console.print(Text(f"    {key}: {value}"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _header(console, result)
    for key, value in result.data.items():
        if key != "content" and not isinstance(value, (dict, list)):
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Project fields, the patterns in force, then one colored row per status."""
    data = result.data
    _header(console, result)
    for key in _SUMMARY_KEYS:
        if key in data:
            _field(console, key, data[key])
    if data.get("patterns"):
        _field(console, "patterns", ", ".join(data["patterns"]))

    console.print()
    for status in _COUNT_KEYS:
        row = Text(f"  {status.replace('_', ' '):<13}", style=style_for_status(status))
        row.append(f" {data.get(status, 0)}")
        console.print(row)
    if verbose:
        _render_meta(console, result)


def _render_outline(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    title = f"{data.get('project', '?')} {data.get('version', '')}".strip()
    tree = Tree(Text(title, style="req.title"))
    _add_outline_topics(tree, data.get("topics", []))
    console.print(tree)
    console.print()
    console.print(
        f"{data.get('topic_count', 0)} topics, {data.get('requirement_count', 0)} requirements"
    )
    if verbose:
        _render_meta(console, result)


def _outline_label(item: dict[str, Any]) -> Text:
    return Text.assemble((item["id"], "req.id"), f"  {item['name']}")


def _add_outline_topics(parent: Tree, topics: list[dict[str, Any]]) -> None:
    for topic in topics:
        branch = parent.add(_outline_label(topic))
        for requirement in topic.get("requirements", []):
            branch.add(_outline_label(requirement))
        _add_outline_topics(branch, topic.get("subtopics", []))


_OP_RENDERERS = {
    "check": _render_check,
    "outline": _render_outline,
}
