"""Rich console and theme used by the renderers.

Renderers print into an in-memory Console and hand back the text, so the
CLI decides on the stream.  Rich drops ANSI codes on its own when the
buffer is not a terminal, which covers pipes and CliRunner.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

# Compliance buckets in report order, with their colors.
STATUS_COLORS: dict[str, str] = {
    "passed": "green",
    "failed": "red",
    "unknown": "yellow",
    "out_of_scope": "dim",
}

REQ_THEME = Theme(
    {
        "req.ok": "bold green",
        "req.error": "bold red",
        "req.op": "bold cyan",
        "req.key": "dim",
        "req.id": "bold blue",
        "req.path": "dim",
        "req.title": "bold",
        **{f"req.status.{status}": color for status, color in STATUS_COLORS.items()},
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console writing to a StringIO buffer; read it back with :func:`get_output`."""
    return Console(
        file=StringIO(),
        theme=REQ_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Theme style of a compliance bucket, or ``""`` for anything else."""
    return f"req.status.{status}" if status in STATUS_COLORS else ""
