"""Command: topic/requirement outline of a requirement file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from reqctl.commands._base import ReqCommand

if TYPE_CHECKING:
    from reqctl.commands._context import AppContext


@click.command(
    cls=ReqCommand,
    examples="""\
  reqctl outline requirements.yml
  reqctl --json outline requirements.yml""",
)
@click.argument("requirements", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def outline(app: AppContext, requirements: Path) -> None:
    """Show topics and requirement ids as a tree."""
    from reqctl.services.project import ProjectService

    app.emit(ProjectService(app.settings).outline(requirements))
