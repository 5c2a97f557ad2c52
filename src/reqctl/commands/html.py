"""Command: render requirements as an HTML page."""

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
  reqctl html requirements.yml > requirements.html
  reqctl html requirements.yml --toc --output site/index.html""",
)
@click.argument("requirements", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--toc/--no-toc",
    default=None,
    help="Insert a table of contents (default from [html] toc).",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def html(app: AppContext, requirements: Path, toc: bool | None, output_file: str | None) -> None:
    """Transform requirements into HTML."""
    from reqctl.services.document import DocumentService

    result = DocumentService(app.settings).render_html(requirements, toc=toc)
    app.emit_document(result, output_file)
