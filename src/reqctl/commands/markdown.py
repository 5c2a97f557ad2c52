"""Command: render requirements as Markdown."""

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
  reqctl markdown requirements.yml
  reqctl md requirements.yml --no-toc
  reqctl markdown requirements.toml --output REQUIREMENTS.md""",
)
@click.argument("requirements", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--toc/--no-toc",
    default=None,
    help="Include the [[_TOC_]] marker (default from [markdown] toc).",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def markdown(
    app: AppContext, requirements: Path, toc: bool | None, output_file: str | None
) -> None:
    """Transform requirements into Markdown."""
    from reqctl.services.document import DocumentService

    result = DocumentService(app.settings).render_markdown(requirements, toc=toc)
    app.emit_document(result, output_file)
