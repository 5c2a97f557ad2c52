"""Command: JSON schema of the requirement document format."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reqctl.commands._base import ReqCommand

if TYPE_CHECKING:
    from reqctl.commands._context import AppContext


@click.command(
    cls=ReqCommand,
    examples="""\
  reqctl schema
  reqctl schema --output schema.json""",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def schema(app: AppContext, output_file: str | None) -> None:
    """Output the JSON schema of the requirement document format."""
    from reqctl.services.project import ProjectService

    app.emit_document(ProjectService(app.settings).schema(), output_file)
