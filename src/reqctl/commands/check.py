"""Command: check test output against requirements."""

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
  reqctl check requirements.yml test_result.txt
  reqctl check -a 'REQ-2\\..*' -a 'REQ-3\\..*' requirements.yml unit.txt integration.txt
  reqctl check requirements.yml results/*.txt --output compliance.md
  reqctl -q check requirements.yml test_result.txt --output compliance.md""",
)
@click.option(
    "-a",
    "--allowed-requirements",
    "allowed_requirements",
    multiple=True,
    help="Regex selecting which requirement ids are checked (repeatable; default REQ-.*).",
)
@click.argument("requirements", type=click.Path(dir_okay=False, path_type=Path))
@click.argument(
    "test_results",
    nargs=-1,
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the report to a file and print a summary instead.",
)
@click.pass_obj
def check(
    app: AppContext,
    allowed_requirements: tuple[str, ...],
    requirements: Path,
    test_results: tuple[Path, ...],
    output_file: str | None,
) -> None:
    """Check test output files against requirements.

    Each test-result file is scanned for lines of the form
    "<ID>: passed" and "<ID>: failed - <message>".
    """
    from reqctl.services.compliance import ComplianceService

    result = ComplianceService(app.settings).check(
        requirements,
        list(test_results),
        allowed_requirements=list(allowed_requirements) or None,
    )
    app.emit_document(result, output_file)
