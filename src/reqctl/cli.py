"""``reqctl`` entry point: global flags, settings, and the command table."""

from __future__ import annotations

import click

from reqctl import __version__
from reqctl.commands import register_commands
from reqctl.commands._base import ReqGroup
from reqctl.commands._context import AppContext
from reqctl.config.settings import ReqSettings


@click.group(
    cls=ReqGroup,
    invoke_without_command=True,
    examples="""\
  reqctl demo > requirements.yml
  reqctl markdown requirements.yml > REQUIREMENTS.md
  reqctl html requirements.yml --output requirements.html
  reqctl check requirements.yml test_result.txt
  reqctl -c ci/reqctl.toml --json check requirements.yml results/*.txt""",
)
@click.version_option(version=__version__, prog_name="reqctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One-line summaries only.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and step timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file to use instead of reqctl.toml / pyproject.toml discovery.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Render requirement catalogues and check test output against them.

    REQUIREMENTS files may be written in YAML, JSON, or TOML.
    """
    ctx.obj = AppContext(
        ReqSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
