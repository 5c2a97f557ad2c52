"""Command: shell completion scripts."""

from __future__ import annotations

import click
from click.shell_completion import get_completion_class

from reqctl.commands._base import ReqCommand

PROG_NAME = "reqctl"
COMPLETE_VAR = "_REQCTL_COMPLETE"


@click.command(
    cls=ReqCommand,
    examples="""\
  reqctl completions bash > ~/.local/share/bash-completion/completions/reqctl
  reqctl completions zsh > "${fpath[1]}/_reqctl"
  reqctl completions fish > ~/.config/fish/completions/reqctl.fish""",
)
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
@click.pass_context
def completions(ctx: click.Context, shell: str) -> None:
    """Generate shell completions for SHELL."""
    comp_cls = get_completion_class(shell)
    if comp_cls is None:
        raise click.UsageError(f"Unsupported shell: {shell}")
    comp = comp_cls(ctx.find_root().command, {}, PROG_NAME, COMPLETE_VAR)
    click.echo(comp.source())
