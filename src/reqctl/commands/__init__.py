"""Subcommand modules for reqctl.

Provides register_commands(), which uses deferred imports so each command
module is only loaded by the registration call itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reqctl.commands._base import ReqGroup


def register_commands(cli: ReqGroup) -> None:
    """Register all standalone commands (and the ``md`` alias) on the root group."""
    from reqctl.commands.check import check
    from reqctl.commands.completions import completions
    from reqctl.commands.demo import demo
    from reqctl.commands.html import html
    from reqctl.commands.markdown import markdown
    from reqctl.commands.outline import outline
    from reqctl.commands.schema import schema

    cli.add_command(schema)
    cli.add_command(demo)
    cli.add_command(markdown)
    cli.add_command(html)
    cli.add_command(check)
    cli.add_command(outline)
    cli.add_command(completions)

    cli.add_alias("md", "markdown")
