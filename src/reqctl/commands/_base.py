"""Click classes for reqctl commands.

Any command or group built with ``examples="..."`` gets an eager
``--examples`` flag that prints the text and exits, so ``--help`` stays
short.  The root group also resolves short aliases such as ``md``.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(ctx.command.examples)  # type: ignore[attr-defined]
    ctx.exit(0)


class _ExamplesMixin:
    examples: str | None

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples.",
                )
            )


class ReqCommand(_ExamplesMixin, click.Command):
    """A click Command accepting ``examples=``."""


class ReqGroup(_ExamplesMixin, click.Group):
    """A click Group accepting ``examples=``, with command aliases.

    Subcommands default to :class:`ReqCommand`.  Aliases added with
    :meth:`add_alias` resolve to the real command and stay out of ``--help``.
    """

    command_class = ReqCommand

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._aliases: dict[str, str] = {}

    def add_alias(self, alias: str, name: str) -> None:
        self._aliases[alias] = name

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, self._aliases.get(cmd_name, cmd_name))

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        # Usage lines and errors show the real name, not the alias.
        _, cmd, rest = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, rest
