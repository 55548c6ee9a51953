"""Click building blocks shared by every subcommand.

Commands carry their usage examples out of ``--help``; ``--examples``
prints them on demand. :func:`target_argument` is the one way a command
names the design it works on.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

EXAMPLES_HINT = "Run with --examples for usage examples."


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(examples)
    ctx.exit(0)


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when the command was given examples."""

    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        cmd: Any = self
        cmd.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_print_examples,
                help="Show usage examples and exit.",
            )
        )
        if not cmd.epilog:
            cmd.epilog = EXAMPLES_HINT


class NeoarchCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class NeoarchGroup(_ExamplesMixin, click.Group):
    """Group whose ``@group.command`` subcommands are :class:`NeoarchCommand`."""

    command_class = NeoarchCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


def target_argument[F: Callable[..., Any]](*, required: bool = True) -> Callable[[F], F]:
    """The ``TARGET`` positional: ``module:attr`` or ``path/to/file.py:attr``."""

    def decorator(func: F) -> F:
        return click.argument("target", required=required, metavar="TARGET")(func)

    return decorator
