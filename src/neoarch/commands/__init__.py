"""Subcommand modules for neoarch.

:func:`register_commands` defers imports so ``neoarch --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the export group and the standalone commands on the root group."""
    # --- Groups ---
    from neoarch.commands.export import export

    cli.add_command(export)

    # --- Standalone commands ---
    from neoarch.commands.check import check
    from neoarch.commands.clear import clear
    from neoarch.commands.delete import delete
    from neoarch.commands.save import save

    cli.add_command(save)
    cli.add_command(delete)
    cli.add_command(clear)
    cli.add_command(check)
