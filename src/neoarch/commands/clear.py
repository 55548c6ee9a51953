"""Command: wipe the whole database."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from neoarch.commands._base import NeoarchCommand

if TYPE_CHECKING:
    from neoarch.commands._context import AppContext


@click.command(
    cls=NeoarchCommand,
    examples="""\
  neoarch clear
  neoarch --database sandbox clear --yes""",
)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def clear(app: AppContext, yes: bool) -> None:
    """Delete EVERY node and relationship in the configured database.

    Not scoped to a design. Meant for test and sandbox stores only.
    """
    from neoarch.services.materialize import MaterializeService

    database = app.settings.neo4j.database
    if not yes:
        click.confirm(f"Delete everything in database {database!r}?", abort=True, err=True)
    app.emit(app.run_store("clear_store", lambda: MaterializeService(app.store).clear_unsafe()))
