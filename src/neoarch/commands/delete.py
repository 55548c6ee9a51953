"""Command: delete one design and everything belonging to it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from neoarch.commands._base import NeoarchCommand, target_argument

if TYPE_CHECKING:
    from neoarch.commands._context import AppContext


@click.command(
    cls=NeoarchCommand,
    examples="""\
  neoarch delete examples/twitter_clone.py
  neoarch delete --id design_TwitterClone""",
)
@target_argument(required=False)
@click.option("--id", "design_id", default=None, help="Root ID to delete (e.g. design_Shop).")
@click.pass_obj
def delete(app: AppContext, target: str | None, design_id: str | None) -> None:
    """Delete the design named by TARGET (or --id) from the graph store.

    Other designs stored in the same database are left untouched.
    """
    from neoarch.services.materialize import MaterializeService

    if (target is None) == (design_id is None):
        raise click.UsageError("Pass exactly one of TARGET or --id.")
    root_id = design_id if design_id is not None else app.load(target or "").id
    app.emit(app.run_store("delete_design", lambda: MaterializeService(app.store).delete(root_id)))
