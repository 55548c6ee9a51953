"""Command: upsert a design into the graph store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from neoarch.commands._base import NeoarchCommand, target_argument

if TYPE_CHECKING:
    from neoarch.commands._context import AppContext


@click.command(
    cls=NeoarchCommand,
    examples="""\
  neoarch save examples/twitter_clone.py
  neoarch save examples/example1.py:build
  neoarch save mypkg.architecture:design --database sandbox
  neoarch --json save mypkg.architecture""",
)
@target_argument()
@click.pass_obj
def save(app: AppContext, target: str) -> None:
    """Upsert every element and relationship of TARGET.

    TARGET is ``module:attr`` or ``path/to/file.py:attr``; ``attr``
    defaults to ``design`` and may name a Design or a factory.
    """
    from neoarch.services.materialize import MaterializeService

    design = app.load(target)
    app.emit(app.run_store("save_design", lambda: MaterializeService(app.store).save(design)))
