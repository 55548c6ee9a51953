"""Command: review a design for modelling mistakes before saving it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from neoarch.commands._base import NeoarchCommand, target_argument

if TYPE_CHECKING:
    from neoarch.commands._context import AppContext


@click.command(
    cls=NeoarchCommand,
    examples="""\
  neoarch check examples/twitter_clone.py
  neoarch check mypkg.architecture --errors-only""",
)
@target_argument()
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.pass_obj
def check(app: AppContext, target: str, min_severity: str, errors_only: bool) -> None:
    """Report undeclared references, duplicate declarations and graph issues in TARGET."""
    from neoarch.services.check import CheckService

    design = app.load(target)
    threshold = "error" if errors_only else min_severity
    app.emit(CheckService(design).check(min_severity=threshold))
