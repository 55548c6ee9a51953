"""Command group: design export (Structurizr DSL, graph)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from neoarch.commands._base import NeoarchGroup, target_argument

if TYPE_CHECKING:
    from neoarch.commands._context import AppContext
    from neoarch.services.result import ServiceResult

_EXPORT_EXAMPLES = """\
  neoarch export dsl examples/twitter_clone.py
  neoarch export dsl examples/twitter_clone.py --output workspace.dsl
  neoarch export graph examples/example1.py --format json --output graph.json"""


@click.group(cls=NeoarchGroup, examples=_EXPORT_EXAMPLES)
def export() -> None:
    """Export a design in portable text formats."""


def _emit_content(app: AppContext, result: ServiceResult, output_file: str | None) -> None:
    """Write content to *output_file* (and emit a summary) or print it raw."""
    if not result.ok or app.settings.json_output:
        app.emit(result)
        return

    if output_file:
        from neoarch.services.result import ServiceResult

        Path(output_file).write_text(result.data["content"], encoding="utf-8")
        summary = {k: v for k, v in result.data.items() if k != "content"}
        app.emit(
            ServiceResult(
                ok=True,
                op=result.op,
                data={"output_file": output_file, **summary},
                meta=result.meta,
            )
        )
    else:
        # Pipe-friendly: raw content to stdout
        click.echo(result.data["content"], nl=False)


@export.command(
    examples="""\
  neoarch export dsl examples/twitter_clone.py
  neoarch export dsl mypkg.architecture:design --output workspace.dsl"""
)
@target_argument()
@click.option(
    "--output",
    "output_file",
    type=click.Path(),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def dsl(app: AppContext, target: str, output_file: str | None) -> None:
    """Render TARGET as a Structurizr DSL workspace."""
    from neoarch.services.export import ExportService

    design = app.load(target)
    _emit_content(app, ExportService(design).export_dsl(), output_file)


@export.command(
    examples="""\
  neoarch export graph examples/example1.py --format dot
  neoarch export graph examples/example1.py --format json --output graph.json
  neoarch export graph examples/example1.py | dot -Tpng -o graph.png"""
)
@target_argument()
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["dot", "json"], case_sensitive=False),
    default="dot",
    help="Graph output format.",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def graph(app: AppContext, target: str, fmt: str, output_file: str | None) -> None:
    """Export the element graph of TARGET in DOT or JSON format."""
    from neoarch.services.export import ExportService

    design = app.load(target)
    _emit_content(app, ExportService(design).export_graph(fmt=fmt.lower()), output_file)
