"""``neoarch`` entry point: global flags, settings, subcommand registration."""

from __future__ import annotations

import click

from neoarch import __version__
from neoarch.commands import register_commands
from neoarch.commands._base import NeoarchGroup
from neoarch.commands._context import AppContext
from neoarch.config.settings import NeoarchSettings

_ROOT_EXAMPLES = """\
  neoarch check examples/twitter_clone.py
  neoarch save examples/twitter_clone.py
  neoarch -c sandbox.toml --database scratch save examples/example1.py:build
  neoarch --json export dsl examples/example1.py:build"""


@click.group(
    cls=NeoarchGroup,
    examples=_ROOT_EXAMPLES,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, prog_name="neoarch")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print one status line per result.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and a timing tree.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c", "--config", "config_path", type=click.Path(dir_okay=False), help="Use this neoarch.toml."
)
@click.option("--database", help="Neo4j database to use instead of the configured one.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, database: str | None, **flags: bool) -> None:
    """Model C4 architectures in Python, store them in Neo4j, export Structurizr DSL."""
    settings = NeoarchSettings.from_cli(config_path=config_path, database=database, **flags)
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
