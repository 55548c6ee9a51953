"""Per-invocation state handed to every subcommand as ``click.Context.obj``.

Owns the settings, the lazily opened graph store, and the rules for
printing a ServiceResult: payload to stdout, failures and warnings to
stderr, exit status 1 on failure.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import click
import structlog

from neoarch.config.logging import configure_logging
from neoarch.output.formatters import OutputSettings, format_result
from neoarch.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from neoarch.config.settings import NeoarchSettings
    from neoarch.domain.design import Design
    from neoarch.infrastructure.graph.store import GraphStore
    from neoarch.services.result import ServiceResult

logger = structlog.get_logger(__name__)


class AppContext:
    """Settings plus the resources a command may need.

    Nothing connects to Neo4j until :attr:`store` is read, so ``check``,
    ``export`` and ``--help`` work without a server.
    """

    def __init__(self, settings: NeoarchSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        self._store: GraphStore | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def store(self) -> GraphStore:
        if self._store is None:
            from neoarch.infrastructure.graph.store import GraphStore

            self._store = GraphStore.from_config(self.settings.neo4j)
        return self._store

    def close(self) -> None:
        """Close the driver if this invocation opened one. Idempotent."""
        store, self._store = self._store, None
        if store is not None:
            store.close()

    def load(self, target: str) -> Design:
        """Resolve TARGET to a Design; load failures become a one-line CLI error."""
        from neoarch.domain.errors import DesignLoadError
        from neoarch.infrastructure.loader import load_design

        try:
            return load_design(target, model_config=self.settings.model)
        except DesignLoadError as exc:
            raise click.ClickException(str(exc)) from exc

    def run_store(self, op: str, call: Callable[[], ServiceResult]) -> ServiceResult:
        """Check connectivity, then run *call* against the store.

        Driver and server errors, unreachable server included, become a failed *op*.
        """
        from neo4j.exceptions import DriverError, Neo4jError

        from neoarch.services.result import ServiceResult

        try:
            self.store.verify()
            return call()
        except (Neo4jError, DriverError) as exc:
            logger.error("store.failed", op=op, error=str(exc))
            return ServiceResult.failed(op, "STORE_ERROR", exc)
        finally:
            self.close()

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exits with status 1 when it failed."""
        click.echo(format_result(result, settings=self.output), err=not result.ok)
        if not self.output.json_output:
            for warning in result.warnings:
                click.secho(f"warning: {warning}", err=True, fg="yellow")
        if not result.ok:
            raise click.exceptions.Exit(1)
