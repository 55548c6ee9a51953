"""GraphStore: thin wrapper over the Neo4j driver.

The store is consumed only as: open a session bound to one database, run a
parametrized write, consume the result, close the session. Each statement
runs in auto-commit mode. There is no retry: the first failure propagates
to the caller and aborts whatever remained of the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from neo4j import Driver, ResultSummary, Session

    from neoarch.config.models import Neo4jConfig
    from neoarch.infrastructure.graph.cypher import Statement

logger = logging.getLogger(__name__)


class GraphStore:
    """Session factory for one named database on a Neo4j server."""

    def __init__(
        self, driver: Driver, *, database: str = "neo4j", owns_driver: bool = False
    ) -> None:
        self._driver = driver
        self.database = database
        self._owns_driver = owns_driver

    @classmethod
    def from_config(cls, config: Neo4jConfig) -> GraphStore:
        """Create a driver from ``[neo4j]`` settings. The store closes it on :meth:`close`."""
        from neo4j import GraphDatabase

        auth = (config.username, config.password) if config.username else None
        driver = GraphDatabase.driver(config.uri, auth=auth)
        logger.debug("Created Neo4j driver for %s (database=%s)", config.uri, config.database)
        return cls(driver, database=config.database, owns_driver=True)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a session bound to the configured database."""
        with self._driver.session(database=self.database) as session:
            yield session

    def write(self, session: Session, statement: Statement) -> ResultSummary:
        """Run one statement and consume its result."""
        result = session.run(statement.query, statement.params)
        return result.consume()

    def verify(self) -> None:
        """Raise if the server is unreachable or rejects the credentials."""
        self._driver.verify_connectivity()

    def close(self) -> None:
        if self._owns_driver:
            self._driver.close()

    def __enter__(self) -> GraphStore:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
