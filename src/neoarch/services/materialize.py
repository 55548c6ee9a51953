"""MaterializeService: idempotent projection of a Design onto Neo4j.

A save upserts every node (ascending full ID), then every relationship
(ledger order), inside one session. Each statement is one round trip in
auto-commit mode. The first store error aborts the remaining statements
and propagates unchanged; statements that already ran stay committed.

Re-saving an unchanged Design is a no-op in effect. Re-saving a changed one
overwrites node attributes in place and never duplicates a node or an edge
with the same ``(start, end, type, description)`` key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from neoarch.domain.types import NodeKind
from neoarch.infrastructure.graph.cypher import (
    clear_all,
    delete_design,
    node_upsert,
    relationship_upsert,
)
from neoarch.services.result import ServiceResult
from neoarch.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from neoarch.domain.design import Design
    from neoarch.infrastructure.graph.store import GraphStore

logger = structlog.get_logger(__name__)


class MaterializeService:
    """Writes Designs to, and deletes them from, one graph store database."""

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    @traced
    def save(self, design: Design) -> ServiceResult:
        """Upsert all nodes, then all relationships, of *design*."""
        log = logger.bind(design_id=design.id, database=self._store.database)
        nodes_written = 0
        rels_written = 0

        with self._store.session() as session:
            try:
                with trace_span("upsert_nodes") as span:
                    for node in design.iter_nodes():
                        self._store.write(session, node_upsert(node))
                        nodes_written += 1
                    if span:
                        span.annotate("count", nodes_written)
                log.debug("nodes.upserted", count=nodes_written)

                with trace_span("upsert_relationships") as span:
                    for rel in design.relationships:
                        statement = relationship_upsert(
                            rel,
                            start_label=design.kind_of(rel.start_id) or NodeKind.UNKNOWN,
                            end_label=design.kind_of(rel.end_id) or NodeKind.UNKNOWN,
                        )
                        self._store.write(session, statement)
                        rels_written += 1
                    if span:
                        span.annotate("count", rels_written)
                log.debug("relationships.upserted", count=rels_written)
            except Exception:
                log.warning(
                    "save.aborted",
                    nodes_written=nodes_written,
                    relationships_written=rels_written,
                )
                raise

        unknown = _undeclared_endpoints(design)
        warnings = [f"Stored undeclared element as Unknown: {full_id}" for full_id in unknown]
        log.info("design.saved", nodes=nodes_written, relationships=rels_written)

        return ServiceResult(
            ok=True,
            op="save_design",
            data={
                "design_id": design.id,
                "database": self._store.database,
                "nodes_upserted": nodes_written,
                "relationships_upserted": rels_written,
                "unknown_nodes": len(unknown),
            },
            warnings=warnings,
        )

    @traced
    def delete(self, design_id: str) -> ServiceResult:
        """Delete the design root *design_id* and everything belonging to it."""
        with self._store.session() as session:
            summary = self._store.write(session, delete_design(design_id))

        data = {"design_id": design_id, "database": self._store.database, **_counts(summary)}
        logger.info("design.deleted", **data)
        return ServiceResult(ok=True, op="delete_design", data=data)

    @traced
    def clear_unsafe(self) -> ServiceResult:
        """Delete every node and relationship in the database, whatever design owns them.

        Intended only for resetting a test or sandbox store.
        """
        with self._store.session() as session:
            summary = self._store.write(session, clear_all())

        data = {"database": self._store.database, **_counts(summary)}
        logger.warning("store.cleared", **data)
        return ServiceResult(ok=True, op="clear_store", data=data)


def _undeclared_endpoints(design: Design) -> list[str]:
    """Relationship endpoints that are not in the registry, sorted."""
    found = {
        endpoint
        for rel in design.relationships
        for endpoint in (rel.start_id, rel.end_id)
        if endpoint not in design
    }
    return sorted(found)


def _counts(summary: Any) -> dict[str, int]:
    counters = getattr(summary, "counters", None)
    if counters is None:
        return {}
    return {
        "nodes_deleted": int(getattr(counters, "nodes_deleted", 0)),
        "relationships_deleted": int(getattr(counters, "relationships_deleted", 0)),
    }
