"""GraphEngine: lazy-built NetworkX projection of a Design.

Built on first access from the registry and ledger; nothing is cached
across designs. Used by graph export and model checks, never by
materialization.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

from neoarch.domain.types import NodeKind

if TYPE_CHECKING:
    from neoarch.domain.design import Design

# Explicit relationships are not deduplicated, so parallel edges are kept.
type _Graph = nx.MultiDiGraph


class GraphEngine:
    """Lazy-loading graph view over one Design."""

    def __init__(self, design: Design) -> None:
        self._design = design
        self._graph: _Graph | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, building it on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def invalidate(self) -> None:
        """Clear the cached graph, forcing rebuild on next access."""
        self._graph = None

    def _build(self) -> _Graph:
        """Build a MultiDiGraph from the registry and ledger.

        Registered nodes are added first (so isolated elements appear), in
        ascending ID order. Relationship endpoints missing from the registry
        become ``Unknown`` nodes, mirroring how they are stored.
        """
        g: _Graph = nx.MultiDiGraph(name=self._design.name)
        for node in self._design.iter_nodes():
            g.add_node(
                node.full_id,
                name=node.name,
                kind=str(node.kind),
                tags=list(node.tags),
                external=node.is_external,
            )

        for rel in self._design.relationships:
            for endpoint in (rel.start_id, rel.end_id):
                if endpoint not in g:
                    g.add_node(endpoint, name=endpoint, kind=str(NodeKind.UNKNOWN), tags=[])
            g.add_edge(
                rel.start_id,
                rel.end_id,
                rel_type=str(rel.type),
                description=rel.description,
            )
        return g
