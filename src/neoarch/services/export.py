"""ExportService: Structurizr DSL and graph export.

Works on the in-memory Design only; nothing here touches the store.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import networkx as nx

from neoarch.services.base import BaseService
from neoarch.services.result import ServiceError, ServiceResult
from neoarch.services.structurizr import to_structurizr_dsl
from neoarch.services.telemetry import traced

type _Graph = nx.MultiDiGraph


def _dot_string(text: Any) -> str:
    return '"' + str(text).replace('"', '\\"') + '"'


def _to_dot(g: _Graph) -> str:
    """Graphviz DOT, one box per element; external elements are dashed."""
    lines = [f"digraph {_dot_string(g.graph.get('name', 'design'))} {{"]
    lines += ["  rankdir=LR;", "  node [shape=box];"]
    for node_id, attrs in g.nodes(data=True):
        extra = ' style="dashed"' if attrs.get("external") else ""
        label = _dot_string(attrs.get("name", node_id))
        kind = _dot_string(attrs.get("kind", ""))
        lines.append(f"  {_dot_string(node_id)} [label={label} kind={kind}{extra}];")
    for src, tgt, attrs in g.edges(data=True):
        rel_type = _dot_string(attrs.get("rel_type", ""))
        lines.append(f"  {_dot_string(src)} -> {_dot_string(tgt)} [label={rel_type}];")
    lines.append("}")
    return "\n".join(lines) + "\n"


def _to_d3_json(g: _Graph) -> str:
    """D3 force-layout JSON: ``{"nodes": [...], "links": [...]}``."""
    nodes = [
        {
            "id": node_id,
            "name": attrs.get("name", ""),
            "kind": attrs.get("kind", ""),
            "tags": attrs.get("tags", []),
            "external": bool(attrs.get("external", False)),
        }
        for node_id, attrs in g.nodes(data=True)
    ]
    links = [
        {
            "source": src,
            "target": tgt,
            "rel_type": attrs.get("rel_type", ""),
            "description": attrs.get("description", ""),
        }
        for src, tgt, attrs in g.edges(data=True)
    ]
    return json.dumps({"nodes": nodes, "links": links}, indent=2) + "\n"


_GRAPH_WRITERS: dict[str, Callable[[_Graph], str]] = {"dot": _to_dot, "json": _to_d3_json}
GRAPH_FORMATS = tuple(_GRAPH_WRITERS)


class ExportService(BaseService):
    """Export a Design in portable text formats."""

    @traced
    def export_dsl(self) -> ServiceResult:
        """Render the design as Structurizr DSL in ``data["content"]``."""
        return ServiceResult(
            ok=True,
            op="export_dsl",
            data={
                "format": "structurizr",
                "content": to_structurizr_dsl(self._design),
                "node_count": len(self._design.nodes),
                "relationship_count": len(self._design.relationships),
            },
        )

    @traced
    def export_graph(self, *, fmt: str = "dot") -> ServiceResult:
        """Export the element graph as ``dot`` or ``json`` in ``data["content"]``.

        Every ledger entry is an edge, BELONGS_TO and IMPLIED_USE included.
        An unknown *fmt* yields a failed result with code ``INVALID_FORMAT``.
        """
        writer = _GRAPH_WRITERS.get(fmt)
        if writer is None:
            return ServiceResult(
                ok=False,
                op="export_graph",
                error=ServiceError(
                    code="INVALID_FORMAT",
                    message=f"Unknown graph format: {fmt}",
                    detail={"format": fmt, "valid": list(GRAPH_FORMATS)},
                ),
            )

        g = self._engine.graph
        return ServiceResult(
            ok=True,
            op="export_graph",
            data={
                "format": fmt,
                "content": writer(g),
                "node_count": g.number_of_nodes(),
                "edge_count": g.number_of_edges(),
            },
        )
