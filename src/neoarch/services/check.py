"""CheckService: pre-flight review of a Design before it is saved.

Follows the linter pattern: report, never modify. Four categories:
undeclared references, overwritten declarations, relationships that will
collapse into one stored edge, and graph health.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from neoarch.domain.types import NodeKind, RelationshipType
from neoarch.services.base import BaseService
from neoarch.services.result import ServiceResult
from neoarch.services.telemetry import trace_span, traced

# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_REFERENCES = "undeclared_reference"
CAT_DUPLICATES = "duplicate_declaration"
CAT_COLLAPSED = "collapsed_relationship"
CAT_GRAPH = "graph_health"

_ACTOR_KINDS = frozenset({str(NodeKind.PERSON), str(NodeKind.SYSTEM)})


class CheckService(BaseService):
    """Reports modelling mistakes in a Design."""

    def _issue(
        self, category: str, severity: str, node_id: str | None, message: str
    ) -> dict[str, Any]:
        kind = (self._design.kind_of(node_id) or NodeKind.UNKNOWN) if node_id else None
        return {
            "category": category,
            "severity": severity,
            "node_id": node_id,
            "kind": str(kind) if kind else None,
            "message": message,
        }

    @traced
    def check(self, *, min_severity: str = SEVERITY_WARNING) -> ServiceResult:
        """Report issues without modifying anything.

        With ``min_severity="error"`` warnings are left out of the report.
        """
        issues: list[dict[str, Any]] = []
        with trace_span("undeclared_references"):
            issues.extend(self._check_references())
        with trace_span("duplicate_declarations"):
            issues.extend(self._check_duplicates())
        with trace_span("collapsed_relationships"):
            issues.extend(self._check_collapsed())
        with trace_span("graph_health"):
            issues.extend(self._check_graph_health())

        if min_severity == SEVERITY_ERROR:
            issues = [i for i in issues if i["severity"] == SEVERITY_ERROR]

        errors = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "design_id": self._design.id,
                "issues": issues,
                "count": len(issues),
                "errors": errors,
            },
        )

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def _check_references(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        seen: set[str] = set()
        for rel in self._design.relationships:
            for endpoint in (rel.start_id, rel.end_id):
                if endpoint in self._design or endpoint in seen:
                    continue
                seen.add(endpoint)
                issues.append(
                    self._issue(
                        CAT_REFERENCES,
                        SEVERITY_WARNING,
                        endpoint,
                        f"Undeclared element {endpoint} will be stored as Unknown",
                    )
                )
        return issues

    def _check_duplicates(self) -> list[dict[str, Any]]:
        return [
            self._issue(
                CAT_DUPLICATES,
                SEVERITY_WARNING,
                full_id,
                f"Element {full_id} was declared more than once; the last declaration won",
            )
            for full_id in dict.fromkeys(self._design.overwritten)
        ]

    def _check_collapsed(self) -> list[dict[str, Any]]:
        keys = Counter(
            rel.key
            for rel in self._design.relationships
            if rel.type != RelationshipType.IMPLIED_USE
        )
        issues: list[dict[str, Any]] = []
        for (start, end, rel_type, description), count in keys.items():
            if count < 2:
                continue
            issues.append(
                self._issue(
                    CAT_COLLAPSED,
                    SEVERITY_WARNING,
                    start,
                    f"{rel_type} {start} -> {end} ({description!r}) declared {count} times; "
                    "stored once",
                )
            )
        return issues

    def _check_graph_health(self) -> list[dict[str, Any]]:
        """Self-referencing edges and actors with no usage edges at all."""
        g = self._engine.graph
        issues: list[dict[str, Any]] = []
        connected: set[str] = set()

        for src, tgt, attrs in g.edges(data=True):
            if attrs.get("rel_type") == RelationshipType.BELONGS_TO:
                continue
            connected.update((src, tgt))
            if src == tgt:
                issues.append(
                    self._issue(
                        CAT_GRAPH,
                        SEVERITY_ERROR,
                        src,
                        f"Self-referencing edge: {src} -> {src} ({attrs.get('rel_type')})",
                    )
                )

        for node_id, attrs in g.nodes(data=True):
            if attrs.get("kind") in _ACTOR_KINDS and node_id not in connected:
                issues.append(
                    self._issue(
                        CAT_GRAPH,
                        SEVERITY_WARNING,
                        node_id,
                        f"{attrs.get('kind')} {node_id} has no usage relationships",
                    )
                )
        return issues
