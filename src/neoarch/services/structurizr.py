"""Structurizr DSL serializer.

Renders a Design as a ``workspace`` with a nested ``model`` block and one
system-context plus one container view per top-level System. Pure function
of the Design: no I/O, no mutation, deterministic for a given registry and
ledger.

Element identifiers are the sanitized local IDs, made distinct among
siblings; with
``!identifiers hierarchical`` a nested element is referenced by the dotted
chain of identifiers below the design root (``Billing.API``).
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from neoarch.domain.ids import unique_dsl_identifiers
from neoarch.domain.types import NodeKind, RelationshipType

if TYPE_CHECKING:
    from neoarch.domain.design import Design
    from neoarch.domain.nodes import Node

NO_ROOT = "// No design node found"
INDENT = "    "

_KEYWORDS: dict[str, str] = {
    NodeKind.PERSON: "person",
    NodeKind.SYSTEM: "softwareSystem",
    NodeKind.CONTAINER: "container",
    NodeKind.COMPONENT: "component",
}

_HIDDEN = frozenset({RelationshipType.BELONGS_TO, RelationshipType.IMPLIED_USE})


def quote(text: str) -> str:
    """Wrap *text* in double quotes, escaping embedded ones."""
    return '"' + text.replace('"', '\\"') + '"'


class _Writer:
    def __init__(self) -> None:
        self.lines: list[str] = []
        self.depth = 0

    def line(self, text: str = "") -> None:
        self.lines.append(f"{INDENT * self.depth}{text}" if text else "")

    def open(self, text: str) -> None:
        self.line(f"{text} {{")
        self.depth += 1

    def close(self) -> None:
        self.depth -= 1
        self.line("}")

    def render(self) -> str:
        return "\n".join(self.lines) + "\n"


def _children_index(design: Design) -> dict[str, list[Node]]:
    """Parent full ID -> children, in BELONGS_TO ledger order."""
    children: dict[str, list[Node]] = defaultdict(list)
    for rel in design.relationships:
        if rel.type != RelationshipType.BELONGS_TO:
            continue
        child = design.get(rel.start_id)
        if child is not None:
            children[rel.end_id].append(child)
    return children


def _root_of(design: Design) -> Node | None:
    for node in design.iter_nodes():
        if node.is_root:
            return node
    return None


def _identifiers(children: dict[str, list[Node]]) -> dict[str, str]:
    """Full ID -> DSL identifier, unique within each parent."""
    idents: dict[str, str] = {}
    for siblings in children.values():
        by_local = unique_dsl_identifiers(child.local_id for child in siblings)
        for child in siblings:
            idents[child.full_id] = by_local[child.local_id]
    return idents


def reference(
    design: Design, full_id: str, idents: dict[str, str] | None = None
) -> str | None:
    """Hierarchical DSL reference for *full_id*, or None when undeclared."""
    if idents is None:
        idents = _identifiers(_children_index(design))
    parts: list[str] = []
    current = design.get(full_id)
    if current is None or current.is_root:
        return None
    while current is not None and not current.is_root:
        parts.append(idents[current.full_id])
        current = design.get(current.parent_id) if current.parent_id else None
    return ".".join(reversed(parts))


def _emit_node(
    out: _Writer, node: Node, children: dict[str, list[Node]], idents: dict[str, str]
) -> None:
    ident = idents[node.full_id]
    if node.is_custom:
        head = (
            f"{ident} = element {quote(node.name)} {quote(node.kind)} {quote(node.description)}"
        )
    else:
        head = f"{ident} = {_KEYWORDS[node.kind]} {quote(node.name)} {quote(node.description)}"

    nested = children.get(node.full_id, [])
    if not nested and not node.tags:
        out.line(head)
        return

    out.open(head)
    if node.tags:
        out.line("tags " + " ".join(quote(tag) for tag in node.tags))
    for child in nested:
        _emit_node(out, child, children, idents)
    out.close()


def _emit_views(out: _Writer, systems: list[Node], idents: dict[str, str]) -> None:
    out.open("views")
    for system in systems:
        ident = idents[system.full_id]
        for view, key in (("systemContext", "SystemContext"), ("container", "Containers")):
            out.open(f"{view} {ident} {quote(f'{key}-{ident}')}")
            out.line("include *")
            out.line("autolayout lr")
            out.close()
    out.close()


def to_structurizr_dsl(design: Design) -> str:
    """Render *design* as Structurizr DSL.

    Returns :data:`NO_ROOT` when the registry holds no Design node.
    """
    root = _root_of(design)
    if root is None:
        return NO_ROOT

    children = _children_index(design)
    top_level = children.get(root.full_id, [])
    idents = _identifiers(children)

    out = _Writer()
    out.open(f"workspace {quote(root.name)} {quote(root.description)}")
    out.line("!identifiers hierarchical")
    out.line()

    out.open("model")
    for node in top_level:
        _emit_node(out, node, children, idents)
    out.line()
    for rel in design.relationships:
        if rel.type in _HIDDEN:
            continue
        start = reference(design, rel.start_id, idents)
        end = reference(design, rel.end_id, idents)
        if start is None or end is None:
            out.line(f"// {rel.start_id} -> {rel.end_id}: undeclared element")
            continue
        out.line(f"{start} -> {end} {quote(rel.description)}")
    out.close()
    out.line()

    systems = [node for node in top_level if node.kind == NodeKind.SYSTEM]
    _emit_views(out, systems, idents)
    out.close()
    return out.render()
