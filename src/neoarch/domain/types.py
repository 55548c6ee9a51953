"""Element kinds and relationship types from the C4 model."""

from __future__ import annotations

from enum import StrEnum


class NodeKind(StrEnum):
    """Built-in element kinds. Custom elements carry a free-form label instead."""

    UNKNOWN = "Unknown"
    DESIGN = "Design"
    PERSON = "Person"
    SYSTEM = "System"
    CONTAINER = "Container"
    COMPONENT = "Component"


class RelationshipType(StrEnum):
    """Directed edge types stored in the graph."""

    USES = "USES"
    IMPLIED_USE = "IMPLIED_USE"
    BELONGS_TO = "BELONGS_TO"
    INTERACTS_WITH = "INTERACTS_WITH"


BUILTIN_KINDS: frozenset[str] = frozenset(kind.value for kind in NodeKind)

# Kinds nested inside a System whose usage is lifted to system level.
LEAF_KINDS: frozenset[str] = frozenset({NodeKind.CONTAINER, NodeKind.COMPONENT})


def is_custom_kind(kind: str) -> bool:
    """Return True when *kind* is a custom label rather than a built-in kind."""
    return kind not in BUILTIN_KINDS
