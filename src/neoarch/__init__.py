"""neoarch: C4 architecture modeling with Neo4j persistence."""

from neoarch.domain.design import (
    Component,
    Container,
    CustomElement,
    Design,
    NodeRef,
    Person,
    System,
)
from neoarch.domain.nodes import Node, Relationship
from neoarch.domain.types import NodeKind, RelationshipType

__version__ = "0.3.0"

__all__ = [
    "Component",
    "Container",
    "CustomElement",
    "Design",
    "Node",
    "NodeKind",
    "NodeRef",
    "Person",
    "Relationship",
    "RelationshipType",
    "System",
    "__version__",
]
