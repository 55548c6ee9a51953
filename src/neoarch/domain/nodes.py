"""Element and relationship records owned by a Design.

Nodes reference their parent by full ID only. The Design's registry is the
single owner of every node; lookups go through it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from neoarch.domain.types import NodeKind, RelationshipType, is_custom_kind


@dataclass
class Node:
    """One architecture element.

    Attributes:
        full_id: Hierarchical ID (unique within the store).
        local_id: ID unique among the parent's children.
        kind: A :class:`NodeKind` value or a custom label.
        parent_id: Full ID of the owning element, None for the design root.
        tags: Free-form tags, insertion ordered.
        labels: Extra graph labels applied when materialized.
    """

    full_id: str
    local_id: str
    name: str
    description: str
    kind: str
    parent_id: str | None = None
    tags: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    is_external: bool = False

    @property
    def is_custom(self) -> bool:
        return is_custom_kind(self.kind)

    @property
    def is_root(self) -> bool:
        return self.kind == NodeKind.DESIGN


@dataclass(frozen=True)
class Relationship:
    """A directed, typed edge between two full IDs.

    Endpoints need not exist in the registry. The tuple
    ``(start_id, end_id, type, description)`` is the edge's identity
    when materialized.
    """

    start_id: str
    end_id: str
    type: RelationshipType
    description: str = ""

    @property
    def key(self) -> tuple[str, str, str, str]:
        return (self.start_id, self.end_id, str(self.type), self.description)
