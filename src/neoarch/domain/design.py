"""Design: the root aggregate and its fluent element builders.

The Design owns the node registry (full ID -> Node) and the append-only
relationship ledger. Element handles (Person, System, ...) are thin views
holding a Design reference and a full ID; every read and write goes through
the registry, so nodes never point at each other.

Usage::

    design = Design("Shop", "Online shop")
    user = design.person("User", "A customer").external()
    billing = design.system("Billing", "Takes payments")
    api = billing.container("API", "HTTP entrypoint").used_by(user, "Pays via")

INVARIANT: every non-root node has exactly one BELONGS_TO edge to its parent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Self

from neoarch.domain.errors import DuplicateElementError
from neoarch.domain.ids import child_id, design_id, person_local_id
from neoarch.domain.inference import admit, implied_for_used_by, implied_for_uses
from neoarch.domain.nodes import Node, Relationship
from neoarch.domain.types import NodeKind, RelationshipType

logger = logging.getLogger(__name__)

DuplicatePolicy = Literal["overwrite", "error"]

BELONGS_TO_ROOT = "Belongs to"
PART_OF = "Is part of"


@dataclass(frozen=True)
class NodeRef:
    """Reference to an element by full ID, possibly one this design never declared.

    Undeclared references are materialized as ``Unknown`` stub nodes.
    """

    full_id: str


type Target = ElementHandle | NodeRef | Node | Design | str


def _id_of(target: Target) -> str:
    if isinstance(target, str):
        return target
    return target.full_id


# ---------------------------------------------------------------------------
# Element handles and capability mixins
# ---------------------------------------------------------------------------


class ElementHandle:
    """Base for all element views: identity plus registry-backed attributes."""

    def __init__(self, design: Design, full_id: str) -> None:
        self._design = design
        self.full_id = full_id

    @property
    def node(self) -> Node:
        return self._design.nodes[self.full_id]

    @property
    def id(self) -> str:
        return self.node.local_id

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def description(self) -> str:
        return self.node.description

    @property
    def kind(self) -> str:
        return self.node.kind

    @property
    def full_name(self) -> str:
        return self._design.full_name(self.full_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_id!r})"


class Taggable(ElementHandle):
    """Elements that carry tags, extra labels, and an external flag."""

    def tag(self, tag: str) -> Self:
        self.node.tags.append(tag)
        return self

    def add_label(self, label: str) -> Self:
        self.node.labels.append(label)
        return self

    def external(self) -> Self:
        self.node.is_external = True
        return self

    def internal(self) -> Self:
        self.node.is_external = False
        return self


class CanUse(ElementHandle):
    """Elements that can declare a USES edge towards another element."""

    def uses(self, target: Target, description: str = "") -> Self:
        self._design._record_uses(self.full_id, _id_of(target), description)
        return self


class CanBeUsedBy(ElementHandle):
    """Elements that can declare an incoming USES edge from an actor."""

    def used_by(self, actor: Target, description: str = "") -> Self:
        self._design._record_used_by(_id_of(actor), self.full_id, description)
        return self


class _CustomParent(ElementHandle):
    def custom(
        self,
        label: str,
        name: str,
        description: str = "",
        belongs_to_description: str | None = None,
        *,
        local_id: str | None = None,
    ) -> CustomElement:
        """Create a custom-labelled element nested under this one."""
        if not label:
            raise ValueError("custom elements need a non-empty label")
        node = self._design._create(
            local_id or name,
            self.full_id,
            label,
            name,
            description,
            belongs_to_description or BELONGS_TO_ROOT,
        )
        return CustomElement(self._design, node.full_id)


class Person(Taggable, CanUse):
    """A human actor. Attached directly under the design root."""

    def interacts_with(self, other: Target, description: str = "") -> Self:
        self._design._add_relationship(
            self.full_id, _id_of(other), RelationshipType.INTERACTS_WITH, description
        )
        return self


class System(Taggable, CanUse, CanBeUsedBy):
    """A top-level software system."""

    def container(
        self, name: str, description: str = "", *, local_id: str | None = None
    ) -> Container:
        node = self._design._create(
            local_id or name, self.full_id, NodeKind.CONTAINER, name, description, PART_OF
        )
        return Container(self._design, node.full_id)

    def implied_use(self, target: Target, description: str = "") -> Self:
        """Declare that this system implicitly uses *target*."""
        self._design._add_relationship(
            self.full_id, _id_of(target), RelationshipType.IMPLIED_USE, description
        )
        return self

    def implied_used_by(self, source: Target, description: str = "") -> Self:
        """Declare that *source* implicitly uses this system."""
        self._design._add_relationship(
            _id_of(source), self.full_id, RelationshipType.IMPLIED_USE, description
        )
        return self


class Container(Taggable, CanUse, CanBeUsedBy, _CustomParent):
    """A deployable unit inside a System."""

    def component(
        self, name: str, description: str = "", *, local_id: str | None = None
    ) -> Component:
        node = self._design._create(
            local_id or name, self.full_id, NodeKind.COMPONENT, name, description, PART_OF
        )
        return Component(self._design, node.full_id)


class Component(Taggable, CanUse, CanBeUsedBy, _CustomParent):
    """A building block inside a Container."""


class CustomElement(Taggable, CanUse, CanBeUsedBy, _CustomParent):
    """An element with a caller-chosen kind label."""


# ---------------------------------------------------------------------------
# Design aggregate
# ---------------------------------------------------------------------------


class Design:
    """Root aggregate: node registry, relationship ledger, inference toggle.

    Attributes:
        id: Root full ID, ``design_<name>``.
        implied_use_enabled: Whether IMPLIED_USE edges are recorded.
        on_duplicate: What to do when an element is declared twice under the
            same parent: ``"overwrite"`` replaces it, ``"error"`` raises.
        overwritten: Full IDs replaced by a later declaration.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        implied_use: bool = True,
        on_duplicate: DuplicatePolicy = "overwrite",
    ) -> None:
        self.name = name
        self.description = description
        self.id = design_id(name)
        self.implied_use_enabled = implied_use
        self.on_duplicate: DuplicatePolicy = on_duplicate
        self.overwritten: list[str] = []
        self._nodes: dict[str, Node] = {
            self.id: Node(
                full_id=self.id,
                local_id=self.id,
                name=name,
                description=description,
                kind=NodeKind.DESIGN,
                tags=["design"],
            )
        }
        self._relationships: list[Relationship] = []

    def __repr__(self) -> str:
        return (
            f"Design({self.name!r}, nodes={len(self._nodes)}, "
            f"relationships={len(self._relationships)})"
        )

    @property
    def full_id(self) -> str:
        return self.id

    # --- Registry views ---

    @property
    def nodes(self) -> Mapping[str, Node]:
        """Read-only view of the registry, keyed by full ID."""
        return MappingProxyType(self._nodes)

    @property
    def relationships(self) -> tuple[Relationship, ...]:
        """The ledger in insertion order."""
        return tuple(self._relationships)

    @property
    def root(self) -> Node:
        return self._nodes[self.id]

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate nodes in ascending full-ID order."""
        for full_id in sorted(self._nodes):
            yield self._nodes[full_id]

    def get(self, full_id: str) -> Node | None:
        return self._nodes.get(full_id)

    def __contains__(self, full_id: object) -> bool:
        return full_id in self._nodes

    def kind_of(self, full_id: str) -> str | None:
        node = self._nodes.get(full_id)
        return node.kind if node else None

    def full_name(self, full_id: str) -> str:
        """Dot-joined display names from the root down to *full_id*."""
        names: list[str] = []
        current = self._nodes.get(full_id)
        while current is not None:
            names.append(current.name)
            current = self._nodes.get(current.parent_id) if current.parent_id else None
        return ".".join(reversed(names)) if names else full_id

    def owning_system(self, full_id: str) -> str | None:
        """Full ID of the System containing *full_id* (a System owns itself)."""
        current = self._nodes.get(full_id)
        while current is not None:
            if current.kind == NodeKind.SYSTEM:
                return current.full_id
            current = self._nodes.get(current.parent_id) if current.parent_id else None
        return None

    def reference(self, full_id: str) -> NodeRef:
        """Reference an element by full ID, declared in this design or not."""
        return NodeRef(full_id)

    def enable_implied_use(self, enable: bool) -> None:
        """Turn implied-use inference on or off for subsequent declarations."""
        self.implied_use_enabled = enable

    # --- Factories ---

    def person(self, name: str, description: str = "") -> Person:
        node = self._create(
            person_local_id(name), self.id, NodeKind.PERSON, name, description, BELONGS_TO_ROOT
        )
        return Person(self, node.full_id)

    def system(self, name: str, description: str = "", *, local_id: str | None = None) -> System:
        node = self._create(
            local_id or name, self.id, NodeKind.SYSTEM, name, description, BELONGS_TO_ROOT
        )
        return System(self, node.full_id)

    # --- Internals used by handles ---

    def _create(
        self,
        local_id: str,
        parent_id: str,
        kind: str,
        name: str,
        description: str,
        belongs_to_description: str,
    ) -> Node:
        node = Node(
            full_id=child_id(parent_id, local_id),
            local_id=local_id,
            name=name,
            description=description,
            kind=kind,
            parent_id=parent_id,
        )
        if node.full_id in self._nodes:
            if self.on_duplicate == "error":
                raise DuplicateElementError(node.full_id)
            # Same parent and local ID: the existing BELONGS_TO edge stays valid.
            logger.warning("Element %s declared twice; keeping the later declaration", node.full_id)
            self.overwritten.append(node.full_id)
            self._nodes[node.full_id] = node
            return node

        self._nodes[node.full_id] = node
        self._add_relationship(
            node.full_id, parent_id, RelationshipType.BELONGS_TO, belongs_to_description
        )
        return node

    def _add_relationship(
        self,
        start_id: str,
        end_id: str,
        rel_type: RelationshipType,
        description: str,
    ) -> bool:
        rel = Relationship(start_id, end_id, rel_type, description)
        if not admit(rel, self._relationships, enabled=self.implied_use_enabled):
            return False
        self._relationships.append(rel)
        return True

    def _record_uses(self, source_id: str, target_id: str, description: str) -> None:
        self._add_relationship(source_id, target_id, RelationshipType.USES, description)
        implied = implied_for_uses(
            source_id, target_id, kind_of=self.kind_of, owning_system=self.owning_system
        )
        if implied is not None:
            self._add_relationship(*implied, RelationshipType.IMPLIED_USE, description)

    def _record_used_by(self, actor_id: str, target_id: str, description: str) -> None:
        self._add_relationship(actor_id, target_id, RelationshipType.USES, description)
        implied = implied_for_used_by(actor_id, target_id, owning_system=self.owning_system)
        if implied is not None:
            self._add_relationship(*implied, RelationshipType.IMPLIED_USE, description)
