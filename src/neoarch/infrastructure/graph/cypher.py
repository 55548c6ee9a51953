"""Parametrized Cypher statements for materializing a Design.

Every write is an upsert keyed by a stable identity:

- Nodes are keyed by full ID alone, whatever their label. Properties are
  replaced on every save, and a declaration replaces an ``Unknown`` stub.
- Relationships are keyed by ``(start, end, type, description)``. Changing only
  the description therefore yields a second, distinct edge.

Labels and relationship types cannot be parameters in Cypher, so they are
interpolated backtick-quoted. Everything else travels as a parameter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from neoarch.domain.tags import tag_properties
from neoarch.domain.types import NodeKind

if TYPE_CHECKING:
    from neoarch.domain.nodes import Node, Relationship


@dataclass(frozen=True)
class Statement:
    """One parametrized write statement."""

    query: str
    params: dict[str, Any] = field(default_factory=dict)


def quote_name(name: str) -> str:
    """Backtick-quote a label or relationship type.

    Examples:
        >>> quote_name("Container")
        '`Container`'
        >>> quote_name("odd`label")
        '`odd``label`'
    """
    return "`" + name.replace("`", "``") + "`"


def node_properties(node: Node) -> dict[str, Any]:
    """Property map written onto a node (everything except its ``id``)."""
    props: dict[str, Any] = {
        "name": node.name,
        "description": node.description,
        "nodeType": str(node.kind),
        "tags": list(node.tags),
    }
    props.update(tag_properties(node.tags))
    if node.is_external:
        props["external"] = True
    return props


def node_upsert(node: Node) -> Statement:
    """MERGE a node by ``id`` alone, then replace its properties and labels.

    ``SET n = $props`` drops properties the node no longer has (a cleared
    ``external`` flag, a removed tag). Matching on ``id`` without a label
    lets a declaration take over an ``Unknown`` stub another design left.
    """
    set_clauses = ["n = $props"]
    set_clauses += [f"n:{quote_name(label)}" for label in (str(node.kind), *node.labels)]
    query = (
        "MERGE (n {id: $id})\n"
        f"SET {', '.join(set_clauses)}\n"
        f"REMOVE n:{quote_name(NodeKind.UNKNOWN)}"
    )
    props = {"id": node.full_id, **node_properties(node)}
    return Statement(query, {"id": node.full_id, "props": props})


def _merge_endpoint(var: str, label: str) -> str:
    return (
        f"MERGE ({var} {{id: ${var}_id}})\n"
        f"ON CREATE SET {var}:{quote_name(str(label))}"
    )


def relationship_upsert(
    rel: Relationship,
    *,
    start_label: str = NodeKind.UNKNOWN,
    end_label: str = NodeKind.UNKNOWN,
) -> Statement:
    """MERGE both endpoints by ``id`` and the typed edge between them.

    Endpoints match whatever node already carries the ``id``, whichever
    design stored it. Only a missing endpoint is created, labelled with the
    kind known locally, or ``Unknown`` as a stub.
    """
    query = (
        f"{_merge_endpoint('start', start_label)}\n"
        f"{_merge_endpoint('end', end_label)}\n"
        f"MERGE (start)-[r:{quote_name(str(rel.type))} {{description: $description}}]->(end)"
    )
    return Statement(
        query,
        {"start_id": rel.start_id, "end_id": rel.end_id, "description": rel.description},
    )


def delete_design(design_id: str) -> Statement:
    """Delete a design root and every element that transitively belongs to it.

    BELONGS_TO edges point child -> parent, so members are found by walking
    them backwards from the root. Elements of other designs are not reached.
    """
    query = (
        "MATCH (design:Design {id: $design_id})\n"
        "OPTIONAL MATCH (design)<-[:BELONGS_TO*1..]-(member)\n"
        "DETACH DELETE design, member"
    )
    return Statement(query, {"design_id": design_id})


def clear_all() -> Statement:
    """Delete every node and relationship in the database."""
    return Statement("MATCH (n)\nDETACH DELETE n")
