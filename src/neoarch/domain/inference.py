"""Implied-use inference.

Usage declared between nested elements (Containers, Components) is lifted
to their owning top-level Systems as IMPLIED_USE edges, so system-level
context diagrams show the dependency without the caller declaring every
level by hand.

All functions here are pure. The enable flag is passed in explicitly by the
owning Design; there is no module-level toggle.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from neoarch.domain.nodes import Relationship
from neoarch.domain.types import LEAF_KINDS, RelationshipType

type KindLookup = Callable[[str], str | None]
type SystemLookup = Callable[[str], str | None]


def is_suppressed(ledger: Iterable[Relationship], start_id: str, end_id: str) -> bool:
    """Return True when a BELONGS_TO edge already links the two endpoints.

    An element never implied-uses something it structurally contains (or is
    contained by), regardless of which edge was recorded first.
    """
    for rel in ledger:
        if rel.type != RelationshipType.BELONGS_TO:
            continue
        if (rel.start_id, rel.end_id) in ((end_id, start_id), (start_id, end_id)):
            return True
    return False


def admit(rel: Relationship, ledger: Iterable[Relationship], *, enabled: bool) -> bool:
    """Decide whether *rel* may be appended to *ledger*.

    Explicit edge types are always admitted (no deduplication). IMPLIED_USE
    edges are dropped when inference is disabled, when they would be
    self-referential, or when a BELONGS_TO edge suppresses them.
    """
    if rel.type != RelationshipType.IMPLIED_USE:
        return True
    if not enabled:
        return False
    if rel.start_id == rel.end_id:
        return False
    return not is_suppressed(ledger, rel.start_id, rel.end_id)


def lift_target(target_id: str, owning_system: SystemLookup) -> str:
    """Return the system that owns *target_id*, or the target itself if it is not nested."""
    system_id = owning_system(target_id)
    if system_id is None:
        return target_id
    return system_id


def implied_for_uses(
    source_id: str,
    target_id: str,
    *,
    kind_of: KindLookup,
    owning_system: SystemLookup,
) -> tuple[str, str] | None:
    """Implied edge for ``source uses target``, or None.

    Only Containers and Components as sources produce an implied edge: from
    the source's owning System to the target's owning System (or to the
    target itself when it is not nested in a System). Nothing is produced
    when both sides resolve to the same System.
    """
    if kind_of(source_id) not in LEAF_KINDS:
        return None
    start = owning_system(source_id)
    if start is None:
        return None
    end = lift_target(target_id, owning_system)
    if start == end:
        return None
    return start, end


def implied_for_used_by(
    actor_id: str,
    target_id: str,
    *,
    owning_system: SystemLookup,
) -> tuple[str, str] | None:
    """Implied edge for ``actor uses target`` declared from the target's side.

    The actor is recorded as implied-using the target's owning System. None
    when the target is a System or unowned, and None when the actor already
    sits inside that System.
    """
    system_id = owning_system(target_id)
    if system_id is None or system_id == target_id:
        return None
    if owning_system(actor_id) == system_id:
        return None
    return actor_id, system_id
