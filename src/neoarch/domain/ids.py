"""Hierarchical identifier scheme.

Every element's full ID is the dot-joined chain of its ancestors' local IDs
plus its own. The root is ``design_<name>``, so all IDs are namespaced by
their owning design and several designs can share one graph store.

INVARIANT: IDs are permanent. Once an element is created its full ID never changes.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Iterable

SEPARATOR = "."
DESIGN_PREFIX = "design_"
PERSON_PREFIX = "person_"

_DSL_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def design_id(name: str) -> str:
    """Return the root ID for a design called *name*."""
    return f"{DESIGN_PREFIX}{name}"


def person_local_id(name: str) -> str:
    """Local ID for a Person, prefixed so it never collides with a System."""
    return f"{PERSON_PREFIX}{name}"


def child_id(parent_full_id: str | None, local_id: str) -> str:
    """Join *local_id* onto its parent's full ID.

    Examples:
        >>> child_id("design_shop.Billing", "API")
        'design_shop.Billing.API'
        >>> child_id(None, "design_shop")
        'design_shop'
    """
    if parent_full_id is None:
        return local_id
    return f"{parent_full_id}{SEPARATOR}{local_id}"


def digest_id(text: str, length: int = 8) -> str:
    """Stable short hex digest of *text*, for use as a compact local ID."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()[:length]


def dsl_identifier(local_id: str) -> str:
    """Sanitize a local ID into an identifier the text format accepts.

    Examples:
        >>> dsl_identifier("User API Gateway")
        'User_API_Gateway'
    """
    ident = _DSL_UNSAFE.sub("_", local_id)
    return ident or "_"


def unique_dsl_identifiers(local_ids: Iterable[str]) -> dict[str, str]:
    """Map sibling local IDs to identifiers that stay distinct after sanitizing.

    The first sibling keeps the plain identifier; a later one that sanitizes
    to a taken identifier gets its :func:`digest_id` appended.

    Examples:
        >>> unique_dsl_identifiers(["User API", "User_API"])
        {'User API': 'User_API', 'User_API': 'User_API_2249899e'}
    """
    taken: set[str] = set()
    idents: dict[str, str] = {}
    for local_id in local_ids:
        ident = dsl_identifier(local_id)
        if ident in taken:
            ident = f"{ident}_{digest_id(local_id)}"
        taken.add(ident)
        idents[local_id] = ident
    return idents
