"""Tag rules: store property keys derived from free-form tags."""

from __future__ import annotations

import re

TAG_PROPERTY_PREFIX = "tag_"

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_]")


def tag_property_key(tag: str) -> str:
    """Map a tag to the boolean property key set on its node.

    Property keys in the graph store are character-restricted, so anything
    outside ``[A-Za-z0-9_]`` becomes ``_``.

    Examples:
        >>> tag_property_key("read-only")
        'tag_read_only'
        >>> tag_property_key("team: core")
        'tag_team__core'
    """
    return TAG_PROPERTY_PREFIX + _UNSAFE_KEY_CHARS.sub("_", tag)


def tag_properties(tags: list[str]) -> dict[str, bool]:
    """Return ``{property_key: True}`` for every tag, in insertion order."""
    return {tag_property_key(tag): True for tag in tags}
