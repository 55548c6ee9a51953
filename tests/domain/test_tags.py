"""Tests for tag property keys."""

from __future__ import annotations

from neoarch.domain.tags import TAG_PROPERTY_PREFIX, tag_properties, tag_property_key


class TestTagPropertyKey:
    def test_prefix(self) -> None:
        assert tag_property_key("db").startswith(TAG_PROPERTY_PREFIX)

    def test_plain_tag(self) -> None:
        assert tag_property_key("gateway") == "tag_gateway"

    def test_unsafe_characters_replaced(self) -> None:
        assert tag_property_key("read-only") == "tag_read_only"
        assert tag_property_key("team: core") == "tag_team__core"


class TestTagProperties:
    def test_all_true(self) -> None:
        assert tag_properties(["db", "s3"]) == {"tag_db": True, "tag_s3": True}

    def test_empty(self) -> None:
        assert tag_properties([]) == {}

    def test_collisions_collapse(self) -> None:
        assert tag_properties(["a-b", "a_b"]) == {"tag_a_b": True}
