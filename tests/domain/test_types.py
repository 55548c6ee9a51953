"""Tests for element kinds and relationship types."""

from __future__ import annotations

from neoarch.domain.types import LEAF_KINDS, NodeKind, RelationshipType, is_custom_kind


class TestKinds:
    def test_values_are_labels(self) -> None:
        assert NodeKind.SYSTEM == "System"
        assert str(NodeKind.UNKNOWN) == "Unknown"

    def test_relationship_values(self) -> None:
        assert {t.value for t in RelationshipType} == {
            "USES",
            "IMPLIED_USE",
            "BELONGS_TO",
            "INTERACTS_WITH",
        }

    def test_leaf_kinds(self) -> None:
        assert LEAF_KINDS == {"Container", "Component"}

    def test_custom_kind(self) -> None:
        assert is_custom_kind("Queue")
        assert not is_custom_kind("Container")
        assert not is_custom_kind("Unknown")
