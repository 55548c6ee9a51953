"""Tests for the hierarchical identifier scheme."""

from __future__ import annotations

import pytest

from neoarch.domain.ids import (
    child_id,
    design_id,
    digest_id,
    dsl_identifier,
    person_local_id,
    unique_dsl_identifiers,
)


class TestIdConstruction:
    def test_design_id(self) -> None:
        assert design_id("Shop") == "design_Shop"

    def test_person_prefix(self) -> None:
        assert person_local_id("User") == "person_User"

    def test_child_id_joins_with_dot(self) -> None:
        assert child_id("design_Shop.Billing", "API") == "design_Shop.Billing.API"

    def test_child_id_without_parent(self) -> None:
        assert child_id(None, "design_Shop") == "design_Shop"


class TestUniqueDslIdentifiers:
    def test_distinct_ids_unchanged(self) -> None:
        assert unique_dsl_identifiers(["API", "Web"]) == {"API": "API", "Web": "Web"}

    def test_collision_gets_digest_suffix(self) -> None:
        idents = unique_dsl_identifiers(["User API", "User_API"])
        assert idents["User API"] == "User_API"
        assert idents["User_API"] == f"User_API_{digest_id('User_API')}"


class TestDigest:
    def test_stable(self) -> None:
        assert digest_id("User gRPC Service") == digest_id("User gRPC Service")

    def test_length(self) -> None:
        assert len(digest_id("x")) == 8
        assert len(digest_id("x", length=12)) == 12

    def test_md5_prefix(self) -> None:
        # md5("hello") = 5d41402abc4b2a76b9719d911017c592
        assert digest_id("hello") == "5d41402a"


class TestDslIdentifier:
    @pytest.mark.parametrize(
        ("local_id", "expected"),
        [
            ("User API Gateway", "User_API_Gateway"),
            ("person_User", "person_User"),
            ("read-only", "read-only"),
            ("a.b/c", "a_b_c"),
            ("", "_"),
        ],
    )
    def test_sanitizes(self, local_id: str, expected: str) -> None:
        assert dsl_identifier(local_id) == expected
