"""Tests for GraphStore against a recording fake driver."""

from __future__ import annotations

from typing import Any

import pytest

from neoarch.config.models import Neo4jConfig
from neoarch.infrastructure.graph.cypher import Statement
from neoarch.infrastructure.graph.store import GraphStore


class TestGraphStore:
    def test_session_bound_to_database(self, fake_driver: Any) -> None:
        store = GraphStore(fake_driver, database="sandbox")
        with store.session() as session:
            assert session.database == "sandbox"
        assert fake_driver.sessions[0].closed

    def test_write_runs_and_consumes(self, store: GraphStore, fake_driver: Any) -> None:
        with store.session() as session:
            summary = store.write(session, Statement("RETURN $x", {"x": 1}))
        assert fake_driver.statements == [("RETURN $x", {"x": 1})]
        assert summary is fake_driver.summary

    def test_write_error_propagates(self, store: GraphStore, fake_driver: Any) -> None:
        fake_driver.fail_after = 0
        with store.session() as session, pytest.raises(RuntimeError, match="store down"):
            store.write(session, Statement("RETURN 1"))

    def test_verify(self, store: GraphStore, fake_driver: Any) -> None:
        store.verify()
        assert fake_driver.verified

    def test_close_leaves_borrowed_driver_open(self, store: GraphStore, fake_driver: Any) -> None:
        store.close()
        assert not fake_driver.closed

    def test_context_manager_closes_owned_driver(self, fake_driver: Any) -> None:
        with GraphStore(fake_driver, owns_driver=True):
            pass
        assert fake_driver.closed


class TestFromConfig:
    def test_builds_driver_with_basic_auth(
        self, fake_driver: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[tuple[str, object]] = []

        def fake_factory(uri: str, auth: object = None) -> object:
            calls.append((uri, auth))
            return fake_driver

        monkeypatch.setattr("neo4j.GraphDatabase.driver", fake_factory)
        config = Neo4jConfig(uri="bolt://db:7687", password="secret", database="arch")
        store = GraphStore.from_config(config)

        assert calls == [("bolt://db:7687", ("neo4j", "secret"))]
        assert store.database == "arch"
        store.close()
        assert fake_driver.closed

    def test_empty_username_means_no_auth(
        self, fake_driver: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen: list[object] = []
        monkeypatch.setattr(
            "neo4j.GraphDatabase.driver",
            lambda uri, auth=None: seen.append(auth) or fake_driver,
        )
        GraphStore.from_config(Neo4jConfig(username=""))
        assert seen == [None]
