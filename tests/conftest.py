"""Shared pytest fixtures and test helpers for neoarch tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from neoarch.domain.design import Design
from neoarch.infrastructure.graph.store import GraphStore
from neoarch.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep every test away from real config files, env overrides, and telemetry leaks."""
    for var in ("NEOARCH_CONFIG", "NEOARCH_NEO4J__URI", "NEOARCH_NEO4J__DATABASE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()
    _current_span.set(None)


# ---------------------------------------------------------------------------
# Designs
# ---------------------------------------------------------------------------


def build_shop(**kwargs: Any) -> Design:
    """A two-system design with a person, containers and one component.

    Ledger, in order: BELONGS_TO for each element as it is created,
    USES(User, Web), IMPLIED_USE(User, Shop), USES(Web, Gateway),
    IMPLIED_USE(Shop, Payments).
    """
    design = Design("Shop", "Online shop", **kwargs)
    user = design.person("User", "A customer").external()
    shop = design.system("Shop", "Storefront").tag("core")
    web = shop.container("Web", "Browser UI")
    shop.container("DB", "Orders")
    payments = design.system("Payments", "Takes payments")
    gateway = payments.container("Gateway", "Card API")
    gateway.component("Tokenizer", "Stores card tokens")
    web.used_by(user, "Browses")
    web.uses(gateway, "Charges cards")
    return design


@pytest.fixture
def shop() -> Design:
    return build_shop()


DESIGN_SOURCE = '''\
from neoarch import Design

design = Design("Cli", "Design used by CLI tests")
user = design.person("User", "Someone")
app = design.system("App", "The app")
api = app.container("API", "HTTP").used_by(user, "Calls")


def build(config):
    d = Design("Built", implied_use=config.implied_use)
    d.system("Only")
    return d
'''


@pytest.fixture
def design_file(tmp_path: Path) -> Path:
    """A design module on disk exposing ``design`` and a ``build(config)`` factory."""
    path = tmp_path / "cli_design.py"
    path.write_text(DESIGN_SOURCE, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Recording fake Neo4j driver
# ---------------------------------------------------------------------------


@dataclass
class FakeCounters:
    nodes_deleted: int = 0
    relationships_deleted: int = 0


@dataclass
class FakeSummary:
    counters: FakeCounters = field(default_factory=FakeCounters)


class FakeResult:
    def __init__(self, summary: FakeSummary) -> None:
        self._summary = summary

    def consume(self) -> FakeSummary:
        return self._summary


class FakeSession:
    def __init__(self, driver: FakeDriver, database: str | None) -> None:
        self._driver = driver
        self.database = database
        self.closed = False

    def run(self, query: str, parameters: dict[str, Any] | None = None) -> FakeResult:
        if self._driver.fail_after is not None and (
            len(self._driver.statements) >= self._driver.fail_after
        ):
            raise self._driver.error
        self._driver.statements.append((query, dict(parameters or {})))
        return FakeResult(self._driver.summary)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeSession:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class FakeDriver:
    """Records every statement; can be told to fail after N statements."""

    def __init__(self) -> None:
        self.statements: list[tuple[str, dict[str, Any]]] = []
        self.sessions: list[FakeSession] = []
        self.summary = FakeSummary()
        self.fail_after: int | None = None
        self.error: Exception = RuntimeError("store down")
        self.closed = False
        self.verified = False
        self.verify_error: Exception | None = None

    def session(self, database: str | None = None) -> FakeSession:
        session = FakeSession(self, database)
        self.sessions.append(session)
        return session

    def verify_connectivity(self) -> None:
        if self.verify_error is not None:
            raise self.verify_error
        self.verified = True

    def close(self) -> None:
        self.closed = True

    def queries(self, prefix: str = "") -> list[tuple[str, dict[str, Any]]]:
        return [(q, p) for q, p in self.statements if q.startswith(prefix)]


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def store(fake_driver: FakeDriver) -> GraphStore:
    return GraphStore(fake_driver, database="neo4j")  # type: ignore[arg-type]
