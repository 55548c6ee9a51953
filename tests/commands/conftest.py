"""Fixtures for command tests: a fake graph store behind the CLI."""

from __future__ import annotations

from typing import Any

import pytest

from neoarch.infrastructure.graph.store import GraphStore

ISSUES_SOURCE = '''\
from neoarch import Design

design = Design("Messy")
loop = design.system("Loop")
loop.uses(loop, "calls itself")
design.system("Lonely")
'''


@pytest.fixture
def patched_store(monkeypatch: pytest.MonkeyPatch, fake_driver: Any) -> Any:
    """Route ``GraphStore.from_config`` to the recording fake driver."""

    def from_config(cls: type[GraphStore], config: Any) -> GraphStore:
        return cls(fake_driver, database=config.database)

    monkeypatch.setattr(GraphStore, "from_config", classmethod(from_config))
    return fake_driver


@pytest.fixture
def messy_file(tmp_path: Any) -> Any:
    path = tmp_path / "messy_design.py"
    path.write_text(ISSUES_SOURCE, encoding="utf-8")
    return path
