"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, neoarch.toml only contains overrides.
A local sandbox store needs only ``[neo4j] password``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

# --- neoarch.toml sections ---


class Neo4jConfig(BaseModel):
    """[neo4j] section: connection to the backing graph store."""

    model_config = {"frozen": True}

    uri: str = "neo4j://localhost:7687"
    username: str = "neo4j"
    password: str = ""
    database: str = "neo4j"


class ModelConfig(BaseModel):
    """[model] section: defaults handed to design factories."""

    model_config = {"frozen": True}

    implied_use: bool = True
    on_duplicate: Literal["overwrite", "error"] = "overwrite"
