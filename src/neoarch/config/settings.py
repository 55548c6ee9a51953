"""One frozen settings object for a CLI invocation.

Sources, strongest first: CLI flags, ``NEOARCH_*`` environment variables
(``NEOARCH_NEO4J__PASSWORD``), the discovered ``neoarch.toml``, and the
defaults baked into :mod:`neoarch.config.models`. Nested sections are
merged key by key, so ``--database`` or a single env var only replaces the
value it names.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from neoarch.config.discovery import find_config, read_toml
from neoarch.config.models import ModelConfig, Neo4jConfig

# Parsed TOML for the settings object currently being constructed.
_toml_data: ContextVar[dict[str, Any]] = ContextVar("neoarch_toml_data", default={})


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Hands the already-parsed ``neoarch.toml`` to pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in self._data.items() if k in self.settings_cls.model_fields}


class NeoarchSettings(BaseSettings):
    """Settings for the ``neoarch`` CLI.

    Attributes:
        config_path: The TOML file that was read, or None.
        neo4j: Connection to the graph store.
        model: Defaults handed to design factories.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NEOARCH_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    neo4j: Neo4jConfig = Field(default_factory=Neo4jConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, TomlSettingsSource(settings_cls, _toml_data.get())

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        database: str | None = None,
        **cli_flags: Any,
    ) -> NeoarchSettings:
        """Build settings for one invocation.

        An explicit *config_path* that does not exist is ignored; otherwise
        ``neoarch.toml`` is discovered from *start* (default: cwd).
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(start)

        overrides: dict[str, Any] = dict(cli_flags)
        if database:
            overrides["neo4j"] = {"database": database}

        token = _toml_data.set(read_toml(toml_path) if toml_path else {})
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _toml_data.reset(token)
