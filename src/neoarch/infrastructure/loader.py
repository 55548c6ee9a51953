"""Design loading from ``module:attribute`` targets.

Accepted forms:

- ``package.module:attr``: imported with :func:`importlib.import_module`
- ``path/to/file.py:attr``: loaded from the file
- either form without ``:attr``: the attribute defaults to ``design``

The attribute may be a :class:`Design` or a factory returning one. A factory
that takes a parameter is called with the active :class:`ModelConfig`.
"""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

from neoarch.config.models import ModelConfig
from neoarch.domain.design import Design
from neoarch.domain.errors import DesignLoadError

DEFAULT_ATTRIBUTE = "design"

logger = logging.getLogger(__name__)


def split_target(target: str) -> tuple[str, str]:
    """Split ``module:attr`` into its parts, defaulting the attribute.

    Examples:
        >>> split_target("shop.model:build")
        ('shop.model', 'build')
        >>> split_target("designs/shop.py")
        ('designs/shop.py', 'design')
    """
    location, sep, attr = target.rpartition(":")
    if not sep or not attr.isidentifier():
        return target, DEFAULT_ATTRIBUTE
    return location, attr


def _import_file(path: Path) -> ModuleType:
    if not path.is_file():
        raise DesignLoadError(f"Design file not found: {path}")
    module_name = f"neoarch_design_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise DesignLoadError(f"Could not create module spec for {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise DesignLoadError(f"Failed to execute {path}: {exc}") from exc
    return module


def _import_module(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except ImportError as exc:
        raise DesignLoadError(f"Cannot import {name}: {exc}") from exc


def _takes_argument(factory: object) -> bool:
    try:
        params = inspect.signature(factory).parameters.values()  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL) for p in params
    )


def load_design(target: str, *, model_config: ModelConfig | None = None) -> Design:
    """Import *target* and return the Design it names."""
    location, attr = split_target(target)
    if location.endswith(".py"):
        module = _import_file(Path(location))
    else:
        module = _import_module(location)

    try:
        obj = getattr(module, attr)
    except AttributeError as exc:
        raise DesignLoadError(f"{location} has no attribute {attr!r}") from exc

    if not isinstance(obj, Design) and callable(obj):
        config = model_config or ModelConfig()
        obj = obj(config) if _takes_argument(obj) else obj()

    if not isinstance(obj, Design):
        raise DesignLoadError(f"{target} resolved to {type(obj).__name__}, expected a Design")
    logger.debug("Loaded design %s from %s", obj.id, target)
    return obj
