"""Timing spans for ``--verbose``.

A ``@traced`` service call opens a root span; :func:`trace_span` blocks
inside it add child spans (``upsert_nodes``, ``graph_health``...). When
the root call returns a ServiceResult, the span tree is attached as
``meta["telemetry"]``. With telemetry off both are a single ContextVar
read.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog

from neoarch.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("neoarch_telemetry", default=False)
_current_span: ContextVar[Span | None] = ContextVar("neoarch_span", default=None)

logger = structlog.get_logger("neoarch.telemetry")


@dataclass
class Span:
    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        return 0.0 if self.finished is None else (self.finished - self.started) * 1000

    def annotate(self, key: str, value: Any) -> None:
        """Attach a value (a statement count, say) shown next to the timing."""
        self.annotations[key] = value

    def finish(self) -> None:
        self.finished = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.finish()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a block as a child of the active span.

    Yields None when telemetry is off or no ``@traced`` call is running.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _activate(child):
        yield child


def traced[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Time *func*; the outermost traced call reports the whole tree.

    A traced call made inside another one becomes a child span.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        if not _enabled.get():
            return func(*args, **kwargs)

        parent = _current_span.get()
        span = Span(func.__qualname__)
        if parent is not None:
            parent.children.append(span)
            with _activate(span):
                return func(*args, **kwargs)

        ok = False
        try:
            with _activate(span):
                result = func(*args, **kwargs)
            ok = True
        finally:
            logger.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 2),
                ok=ok,
                children=len(span.children),
            )
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
