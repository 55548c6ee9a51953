"""The value every service operation hands back to the CLI.

Services return a ServiceResult when they complete. Store failures are
raised, not wrapped: the CLI layer turns them into a failed result with
:meth:`ServiceResult.failed` so that ``--json`` consumers always get the
same shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    ``code`` is ours (``STORE_ERROR``, ``INVALID_FORMAT``); ``detail``
    carries the exception type and, for server-side failures, the Neo4j
    status code.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, code: str, exc: BaseException) -> ServiceError:
        detail: dict[str, Any] = {"exception": type(exc).__name__}
        server_code = getattr(exc, "code", None)
        if server_code:
            detail["server_code"] = str(server_code)
        return cls(code=code, message=str(exc) or type(exc).__name__, detail=detail)


class ServiceResult(BaseModel):
    """Outcome of one operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name, e.g. ``"save_design"``; selects the renderer.
        data: Operation payload (counts, issues, exported content).
        warnings: Non-fatal notes, printed to stderr by the CLI.
        error: Set when ``ok`` is False.
        meta: Extra context; ``--verbose`` puts the span tree here.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failed(cls, op: str, code: str, exc: BaseException) -> ServiceResult:
        """A failed result for *op* describing *exc*."""
        return cls(ok=False, op=op, error=ServiceError.from_exception(code, exc))
