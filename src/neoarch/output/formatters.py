"""Rich/JSON output helpers.

The CLI renders a ServiceResult for humans (Rich) or machines (``--json``).
This layer picks the mode; per-operation layouts live in
:mod:`neoarch.output.renderers`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from neoarch.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from neoarch.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags taken from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet, quiet wins over the Rich renderers.
    """
    active = settings or OutputSettings()
    if active.json_output:
        return result.model_dump_json(indent=2)
    if active.quiet:
        return render_quiet(result)
    return render_result(result, verbose=active.verbose)
