"""Human-readable rendering of ServiceResult, one layout per operation.

:func:`render_result` picks a layout by ``result.op``; anything without a
dedicated layout gets a key/value listing. ``--verbose`` adds the timing
tree collected by :mod:`neoarch.services.telemetry`.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from neoarch.output.console import (
    create_console,
    get_output,
    style_for_kind,
    style_for_severity,
)

if TYPE_CHECKING:
    from rich.console import Console

    from neoarch.services.result import ServiceResult

type Renderer = Callable[[ServiceResult, Console], None]

_COUNT_LABELS = {
    "nodes_upserted": "nodes upserted",
    "relationships_upserted": "relationships upserted",
    "unknown_nodes": "unknown nodes",
    "nodes_deleted": "nodes deleted",
    "relationships_deleted": "relationships deleted",
}


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as plain or styled text (styled only on a terminal)."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console)
        if verbose and result.meta and "telemetry" in result.meta:
            console.print(_telemetry_tree(result.meta["telemetry"]))
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line per fact: the status, or each check issue."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {message}"
    if result.op == "check" and result.data.get("issues"):
        return "\n".join(f"{i['severity']}: {i['message']}" for i in result.data["issues"])
    return f"OK: {result.op}"


def _headline(console: Console, result: ServiceResult, subject: str | None = None) -> None:
    line = Text.assemble(("OK", "neoarch.ok"), " ", (result.op, "neoarch.op"))
    if subject:
        line.append(" ")
        line.append(subject, style="neoarch.id")
    console.print(line)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    err = result.error
    line = Text.assemble(("ERROR", "neoarch.error"), " ", (result.op, "neoarch.op"), ": ")
    line.append(err.message if err else "Unknown error")
    console.print(line)
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="neoarch.key"))
        for key, value in err.detail.items():
            console.print(Text(f"    {key}: {value}"))


def _telemetry_tree(span: dict[str, Any]) -> Tree:
    def label(data: dict[str, Any]) -> Text:
        duration = float(data.get("duration_ms", 0.0))
        style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
        text = Text.assemble((f"{duration:.2f}ms", style), " ", str(data.get("name", "?")))
        annotations = data.get("annotations") or {}
        if annotations:
            text.append(" (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
        return text

    def grow(node: Tree, data: dict[str, Any]) -> None:
        for child in data.get("children", []):
            grow(node.add(label(child)), child)

    tree = Tree(label(span), guide_style="dim")
    grow(tree, span)
    return tree


def _render_store_op(result: ServiceResult, console: Console) -> None:
    """save / delete / clear: the design and database, then a count table."""
    data = result.data
    _headline(console, result, data.get("design_id"))
    if "database" in data:
        console.print(Text.assemble(("  database: ", "neoarch.key"), str(data["database"])))

    table = Table(show_header=True, pad_edge=False, box=None)
    table.add_column("count", style="neoarch.key")
    table.add_column("value", style="neoarch.count", justify="right")
    for key, label in _COUNT_LABELS.items():
        if key in data:
            table.add_row(label, str(data[key]))
    if table.row_count:
        console.print(table)


def _render_check(result: ServiceResult, console: Console) -> None:
    """One table of issues, errors first."""
    issues: list[dict[str, Any]] = result.data.get("issues", [])
    if not issues:
        console.print(Text.assemble(("OK", "neoarch.ok"), " No issues found."))
        return

    table = Table(show_header=True, pad_edge=False, box=None)
    table.add_column("severity")
    table.add_column("category", style="neoarch.key")
    table.add_column("element")
    table.add_column("message", overflow="fold")
    for issue in sorted(issues, key=lambda i: i.get("severity") != "error"):
        severity = str(issue.get("severity", "warning"))
        kind_style = style_for_kind(issue.get("kind") or "")
        table.add_row(
            Text(severity, style=style_for_severity(severity)),
            str(issue.get("category", "")),
            Text(str(issue.get("node_id") or "-"), style=kind_style),
            Text(str(issue.get("message", ""))),
        )
    console.print(table)

    errors = result.data.get("errors", sum(1 for i in issues if i.get("severity") == "error"))
    console.print(f"{errors} errors, {len(issues) - errors} warnings")


def _render_export(result: ServiceResult, console: Console) -> None:
    """Summary printed when export content went to a file instead of stdout."""
    data = result.data
    _headline(console, result, data.get("output_file"))
    for key in ("format", "node_count", "relationship_count", "edge_count"):
        if key in data:
            console.print(Text.assemble((f"  {key}: ", "neoarch.key"), str(data[key])))


def _render_generic(result: ServiceResult, console: Console) -> None:
    _headline(console, result)
    for key, value in result.data.items():
        shown = value
        if isinstance(value, dict | list):
            shown = json.dumps(value, separators=(",", ":"))
        console.print(Text.assemble((f"  {key}: ", "neoarch.key"), str(shown)))


_OP_RENDERERS: dict[str, Renderer] = {
    "save_design": _render_store_op,
    "delete_design": _render_store_op,
    "clear_store": _render_store_op,
    "check": _render_check,
    "export_dsl": _render_export,
    "export_graph": _render_export,
}
