"""Rich console and theme used by every renderer.

Renderers draw into an in-memory console and hand back a string, so the
CLI decides where the text goes. Rich strips styling on its own when the
buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from neoarch.domain.types import NodeKind

NEOARCH_THEME = Theme(
    {
        "neoarch.ok": "bold green",
        "neoarch.error": "bold red",
        "neoarch.warning": "bold yellow",
        "neoarch.op": "bold cyan",
        "neoarch.key": "dim",
        "neoarch.id": "bold blue",
        "neoarch.count": "magenta",
        "neoarch.kind.person": "green",
        "neoarch.kind.system": "bold",
        "neoarch.kind.container": "cyan",
        "neoarch.kind.component": "blue",
        "neoarch.kind.unknown": "dim red",
    }
)

_KIND_STYLES: dict[str, str] = {
    NodeKind.PERSON: "neoarch.kind.person",
    NodeKind.SYSTEM: "neoarch.kind.system",
    NodeKind.CONTAINER: "neoarch.kind.container",
    NodeKind.COMPONENT: "neoarch.kind.component",
    NodeKind.UNKNOWN: "neoarch.kind.unknown",
}


def create_console(*, no_color: bool = False, width: int = 120) -> Console:
    """In-memory console; a fixed width keeps tables stable across terminals."""
    return Console(
        file=StringIO(),
        theme=NEOARCH_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
    )


def get_output(console: Console) -> str:
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()


def style_for_kind(kind: str) -> str:
    """Theme style for an element kind; custom kinds are unstyled."""
    return _KIND_STYLES.get(kind, "")


def style_for_severity(severity: str) -> str:
    return "neoarch.error" if severity == "error" else "neoarch.warning"
