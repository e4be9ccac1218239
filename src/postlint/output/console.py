"""Rich Console factory and theme for postlint output.

Consoles render into a StringIO buffer so renderers keep returning
plain strings. In non-TTY environments (tests, pipes) Rich drops color.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

POSTLINT_THEME = Theme(
    {
        "pl.ok": "bold green",
        "pl.error": "bold red",
        "pl.warning": "bold yellow",
        "pl.op": "bold cyan",
        "pl.key": "dim",
        "pl.path": "dim",
        "pl.title": "bold",
        "pl.code": "magenta",
        "pl.date": "blue",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "pl.error",
    "warning": "pl.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=POSTLINT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    return _SEVERITY_STYLES.get(severity, "")
