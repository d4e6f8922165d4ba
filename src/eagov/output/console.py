"""Rich Console factory and theme for eagov output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

EAGOV_THEME = Theme(
    {
        "ea.ok": "bold green",
        "ea.error": "bold red",
        "ea.warning": "bold yellow",
        "ea.op": "bold cyan",
        "ea.key": "dim",
        "ea.rule": "bold blue",
        "ea.role": "bold magenta",
        "ea.evidence": "default",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "ea.error",
    "warning": "ea.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=EAGOV_THEME,
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
