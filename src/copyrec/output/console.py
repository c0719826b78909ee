"""Rich Console factory and theme for copyrec output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

COPYREC_THEME = Theme(
    {
        "rec.ok": "bold green",
        "rec.error": "bold red",
        "rec.warning": "bold yellow",
        "rec.op": "bold cyan",
        "rec.key": "dim",
        "rec.path": "bold",
        "rec.offset": "magenta",
        "rec.type.alphanumeric": "green",
        "rec.type.numeric": "blue",
        "rec.type.signed_numeric": "blue",
        "rec.type.decimal": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=COPYREC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(field_type: str) -> str:
    """Return the Rich style name for a field type."""
    return f"rec.type.{field_type}" if field_type else ""
