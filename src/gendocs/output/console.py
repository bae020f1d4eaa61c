"""Rich Console factory and theme for gendocs output.

Consoles render into a StringIO buffer so renderers keep the
``render_result() -> str`` contract.  Outside a terminal (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

GENDOCS_THEME = Theme(
    {
        "gd.ok": "bold green",
        "gd.error": "bold red",
        "gd.warning": "bold yellow",
        "gd.op": "bold cyan",
        "gd.key": "dim",
        "gd.token": "bold blue",
        "gd.url": "underline cyan",
        "gd.name": "bold",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=GENDOCS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
