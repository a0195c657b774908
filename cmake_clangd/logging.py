"""Themed console shared by every cmake-clangd command."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme


# One Dark-inspired palette tuned for Rich output
PALETTE = {
    "fg": "#abb2bf",
    "fg_muted": "#5c6370",
    "green": "#98c379",
    "yellow": "#e5c07b",
    "orange": "#d19a66",
    "blue": "#61afef",
    "cyan": "#56b6c2",
    "red": "#e06c75",
}

_theme = Theme(
    {
        "muted": PALETTE["fg_muted"],
        "accent": PALETTE["orange"],
        "ok": PALETTE["green"],
        "warn": PALETTE["yellow"],
        "error": f"bold {PALETTE['red']}",
        "info": PALETTE["blue"],
        "path": PALETTE["cyan"],
        "section": f"bold {PALETTE['orange']}",
    }
)

console = Console(theme=_theme, style=PALETTE["fg"])


def status_spinner(message: str):
    """Return a Rich status spinner context manager."""
    return console.status(f"[info]{message}[/]")


def warn(message: str) -> None:
    """Print ``message`` (plain text, markup escaped) as a warning."""
    console.print(f"[warn]{escape(message)}[/]", soft_wrap=True)


def debug(message: str) -> None:
    """Print ``message`` in muted style when ``cli.debug`` is enabled."""
    from cmake_clangd.configuration import get_config

    if get_config().cli.debug:
        console.print(f"[muted]debug: {escape(message)}[/]")
