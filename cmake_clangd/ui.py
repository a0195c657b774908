"""UI utilities for rich console output."""

from __future__ import annotations

from typing import Callable, Optional

from rich.panel import Panel
from rich.table import Table

from cmake_clangd.logging import console
from cmake_clangd.presets import PresetSet


def success_panel(message: str) -> None:
    """Display a success message in a green panel."""
    console.print(Panel.fit(f"[ok]{message}[/]", border_style="green"))


def show_presets(
    presets: PresetSet, binary_dir_for: Callable[[str], Optional[str]]
) -> None:
    """Display presets in declaration order.

    ``binary_dir_for`` returns the resolved binary directory for a preset name,
    or ``None`` when it cannot be resolved.
    """
    table = Table(title="Configure presets", show_header=True, header_style="bold cyan")
    table.add_column("Preset")
    table.add_column("Hidden")
    table.add_column("Inherits")
    table.add_column("Binary dir")
    for preset in presets:
        resolved = binary_dir_for(preset.name)
        table.add_row(
            preset.name,
            "[muted]yes[/]" if preset.hidden else "no",
            ", ".join(preset.inherits) or "-",
            f"[path]{resolved}[/]" if resolved else "[warn]unresolved[/]",
        )
    console.print(table)
