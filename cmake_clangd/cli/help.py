"""Root help rendering with a command table and usage examples."""

from __future__ import annotations

import typer
from rich.table import Table

from cmake_clangd import __description__
from cmake_clangd.logging import PALETTE, console

HELP_EXAMPLES = [
    ("cmake-clangd configure", "Pick a preset, run cmake and update .clangd."),
    ("cmake-clangd configure -p dev -y", "Configure the dev preset without prompts."),
    ("cmake-clangd presets", "List presets and the directories they build into."),
    ("cmake-clangd database", "Show where .clangd expects compile_commands.json."),
]


def _grid() -> Table:
    table = Table.grid(padding=(0, 3))
    table.add_column(style=f"bold {PALETTE['green']}", no_wrap=True)
    table.add_column(style=PALETTE["fg"])
    return table


def build_command_table(ctx: typer.Context) -> Table:
    table = _grid()
    group = ctx.command
    for name in group.list_commands(ctx):
        command = group.get_command(ctx, name)
        if not command or command.hidden:
            continue
        description = (command.help or command.short_help or "").strip()
        table.add_row(name, description.splitlines()[0] if description else "")
    return table


def build_examples_table() -> Table:
    table = _grid()
    for command, description in HELP_EXAMPLES:
        table.add_row(command, description)
    return table


def show_root_help(ctx: typer.Context) -> None:
    console.print(__description__)
    console.print()
    console.print("[section]Usage[/section]")
    console.print("  cmake-clangd [OPTIONS] COMMAND [ARGS]...\n")
    console.print("[section]Commands[/section]")
    console.print(build_command_table(ctx))
    console.print()
    console.print("[section]Examples[/section]")
    console.print(build_examples_table())
