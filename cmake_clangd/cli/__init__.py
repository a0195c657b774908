"""Typer application for the cmake-clangd command line."""

from __future__ import annotations

import sys

import typer

from cmake_clangd.errors import CMakeClangdError
from cmake_clangd.logging import console

from .commands import register_all
from .common import COMMAND_CONTEXT, print_version
from .help import show_root_help

app = typer.Typer(
    help="Point clangd at the compilation database of a CMake preset build.",
    context_settings=COMMAND_CONTEXT,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Show CLI version and exit.",
        is_eager=True,
    ),
) -> None:
    if version:
        print_version()
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        show_root_help(ctx)


COMMANDS = register_all(app)


def main() -> None:
    try:
        app()
    except CMakeClangdError as exc:
        console.print(f"[error]{exc}[/]")
        sys.exit(1)


if __name__ == "__main__":
    main()
