"""Database command for reporting the location stored in .clangd."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from cmake_clangd.configuration import ConfigurationError
from cmake_clangd.errors import CMakeClangdError
from cmake_clangd.logging import console

from ..common import COMMAND_CONTEXT, fail, get_session, source_option
from ..type_defs import CommandMap


def register(app: typer.Typer) -> CommandMap:
    @app.command(context_settings=COMMAND_CONTEXT)
    def database(
        source: Optional[Path] = source_option(),
        quiet: bool = typer.Option(
            False, "--quiet", "-q", help="Print only the database location."
        ),
    ) -> None:
        """Show the compilation database location configured in .clangd."""
        try:
            clangd_path, value = get_session().database_location(source)
        except (CMakeClangdError, ConfigurationError) as exc:
            fail(exc)
        if quiet:
            console.print(value, markup=False, highlight=False, soft_wrap=True)
            return
        console.print(
            f"[info]{escape(str(clangd_path))}[/] -> [path]{escape(value)}[/]",
            soft_wrap=True,
        )

    return {"database": database}
