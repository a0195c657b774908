"""Doctor command for checking cmake and the project layout without changes."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from cmake_clangd import paths
from cmake_clangd.cmake import CheckResult, check_cmake
from cmake_clangd.configuration import ConfigurationError
from cmake_clangd.errors import CMakeClangdError
from cmake_clangd.logging import console

from ..common import COMMAND_CONTEXT, fail, get_session, source_option
from ..type_defs import CommandMap


def _show_checks(checks: list[CheckResult]) -> None:
    table = Table(title="Environment", show_header=True, header_style="bold cyan")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Details")
    for check in checks:
        status = "[ok]ok" if check.ok else "[error]missing"
        table.add_row(check.name, status, escape(check.detail))
    console.print(table)


def register(app: typer.Typer) -> CommandMap:
    @app.command(context_settings=COMMAND_CONTEXT)
    def doctor(source: Optional[Path] = source_option()) -> None:
        """Check cmake, the project root, presets and .clangd without writing."""
        try:
            session = get_session()
            config = session.config
            checks = [check_cmake(config.cmake.executable)]
            root = paths.locate(config.project.marker, source)
            checks.append(
                CheckResult(
                    name=config.project.marker,
                    ok=root is not None,
                    detail=str(root) if root else "not found",
                )
            )
            if root is not None:
                checks.append(
                    CheckResult(
                        name="presets",
                        ok=True,
                        detail=f"{len(session.presets(root))} configure preset(s)",
                    )
                )
                clangd_path = session.clangd_file(root)
                checks.append(
                    CheckResult(
                        name=config.clangd.file_name,
                        ok=True,
                        detail=str(clangd_path)
                        if clangd_path.exists()
                        else f"{clangd_path} (will be created)",
                    )
                )
        except (CMakeClangdError, ConfigurationError) as exc:
            fail(exc)

        _show_checks(checks)
        missing = [check.name for check in checks if not check.ok]
        if missing:
            console.print(f"[error]doctor found problems: {', '.join(missing)}[/]")
            raise typer.Exit(code=1)
        console.print("[ok]doctor complete. ready to configure.[/]")

    return {"doctor": doctor}
