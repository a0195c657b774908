from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.markup import escape

from cmake_clangd import __version__
from cmake_clangd.cmake import CMakeError
from cmake_clangd.configuration import ConfigurationError, reload_config
from cmake_clangd.logging import console
from cmake_clangd.orchestrator import ConfigureSession

HELP_OPTION_NAMES = ["-h", "--help"]
COMMAND_CONTEXT = {"help_option_names": HELP_OPTION_NAMES}

NO_PRESET_CHOICE = "<none>"

_SESSION: Optional[ConfigureSession] = None


def get_session() -> ConfigureSession:
    """Return the session shared by every command in this process."""
    global _SESSION
    if _SESSION is None:
        _SESSION = ConfigureSession(reload_config())
    return _SESSION


def refresh_cli_context() -> None:
    """Drop the cached session so the next command reloads configuration."""
    global _SESSION
    _SESSION = None


def source_option() -> Optional[Path]:
    return typer.Option(
        None,
        "--source",
        "-s",
        help="Directory to start the project search from (default: cwd).",
        file_okay=False,
    )


def fail(exc: Exception) -> NoReturn:
    """Report ``exc`` and exit with status 1."""
    console.print(f"[error]{escape(str(exc))}[/]", soft_wrap=True)
    if isinstance(exc, CMakeError) and exc.output:
        console.print(f"[muted]{escape(exc.output.rstrip())}[/]", soft_wrap=True)
    raise typer.Exit(code=1)


def print_version() -> None:
    console.print(f"[bold]cmake-clangd[/bold] [accent]v{__version__}[/]")
