"""Configure command: resolve a preset, run cmake and update .clangd."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape

from cmake_clangd import ui
from cmake_clangd.configuration import ConfigurationError
from cmake_clangd.errors import CMakeClangdError
from cmake_clangd.logging import console, status_spinner, warn
from cmake_clangd.orchestrator import ConfigureSession

from ..common import COMMAND_CONTEXT, NO_PRESET_CHOICE, fail, get_session, source_option
from ..type_defs import CommandMap


def _prompt_preset(session: ConfigureSession, start: Optional[Path]) -> Optional[str]:
    root = session.project_root(start)
    names = session.presets(root).names()
    if not names:
        return None
    choice = typer.prompt(
        "Preset",
        default=NO_PRESET_CHOICE,
        type=click.Choice([*names, NO_PRESET_CHOICE]),
    )
    return None if choice == NO_PRESET_CHOICE else choice


def _prompt_flags(session: ConfigureSession) -> List[str]:
    answer = typer.prompt(
        "Extra cmake flags",
        default=shlex.join(session.last_extra_flags),
        show_default=bool(session.last_extra_flags),
    )
    return shlex.split(answer)


def register(app: typer.Typer) -> CommandMap:
    @app.command(context_settings=COMMAND_CONTEXT)
    def configure(
        preset: Optional[str] = typer.Option(
            None, "--preset", "-p", help="Configure preset to build with."
        ),
        no_preset: bool = typer.Option(
            False, "--no-preset", help="Ignore presets and use the default build dir."
        ),
        flag: Optional[List[str]] = typer.Option(
            None,
            "--flag",
            "-f",
            help="Extra argument passed to cmake (repeatable, e.g. --flag=-DFOO=ON).",
        ),
        source: Optional[Path] = source_option(),
        no_run: bool = typer.Option(
            False, "--no-run", help="Only update .clangd; do not invoke cmake."
        ),
        yes: bool = typer.Option(
            False, "--yes", "-y", help="Do not prompt; use given or remembered values."
        ),
    ) -> None:
        """Run cmake for a preset and point .clangd at its compilation database."""
        if preset and no_preset:
            raise typer.BadParameter("--preset and --no-preset are mutually exclusive")
        try:
            session = get_session()
            interactive = not (yes or session.config.cli.auto_confirm)
            chosen = preset
            if chosen is None and not no_preset and interactive:
                chosen = _prompt_preset(session, source)
            extra_flags: Optional[List[str]] = list(flag) if flag else None
            if extra_flags is None and interactive:
                extra_flags = _prompt_flags(session)

            resolved = session.plan(source, chosen, extra_flags)
            console.print(
                f"[info]preset:[/] {escape(resolved.preset or NO_PRESET_CHOICE)}  "
                f"[info]binary dir:[/] [path]{escape(resolved.binary_dir)}[/]",
                soft_wrap=True,
            )
            with status_spinner(
                "Updating .clangd" if no_run else "Running cmake"
            ):
                outcome = session.apply(resolved, run=not no_run)
        except (CMakeClangdError, ConfigurationError) as exc:
            fail(exc)

        if outcome.patch.recovered:
            warn(
                f"{outcome.clangd_path} ended on a section header; "
                "added a line break before the new entry"
            )
        if outcome.written:
            console.print(
                f"[ok]{outcome.patch.action} {session.config.clangd.key} in "
                f"{escape(str(outcome.clangd_path))}[/]",
                soft_wrap=True,
            )
        else:
            console.print(
                f"[muted]{escape(str(outcome.clangd_path))} already up to date[/]",
                soft_wrap=True,
            )
        ui.success_panel("configure complete.")

    return {"configure": configure}
