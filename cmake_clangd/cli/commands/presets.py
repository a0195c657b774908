"""Presets command listing configure presets and their binary directories."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from cmake_clangd import ui
from cmake_clangd.configuration import ConfigurationError
from cmake_clangd.errors import CMakeClangdError
from cmake_clangd.logging import warn

from ..common import COMMAND_CONTEXT, fail, get_session, source_option
from ..type_defs import CommandMap


def register(app: typer.Typer) -> CommandMap:
    @app.command(context_settings=COMMAND_CONTEXT)
    def presets(source: Optional[Path] = source_option()) -> None:
        """List configure presets in declaration order."""
        try:
            session = get_session()
            root = session.project_root(source)
            preset_set = session.presets(root)
        except (CMakeClangdError, ConfigurationError) as exc:
            fail(exc)
        if not len(preset_set):
            warn(f"no configure presets found in {root}")
            return
        ui.show_presets(
            preset_set, lambda name: session.binary_dir_for(root, preset_set, name)
        )

    return {"presets": presets}
