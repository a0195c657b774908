"""Command modules registered on the root Typer app."""

from __future__ import annotations

import typer

from . import configure, database, doctor, presets, version
from ..type_defs import CommandMap


def register_all(app: typer.Typer) -> CommandMap:
    commands: CommandMap = {}
    for module in (configure, database, doctor, presets, version):
        commands.update(module.register(app))
    return commands
