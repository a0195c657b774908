from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cmake_clangd.cli.common import refresh_cli_context
from cmake_clangd.configuration import loader as loader_module


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, tmp_path_factory, monkeypatch):
    """Keep user and project configuration files out of every test."""

    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.delenv(loader_module.CONFIG_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(loader_module, "_CONFIG_INSTANCE", None)

    loader_module.locate_config_file.cache_clear()
    refresh_cli_context()
    yield
    loader_module.locate_config_file.cache_clear()
    refresh_cli_context()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def write_presets():
    def _write(root: Path, presets: list, name: str = "CMakePresets.json") -> Path:
        path = root / name
        path.write_text(
            json.dumps({"version": 3, "configurePresets": presets}, indent=2),
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def project(tmp_path: Path, write_presets) -> Path:
    """A CMake project with a small base/dev/release preset hierarchy."""
    root = tmp_path / "proj"
    root.mkdir()
    (root / "CMakeLists.txt").write_text("project(demo)\n", encoding="utf-8")
    write_presets(
        root,
        [
            {
                "name": "base",
                "hidden": True,
                "binaryDir": "${sourceDir}/out/${presetName}",
            },
            {"name": "dev", "inherits": "base"},
            {"name": "release", "inherits": "base", "binaryDir": "${sourceDir}/rel"},
        ],
    )
    return root
