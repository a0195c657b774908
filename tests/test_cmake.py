"""Tests for the cmake subprocess wrapper."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from cmake_clangd.cmake import CMakeError, check_cmake, configure_args, run_configure
from cmake_clangd.presets import ResolvedConfiguration


def test_configure_args_exports_compile_commands():
    resolved = ResolvedConfiguration("/src", "/src/build/", ("-GNinja",))
    assert configure_args(resolved) == [
        "-S",
        "/src",
        "-B",
        "/src/build/",
        "-DCMAKE_EXPORT_COMPILE_COMMANDS=TRUE",
        "-GNinja",
    ]


@patch("cmake_clangd.cmake.subprocess.run")
def test_run_configure_returns_output(mock_run, tmp_path):
    mock_run.return_value = MagicMock(stdout="-- Configuring done\n")

    output = run_configure("cmake", ["-S", "."], cwd=tmp_path)

    assert output == "-- Configuring done\n"
    args, kwargs = mock_run.call_args
    assert args[0] == ["cmake", "-S", "."]
    assert kwargs["cwd"] == tmp_path
    assert kwargs["check"] is True


@patch("cmake_clangd.cmake.subprocess.run")
def test_run_configure_failure_keeps_output(mock_run):
    mock_run.side_effect = subprocess.CalledProcessError(
        1, ["cmake"], output="CMake Error: bad generator"
    )

    with pytest.raises(CMakeError, match="exited with code 1") as excinfo:
        run_configure("cmake", [])

    assert "bad generator" in excinfo.value.output


@patch("cmake_clangd.cmake.subprocess.run", side_effect=FileNotFoundError)
def test_run_configure_missing_executable(mock_run):
    with pytest.raises(CMakeError, match="cmake3 not found in PATH"):
        run_configure("cmake3", [])


def test_check_cmake_not_in_path(monkeypatch):
    monkeypatch.setattr("shutil.which", lambda cmd: None)
    result = check_cmake("cmake")
    assert not result.ok
    assert result.detail == "not found in PATH"


@patch("cmake_clangd.cmake.subprocess.run")
def test_check_cmake_reports_version(mock_run, monkeypatch):
    monkeypatch.setattr("shutil.which", lambda cmd: f"/usr/bin/{cmd}")
    mock_run.return_value = MagicMock(stdout="cmake version 3.28.1\n\nCMake suite\n")

    result = check_cmake()

    assert result.ok
    assert result.detail == "cmake version 3.28.1"
