"""Thin wrapper around the cmake executable."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from cmake_clangd.errors import CMakeClangdError
from cmake_clangd.presets import ResolvedConfiguration


class CMakeError(CMakeClangdError):
    """Raised when cmake is missing or exits with an error."""

    def __init__(self, message: str, output: str = ""):
        self.output = output
        super().__init__(message)


@dataclass
class CheckResult:
    name: str
    ok: bool
    detail: str = ""


def configure_args(resolved: ResolvedConfiguration) -> List[str]:
    return resolved.cmake_args()


def check_cmake(executable: str = "cmake") -> CheckResult:
    if shutil.which(executable) is None:
        return CheckResult(name=executable, ok=False, detail="not found in PATH")
    try:
        proc = subprocess.run(
            [executable, "--version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return CheckResult(name=executable, ok=False, detail="unable to run")
    first_line = next(iter(proc.stdout.strip().splitlines()), "")
    return CheckResult(name=executable, ok=True, detail=first_line)


def run_configure(
    executable: str, args: Sequence[str], cwd: Optional[Path] = None
) -> str:
    """Run ``executable`` with ``args`` and return its combined output."""
    command = [executable, *args]
    try:
        proc = subprocess.run(
            command,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=True,
        )
    except FileNotFoundError as exc:
        raise CMakeError(f"{executable} not found in PATH") from exc
    except subprocess.CalledProcessError as exc:
        raise CMakeError(
            f"{executable} exited with code {exc.returncode}", exc.output or ""
        ) from exc
    return proc.stdout
