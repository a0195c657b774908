"""Errors raised while locating projects, resolving presets and reading .clangd."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class CMakeClangdError(Exception):
    """Base class for failures the CLI reports to the user."""


class MarkerNotFound(CMakeClangdError):
    """Raised when an upward search reaches the filesystem root."""

    def __init__(self, marker: str, start: Path):
        self.marker = marker
        self.start = start
        super().__init__(f"{marker} not found in {start} or any parent directory")


class PresetNotFound(CMakeClangdError):
    """Raised when a preset name does not exist in the loaded presets."""

    def __init__(self, name: str, available: Sequence[str] = ()):
        self.name = name
        self.available = list(available)
        message = f"unknown preset: {name}"
        if self.available:
            message += f". available: {', '.join(self.available)}"
        super().__init__(message)


class CyclicInheritance(CMakeClangdError):
    """Raised when preset inheritance loops back onto itself."""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(f"cyclic preset inheritance: {' -> '.join(self.chain)}")


class PresetFileError(CMakeClangdError):
    """Raised when a presets file cannot be read or has an unexpected shape."""


class DatabaseNotConfigured(CMakeClangdError):
    """Raised when a .clangd file has no compilation database entry."""

    def __init__(self, path: Path, key: str):
        self.path = path
        self.key = key
        super().__init__(f"{key} is not set in {path}")


class ClangdFileError(CMakeClangdError):
    """Raised when a .clangd file cannot be read, decoded or replaced."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot access {path}: {reason}")


class InvalidValue(CMakeClangdError, ValueError):
    """Raised when a value cannot be stored on a single .clangd line."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"cannot store {value!r} in .clangd: values must be one line without "
            "surrounding whitespace or a ' #' comment marker"
        )
