"""Upward directory search for project and configuration markers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from cmake_clangd.errors import MarkerNotFound

PathLike = Union[str, "os.PathLike[str]"]


def _is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def locate(marker: str, start: Optional[PathLike] = None) -> Optional[Path]:
    """Walk upward from ``start`` (default: cwd) to the directory holding ``marker``.

    The start directory is made absolute without resolving symlinks, so the
    result is always ``start`` itself or one of its lexical ancestors. The walk
    ends when a directory's parent is the directory itself.
    """
    current = Path(os.path.abspath(start if start is not None else Path.cwd()))
    while True:
        if _is_readable(current / marker):
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def require(marker: str, start: Optional[PathLike] = None) -> Path:
    """Like :func:`locate` but raise :class:`MarkerNotFound` when nothing matches."""
    found = locate(marker, start)
    if found is None:
        origin = Path(os.path.abspath(start if start is not None else Path.cwd()))
        raise MarkerNotFound(marker, origin)
    return found
