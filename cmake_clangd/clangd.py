"""Read and update the compilation database entry of a .clangd file.

Only one ``key: value`` line under one top-level section is ever touched, so
the file is handled as plain lines instead of being parsed as YAML. A section
starts at an unindented ``Section:`` line (a trailing ``# comment`` is allowed)
and runs until the next unindented, non-comment line (another section or a
``---`` document separator). Inside it the key line is the first indented line
beginning with ``key:``. A trailing comment on the key line is not part of the
value and survives a rewrite.
"""

from __future__ import annotations

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from cmake_clangd.errors import ClangdFileError, InvalidValue

CLANGD_FILE = ".clangd"
SECTION = "CompileFlags"
KEY = "CompilationDatabase"
DEFAULT_INDENT = "    "

_NEW_FILE_MODE = 0o644

# YAML only starts a comment at '#' preceded by whitespace.
_COMMENT = re.compile(r"\s#")


@dataclass(frozen=True)
class PatchResult:
    """Outcome of :func:`patch_value`.

    ``action`` is one of ``created``, ``replaced``, ``inserted`` or
    ``appended``. ``recovered`` is set when the section header was the last
    line of the file without a line break and one had to be added.
    """

    text: str
    action: str
    recovered: bool = False


@dataclass(frozen=True)
class _Section:
    header: int
    key: Optional[int]
    indent: Optional[str]


def _lines(text: str) -> List[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith("\n"):
        return "\n"
    return ""


def _content(line: str) -> str:
    return line[: len(line) - len(_terminator(line))]


def _strip_comment(content: str) -> str:
    match = _COMMENT.search(content)
    return content[: match.start()] if match else content


def _newline(text: str) -> str:
    """The line terminator most of ``text`` uses; ``\\n`` on a tie."""
    crlf = text.count("\r\n")
    lf = text.count("\n") - crlf
    return "\r\n" if crlf > lf else "\n"


def _scan(lines: List[str], section: str, key: str) -> List[_Section]:
    header_text = f"{section}:"
    key_prefix = f"{key}:"
    sections: List[_Section] = []
    index = 0
    while index < len(lines):
        if _strip_comment(_content(lines[index])).rstrip() != header_text:
            index += 1
            continue
        header = index
        key_index: Optional[int] = None
        indent: Optional[str] = None
        index += 1
        while index < len(lines):
            content = _content(lines[index])
            stripped = content.lstrip()
            if not stripped or stripped.startswith("#"):
                index += 1
                continue
            if stripped == content:
                break
            if indent is None:
                indent = content[: len(content) - len(stripped)]
            if key_index is None and stripped.startswith(key_prefix):
                key_index = index
            index += 1
        sections.append(_Section(header=header, key=key_index, indent=indent))
    return sections


def _value_span(content: str, key: str) -> Tuple[int, int, int]:
    """Return (end of ``key:``, value start, value end) offsets within ``content``."""
    colon_end = content.index(f"{key}:") + len(key) + 1
    value_start = colon_end
    while value_start < len(content) and content[value_start] in " \t":
        value_start += 1
    rest = content[value_start:]
    if rest.startswith("#"):
        return colon_end, value_start, value_start
    match = _COMMENT.search(rest)
    value = rest[: match.start()] if match else rest
    return colon_end, value_start, value_start + len(value.rstrip())


def _replace_value(line: str, key: str, value: str) -> str:
    content = _content(line)
    colon_end, value_start, value_end = _value_span(content, key)
    separator = content[colon_end:value_start] or " "
    tail = content[value_end:]
    if tail and not tail[0].isspace():
        tail = " " + tail
    return f"{content[:colon_end]}{separator}{value}{tail}{_terminator(line)}"


def _check_value(value: str) -> None:
    if (
        value != value.strip()
        or "\n" in value
        or "\r" in value
        or value.startswith("#")
        or _COMMENT.search(value)
    ):
        raise InvalidValue(value)


def patch_value(
    text: Optional[str],
    value: str,
    *,
    section: str = SECTION,
    key: str = KEY,
    indent: str = DEFAULT_INDENT,
) -> PatchResult:
    """Return ``text`` with ``section.key`` set to ``value``.

    ``text=None`` stands for a file that does not exist yet. Lines other than
    the one holding the key (or the one inserted for it) are returned as-is.
    New lines use the line terminator the document mostly uses.

    Raises :class:`InvalidValue` for values :func:`get_value` could not read
    back unchanged.
    """
    _check_value(value)
    key_line = f"{key}: {value}"
    if text is None or not text.strip():
        return PatchResult(f"{section}:\n{indent}{key_line}", "created")

    lines = _lines(text)
    newline = _newline(text)
    sections = _scan(lines, section, key)
    for found in sections:
        if found.key is not None:
            lines[found.key] = _replace_value(lines[found.key], key, value)
            return PatchResult("".join(lines), "replaced")

    if sections:
        first = sections[0]
        header = lines[first.header]
        terminator = _terminator(header)
        recovered = not terminator
        if recovered:
            lines[first.header] = header + newline
        child = f"{first.indent or indent}{key_line}{terminator}"
        lines.insert(first.header + 1, child)
        return PatchResult("".join(lines), "inserted", recovered)

    prefix = text if text.endswith("\n") else text + newline
    return PatchResult(
        f"{prefix}{section}:{newline}{indent}{key_line}{newline}", "appended"
    )


def set_value(
    text: Optional[str],
    value: str,
    *,
    section: str = SECTION,
    key: str = KEY,
    indent: str = DEFAULT_INDENT,
) -> str:
    return patch_value(text, value, section=section, key=key, indent=indent).text


def get_value(text: str, *, section: str = SECTION, key: str = KEY) -> Optional[str]:
    """Return the value stored under ``section.key`` or ``None`` when absent."""
    lines = _lines(text)
    for found in _scan(lines, section, key):
        if found.key is not None:
            content = _content(lines[found.key])
            _, value_start, value_end = _value_span(content, key)
            return content[value_start:value_end]
    return None


def read_document(path: Path) -> Optional[str]:
    """Read a .clangd file, returning ``None`` if it does not exist."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except FileNotFoundError:
        return None
    except UnicodeDecodeError as exc:
        raise ClangdFileError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise ClangdFileError(path, exc.strerror or str(exc)) from exc


def write_document(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` without exposing a partially written file."""
    path = Path(path)
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as exc:
        raise ClangdFileError(path, exc.strerror or str(exc)) from exc
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        mode = path.stat().st_mode if path.exists() else _NEW_FILE_MODE
        os.chmod(tmp_path, mode & 0o7777)
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise ClangdFileError(path, exc.strerror or str(exc)) from exc
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
