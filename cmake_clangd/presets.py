"""CMake configure presets: loading, inheritance and binary directory resolution."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cmake_clangd.errors import CyclicInheritance, PresetFileError, PresetNotFound

PRESET_FILES: Tuple[str, ...] = ("CMakePresets.json", "CMakeUserPresets.json")
SOURCE_DIR_MACRO = "${sourceDir}"
PRESET_NAME_MACRO = "${presetName}"
EXPORT_COMPILE_COMMANDS_FLAG = "-DCMAKE_EXPORT_COMPILE_COMMANDS=TRUE"

_SEPARATORS = "/\\"


class Preset(BaseModel):
    """The subset of a configure preset this tool understands."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str
    hidden: bool = False
    binary_dir: Optional[str] = Field(default=None, alias="binaryDir")
    inherits: Tuple[str, ...] = ()

    @field_validator("inherits", mode="before")
    @classmethod
    def _normalize_inherits(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value


class PresetsDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    configure_presets: List[Preset] = Field(
        default_factory=list, alias="configurePresets"
    )


class PresetSet:
    """Ordered, read-only collection of presets with name lookup."""

    def __init__(self, presets: Iterable[Preset] = ()):
        self._order: Tuple[Preset, ...] = tuple(presets)
        self._by_name: Dict[str, Preset] = {}
        for preset in self._order:
            self._by_name.setdefault(preset.name, preset)

    def __iter__(self) -> Iterator[Preset]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def get(self, name: str) -> Optional[Preset]:
        return self._by_name.get(name)

    def visible(self) -> List[Preset]:
        return [preset for preset in self._order if not preset.hidden]

    def names(self) -> List[str]:
        return [preset.name for preset in self.visible()]


@dataclass(frozen=True)
class ResolvedConfiguration:
    """Inputs for one configure run of the build tool."""

    source_dir: str
    binary_dir: str
    extra_flags: Tuple[str, ...] = field(default_factory=tuple)
    preset: Optional[str] = None

    def cmake_args(self) -> List[str]:
        return [
            "-S",
            self.source_dir,
            "-B",
            self.binary_dir,
            EXPORT_COMPILE_COMMANDS_FLAG,
            *self.extra_flags,
        ]


def load_presets(
    project_root: Path, files: Sequence[str] = PRESET_FILES
) -> PresetSet:
    """Load configure presets from every existing presets file, in file order."""
    presets: List[Preset] = []
    for file_name in files:
        path = Path(project_root) / file_name
        if not path.exists():
            continue
        presets.extend(_read_presets_file(path))
    return PresetSet(presets)


def _read_presets_file(path: Path) -> List[Preset]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise PresetFileError(f"Invalid JSON in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise PresetFileError(
            f"Cannot decode presets file {path} as UTF-8: {exc.reason}"
        ) from exc
    except OSError as exc:  # pragma: no cover - file permission/path errors
        raise PresetFileError(f"Cannot read presets file {path}: {exc}") from exc
    try:
        document = PresetsDocument.model_validate(data)
    except ValidationError as exc:
        raise PresetFileError(f"Invalid presets in {path}: {exc}") from exc
    return document.configure_presets


def find_binary_dir(presets: PresetSet, name: str) -> Optional[str]:
    """Return the raw ``binaryDir`` of ``name`` or its nearest ancestor.

    Parents are explored depth-first in declaration order. A name reached again
    while still on the current path is a cycle; a name already explored
    through another branch is skipped.
    """
    preset = presets.get(name)
    if preset is None:
        raise PresetNotFound(name, presets.names())

    explored: Set[str] = set()

    def _walk(current: Preset, path: Tuple[str, ...]) -> Optional[str]:
        if current.binary_dir is not None:
            return current.binary_dir
        for parent_name in current.inherits:
            if parent_name in path:
                raise CyclicInheritance([*path, parent_name])
            if parent_name in explored:
                continue
            parent = presets.get(parent_name)
            if parent is None:
                continue
            found = _walk(parent, path + (parent_name,))
            if found is not None:
                return found
        explored.add(current.name)
        return None

    return _walk(preset, (preset.name,))


def expand_macros(value: str, project_root: str, preset_name: str) -> str:
    """Replace ``${sourceDir}`` then ``${presetName}``; other macros stay as written."""
    source_dir = str(project_root).rstrip(_SEPARATORS)
    value = value.replace(SOURCE_DIR_MACRO, source_dir)
    return value.replace(PRESET_NAME_MACRO, preset_name)


def with_trailing_separator(path: str) -> str:
    return path.rstrip(_SEPARATORS) + "/"


def resolve_binary_dir(
    presets: PresetSet,
    chosen: Optional[str],
    project_root: str,
    default_binary_dir: str,
) -> str:
    """Compute the effective binary directory for ``chosen``.

    ``chosen=None`` means no preset was selected and ``default_binary_dir`` is
    returned untouched. Otherwise the inherited ``binaryDir`` (or the default
    when none is found) is macro-expanded and given one trailing separator.
    """
    if chosen is None:
        return default_binary_dir
    raw = find_binary_dir(presets, chosen)
    if raw is None:
        raw = default_binary_dir
    return with_trailing_separator(expand_macros(raw, project_root, chosen))


def resolve(
    presets: PresetSet,
    chosen: Optional[str],
    project_root: str,
    default_binary_dir: str,
    extra_flags: Sequence[str] = (),
) -> ResolvedConfiguration:
    binary_dir = resolve_binary_dir(presets, chosen, project_root, default_binary_dir)
    return ResolvedConfiguration(
        source_dir=str(project_root),
        binary_dir=binary_dir,
        extra_flags=tuple(extra_flags),
        preset=chosen,
    )
