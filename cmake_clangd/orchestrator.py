"""Tie preset resolution, cmake and the .clangd update together."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from cmake_clangd import clangd, paths
from cmake_clangd.cmake import configure_args, run_configure
from cmake_clangd.configuration.schema import CMakeClangdConfig
from cmake_clangd.errors import CMakeClangdError, DatabaseNotConfigured
from cmake_clangd.logging import debug
from cmake_clangd.presets import (
    PresetSet,
    ResolvedConfiguration,
    load_presets,
    resolve,
    resolve_binary_dir,
    with_trailing_separator,
)


@dataclass(frozen=True)
class ConfigureOutcome:
    resolved: ResolvedConfiguration
    clangd_path: Path
    patch: clangd.PatchResult
    written: bool
    output: str = ""


class ConfigureSession:
    """State kept across configure runs within one process.

    ``last_extra_flags`` starts from ``cmake.extra_flags`` and is replaced
    after every successful configure so it can be offered as the next default.
    """

    def __init__(self, config: CMakeClangdConfig):
        self.config = config
        self.last_extra_flags: List[str] = list(config.cmake.extra_flags)

    def project_root(self, start: Optional[Path] = None) -> Path:
        return paths.require(self.config.project.marker, start)

    def presets(self, project_root: Path) -> PresetSet:
        return load_presets(project_root, self.config.project.preset_files)

    def default_binary_dir(self, project_root: Path) -> str:
        return with_trailing_separator(
            str(project_root / self.config.cmake.default_binary_dir)
        )

    def clangd_file(self, project_root: Path) -> Path:
        """Nearest .clangd at or above the project root, else one in the root."""
        name = self.config.clangd.file_name
        found = paths.locate(name, project_root)
        return (found or project_root) / name

    def binary_dir_for(
        self, project_root: Path, presets: PresetSet, name: str
    ) -> Optional[str]:
        try:
            return resolve_binary_dir(
                presets, name, str(project_root), self.default_binary_dir(project_root)
            )
        except CMakeClangdError:
            return None

    def plan(
        self,
        start: Optional[Path] = None,
        preset: Optional[str] = None,
        extra_flags: Optional[Sequence[str]] = None,
    ) -> ResolvedConfiguration:
        root = self.project_root(start)
        flags = self.last_extra_flags if extra_flags is None else extra_flags
        resolved = resolve(
            self.presets(root),
            preset,
            str(root),
            self.default_binary_dir(root),
            flags,
        )
        debug(f"preset {preset or '<none>'} -> {resolved.binary_dir}")
        return resolved

    def configure(
        self,
        start: Optional[Path] = None,
        preset: Optional[str] = None,
        extra_flags: Optional[Sequence[str]] = None,
        *,
        run: bool = True,
    ) -> ConfigureOutcome:
        """Resolve, run cmake, then point .clangd at the binary directory."""
        return self.apply(self.plan(start, preset, extra_flags), run=run)

    def apply(
        self, resolved: ResolvedConfiguration, *, run: bool = True
    ) -> ConfigureOutcome:
        """Run cmake for ``resolved`` and update .clangd.

        .clangd is left untouched when cmake fails.
        """
        root = Path(resolved.source_dir)
        output = ""
        if run:
            args = configure_args(resolved)
            debug(f"running {self.config.cmake.executable} {' '.join(args)}")
            output = run_configure(self.config.cmake.executable, args, cwd=root)

        clangd_path = self.clangd_file(root)
        existing = clangd.read_document(clangd_path)
        settings = self.config.clangd
        patch = clangd.patch_value(
            existing,
            resolved.binary_dir,
            section=settings.section,
            key=settings.key,
            indent=settings.indent_text,
        )
        written = patch.text != existing
        if written:
            clangd.write_document(clangd_path, patch.text)
        self.last_extra_flags = list(resolved.extra_flags)
        return ConfigureOutcome(
            resolved=resolved,
            clangd_path=clangd_path,
            patch=patch,
            written=written,
            output=output,
        )

    def database_location(self, start: Optional[Path] = None) -> Tuple[Path, str]:
        """Return the nearest .clangd file and the compilation database it names."""
        settings = self.config.clangd
        directory = paths.require(settings.file_name, start)
        clangd_path = directory / settings.file_name
        text = clangd.read_document(clangd_path) or ""
        value = clangd.get_value(text, section=settings.section, key=settings.key)
        if not value:
            raise DatabaseNotConfigured(clangd_path, settings.key)
        return clangd_path, value
