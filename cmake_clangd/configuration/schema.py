"""Pydantic models describing the cmake-clangd configuration file."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cmake_clangd.clangd import CLANGD_FILE, DEFAULT_INDENT, KEY, SECTION
from cmake_clangd.presets import PRESET_FILES


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CMakeConfig(_Section):
    executable: str = "cmake"
    default_binary_dir: str = "build"
    extra_flags: List[str] = Field(default_factory=list)

    @field_validator("executable", "default_binary_dir")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class ProjectConfig(_Section):
    marker: str = "CMakeLists.txt"
    preset_files: List[str] = Field(default_factory=lambda: list(PRESET_FILES))


class ClangdConfig(_Section):
    file_name: str = CLANGD_FILE
    section: str = SECTION
    key: str = KEY
    indent: int = Field(default=len(DEFAULT_INDENT), ge=1, le=8)

    @property
    def indent_text(self) -> str:
        return " " * self.indent


class CLIConfig(_Section):
    auto_confirm: bool = False
    debug: bool = False


class CMakeClangdConfig(_Section):
    cmake: CMakeConfig = Field(default_factory=CMakeConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    clangd: ClangdConfig = Field(default_factory=ClangdConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CMakeClangdConfig":
        return cls.model_validate(data)
