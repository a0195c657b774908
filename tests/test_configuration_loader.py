from __future__ import annotations

from copy import deepcopy

import pytest
from pydantic import ValidationError

from cmake_clangd.configuration import loader as loader_module
from cmake_clangd.configuration.defaults import DEFAULT_CONFIG_DICT
from cmake_clangd.configuration.errors import ConfigurationError
from cmake_clangd.configuration.schema import ClangdConfig, CMakeClangdConfig


def test_defaults_validate():
    config = CMakeClangdConfig.from_dict(deepcopy(DEFAULT_CONFIG_DICT))
    assert config.cmake.executable == "cmake"
    assert config.project.marker == "CMakeLists.txt"
    assert config.clangd.indent_text == "    "


def test_no_config_file_uses_defaults():
    assert loader_module.locate_config_file() is None
    assert loader_module.load_config().cmake.default_binary_dir == "build"


def test_env_override_must_exist(tmp_path, monkeypatch):
    monkeypatch.setenv(loader_module.CONFIG_ENV, str(tmp_path / "missing.toml"))
    with pytest.raises(ConfigurationError, match="missing.toml"):
        loader_module.locate_config_file()


def test_env_override_is_merged_over_defaults(tmp_path, monkeypatch):
    config_path = tmp_path / "custom.toml"
    config_path.write_text(
        '[cmake]\nexecutable = "cmake3"\n\n[clangd]\nindent = 2\n', encoding="utf-8"
    )
    monkeypatch.setenv(loader_module.CONFIG_ENV, str(config_path))

    config = loader_module.reload_config()

    assert config.cmake.executable == "cmake3"
    assert config.cmake.default_binary_dir == "build"
    assert config.clangd.indent_text == "  "


def test_project_config_found_from_nested_cwd(tmp_path, monkeypatch):
    project = tmp_path / "proj"
    nested = project / "src"
    nested.mkdir(parents=True)
    (project / loader_module.PROJECT_CONFIG_NAME).write_text(
        '[project]\nmarker = "CMakePresets.json"\n', encoding="utf-8"
    )
    monkeypatch.chdir(nested)

    assert loader_module.locate_config_file() == (
        project / loader_module.PROJECT_CONFIG_NAME
    ).resolve()
    assert loader_module.load_config().project.marker == "CMakePresets.json"


def test_project_config_preferred_over_xdg(tmp_path, monkeypatch):
    xdg = tmp_path / "xdg"
    xdg_config = xdg / "cmake-clangd" / "config.toml"
    xdg_config.parent.mkdir(parents=True)
    xdg_config.write_text("", encoding="utf-8")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))

    assert loader_module.locate_config_file() == xdg_config.resolve()

    (tmp_path / loader_module.PROJECT_CONFIG_NAME).write_text("", encoding="utf-8")
    loader_module.locate_config_file.cache_clear()
    assert loader_module.locate_config_file() == (
        tmp_path / loader_module.PROJECT_CONFIG_NAME
    ).resolve()


def test_invalid_toml_is_reported(tmp_path, monkeypatch):
    config_path = tmp_path / "broken.toml"
    config_path.write_text("[cmake\n", encoding="utf-8")
    monkeypatch.setenv(loader_module.CONFIG_ENV, str(config_path))

    with pytest.raises(ConfigurationError, match="Invalid TOML"):
        loader_module.load_config()


def test_undecodable_config_is_reported(tmp_path, monkeypatch):
    config_path = tmp_path / "latin1.toml"
    config_path.write_bytes(b"[cmake]\nexecutable = \"cm\xe4ke\"\n")
    monkeypatch.setenv(loader_module.CONFIG_ENV, str(config_path))

    with pytest.raises(ConfigurationError, match="as UTF-8"):
        loader_module.load_config()


def test_unknown_top_level_section_is_rejected():
    with pytest.raises(ValidationError):
        CMakeClangdConfig.from_dict({"meta": {"version": "1.0"}})


def test_unknown_keys_are_rejected(tmp_path, monkeypatch):
    config_path = tmp_path / "typo.toml"
    config_path.write_text("[clangd]\nsectoin = 'X'\n", encoding="utf-8")
    monkeypatch.setenv(loader_module.CONFIG_ENV, str(config_path))

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        loader_module.load_config()


def test_clangd_indent_bounds():
    ClangdConfig(indent=1)
    ClangdConfig(indent=8)

    with pytest.raises(ValidationError):
        ClangdConfig(indent=0)

    with pytest.raises(ValidationError):
        ClangdConfig(indent=9)


def test_merge_configs_is_deep_and_non_destructive():
    base = {"cmake": {"executable": "cmake", "extra_flags": []}}
    merged = loader_module.merge_configs(base, {"cmake": {"extra_flags": ["-GNinja"]}})
    assert merged == {"cmake": {"executable": "cmake", "extra_flags": ["-GNinja"]}}
    assert base["cmake"]["extra_flags"] == []
