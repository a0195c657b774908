"""Configuration loading, merging, and caching."""

from __future__ import annotations

import copy
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:  # pragma: no cover
    import tomli as tomllib

from cmake_clangd.paths import locate

from .defaults import DEFAULT_CONFIG_DICT
from .errors import ConfigurationError
from .schema import CMakeClangdConfig

CONFIG_ENV = "CMAKE_CLANGD_CONFIG"
PROJECT_CONFIG_NAME = ".cmake-clangd.toml"
APP_DIR_NAME = "cmake-clangd"


@lru_cache(maxsize=1)
def locate_config_file() -> Optional[Path]:
    """Locate the configuration file using the documented priority order."""
    env_override = os.environ.get(CONFIG_ENV)
    if env_override:
        path = Path(env_override).expanduser()
        if not path.exists():
            raise ConfigurationError(f"{CONFIG_ENV} points to missing file: {path}")
        return path.resolve()

    project_dir = locate(PROJECT_CONFIG_NAME)
    if project_dir:
        return (project_dir / PROJECT_CONFIG_NAME).resolve()

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_home:
        candidate = Path(xdg_home).expanduser() / APP_DIR_NAME / "config.toml"
        if candidate.exists():
            return candidate.resolve()

    candidate = Path.home() / ".config" / APP_DIR_NAME / "config.toml"
    if candidate.exists():
        return candidate.resolve()

    return None


def load_toml(path: Path) -> Dict[str, Any]:
    """Load a TOML file with helpful error reporting."""
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigurationError(
            f"Cannot decode config file {path} as UTF-8: {exc.reason}"
        ) from exc
    except OSError as exc:  # pragma: no cover - file permission/path errors
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge dictionaries, returning a new dict."""
    result: Dict[str, Any] = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def load_config() -> CMakeClangdConfig:
    """Load and validate the effective configuration."""
    config_data = copy.deepcopy(DEFAULT_CONFIG_DICT)
    if config_path := locate_config_file():
        user_config = load_toml(config_path)
        config_data = merge_configs(config_data, user_config)
    try:
        return CMakeClangdConfig.from_dict(config_data)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


_CONFIG_INSTANCE: Optional[CMakeClangdConfig] = None


def get_config() -> CMakeClangdConfig:
    """Get the cached configuration object."""
    global _CONFIG_INSTANCE
    if _CONFIG_INSTANCE is None:
        _CONFIG_INSTANCE = load_config()
    return _CONFIG_INSTANCE


def reload_config() -> CMakeClangdConfig:
    """Force reload configuration from disk."""
    global _CONFIG_INSTANCE
    locate_config_file.cache_clear()
    _CONFIG_INSTANCE = load_config()
    return _CONFIG_INSTANCE
