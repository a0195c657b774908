"""Public interface for the cmake-clangd configuration system."""

from __future__ import annotations

from .errors import ConfigurationError
from .loader import (
    get_config,
    load_config,
    locate_config_file,
    merge_configs,
    reload_config,
)
from .schema import CMakeClangdConfig

__all__ = [
    "CMakeClangdConfig",
    "ConfigurationError",
    "get_config",
    "load_config",
    "locate_config_file",
    "merge_configs",
    "reload_config",
]
