"""Errors raised while locating, reading or validating the config TOML."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when the cmake-clangd config file is missing, unreadable or invalid."""
