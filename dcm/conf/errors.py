"""Errors raised while reading or writing daemon configuration files."""

from __future__ import annotations

from pathlib import Path


class ConfigError(RuntimeError):
    """Base error for a failed config file operation."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class ConfigReadError(ConfigError):
    """An existing config file could not be read."""


class ConfigWriteError(ConfigError):
    """A config file could not be written."""
