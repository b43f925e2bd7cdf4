"""
Path helpers for Daemon Config Manager.

Resolves the tool's own settings folder and the platform-specific default
locations of the daemon configuration files it edits.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Optional


HOME_FOLDER_ENV_VAR = "DCM_HOME"
SETTINGS_FILE_NAMES = ("config.yaml", "config.yml", "config.json")


def get_app_folder(override: Optional[str | Path] = None) -> Path:
    """
    Resolve the DCM settings folder.

    Priority:
    1. Explicit override argument
    2. DCM_HOME environment variable
    3. <home>/.config/dcm
    """
    candidate: str | Path | None = override
    if candidate is None:
        candidate = os.environ.get(HOME_FOLDER_ENV_VAR)
    if candidate is None:
        candidate = Path.home() / ".config" / "dcm"
    return Path(candidate).expanduser().resolve()


def find_settings_file(app_folder: Optional[str | Path] = None) -> Optional[Path]:
    """Return the first existing settings file in the DCM folder, if any."""
    root = get_app_folder(app_folder)
    for name in SETTINGS_FILE_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _platform_key(platform: Optional[str]) -> str:
    value = platform or sys.platform
    if value.startswith("linux"):
        return "linux"
    if value == "darwin":
        return "macos"
    if value in {"win32", "cygwin"}:
        return "windows"
    return value


def _home(env: Mapping[str, str]) -> Optional[Path]:
    home = env.get("HOME")
    return Path(home) if home else None


def get_bitcoin_conf_path(
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """
    Default ``bitcoin.conf`` location for the platform.

    Returns ``None`` on platforms without a known location or when the
    required environment variable is unset.
    """
    environ = os.environ if env is None else env
    key = _platform_key(platform)
    if key == "linux":
        home = _home(environ)
        return home / ".bitcoin" / "bitcoin.conf" if home else None
    if key == "macos":
        home = _home(environ)
        if home is None:
            return None
        return home / "Library" / "Application Support" / "Bitcoin" / "bitcoin.conf"
    if key == "windows":
        appdata = environ.get("APPDATA")
        return Path(appdata) / "Bitcoin" / "bitcoin.conf" if appdata else None
    return None


def get_p2pool_conf_path(
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """Default ``p2pool.conf`` location for the platform."""
    environ = os.environ if env is None else env
    key = _platform_key(platform)
    if key in {"linux", "macos"}:
        home = _home(environ)
        return home / ".p2pool" / "p2pool.conf" if home else None
    if key == "windows":
        appdata = environ.get("APPDATA")
        return Path(appdata) / "P2Pool" / "p2pool.conf" if appdata else None
    return None
