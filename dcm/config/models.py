"""
Settings model for Daemon Config Manager.

These are the tool's own settings (where to start browsing, which role to
open, logging), not the daemon files it edits.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dcm.conf.roles import ROLE_NAMES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DCMConfig:
    """Top-level DCM settings."""

    start_dir: Optional[Path] = None
    """Directory the file explorer opens in when a role has no default path."""

    default_role: str = "bitcoin"
    """Role screen shown when the TUI starts on a config screen."""

    bitcoin_conf: Optional[Path] = None
    """Override for the default bitcoin.conf location."""

    p2pool_conf: Optional[Path] = None
    """Override for the default p2pool.conf location."""

    log_level: str = "INFO"
    """Log level used when no CLI flag is given."""

    log_file: Optional[Path] = None
    """Log file; the TUI never logs to the terminal."""

    config_path: Optional[Path] = None
    """Settings file this config was loaded from, if any."""

    def __post_init__(self) -> None:
        self.start_dir = _as_path(self.start_dir)
        self.bitcoin_conf = _as_path(self.bitcoin_conf)
        self.p2pool_conf = _as_path(self.p2pool_conf)
        self.log_file = _as_path(self.log_file)
        self.default_role = str(self.default_role or "bitcoin").strip().lower()
        self.log_level = str(self.log_level or "INFO").strip().upper()

    def validate(self) -> None:
        """Raise ``ValueError`` for settings that cannot be used."""
        if self.default_role not in ROLE_NAMES:
            raise ValueError(
                f"default_role must be one of {', '.join(ROLE_NAMES)}, got {self.default_role!r}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    def role_path_override(self, role: str) -> Optional[Path]:
        """Configured default path for ``role``, if one is set."""
        if role == "bitcoin":
            return self.bitcoin_conf
        if role == "p2pool":
            return self.p2pool_conf
        return None


def _as_path(value: Optional[str | Path]) -> Optional[Path]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return Path(text).expanduser().resolve()
