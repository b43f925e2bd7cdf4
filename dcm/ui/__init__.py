"""DCM UI module - user interfaces for Daemon Config Manager.

- tui: Textual-based terminal UI
"""

from __future__ import annotations

__all__ = ["tui"]
