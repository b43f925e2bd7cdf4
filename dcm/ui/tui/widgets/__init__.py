"""
TUI widgets for DCM.

- KeyHintBar: notification and key hint bar
- panels: renderables for the sidebar, explorer, tabs, entry list and details
"""

from __future__ import annotations

from .status import KeyHintBar

__all__ = ["KeyHintBar"]
