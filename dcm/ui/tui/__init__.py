"""
TUI (Text User Interface) module for DCM.

Provides a terminal config editor built with Textual.
"""

from __future__ import annotations

__all__ = [
    "DCMApp",
    "run_tui",
]


def __getattr__(name: str):
    if name in __all__:
        from dcm.ui.tui.app import DCMApp, run_tui
        return {"DCMApp": DCMApp, "run_tui": run_tui}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
