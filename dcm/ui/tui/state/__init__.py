"""State models for the config editor screens."""

from __future__ import annotations

from .editor import EditorModel
from .events import InteractiveRects, KeyPress, PointerPress, Rect
from .explorer import ExplorerEntry, FileExplorerState
from .session import MENU, ConfigSession, Notification, ScreenName, SessionSnapshot, ValueEdit

__all__ = [
    "MENU",
    "ConfigSession",
    "EditorModel",
    "ExplorerEntry",
    "FileExplorerState",
    "InteractiveRects",
    "KeyPress",
    "Notification",
    "PointerPress",
    "Rect",
    "ScreenName",
    "SessionSnapshot",
    "ValueEdit",
]
