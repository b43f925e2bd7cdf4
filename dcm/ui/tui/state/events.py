"""Input events and hit-test geometry shared by the session and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

LEFT_BUTTON = 1

# Tab strip geometry: each title is padded by one cell on both sides and
# followed by a one-cell divider, starting one cell inside the left border.
TAB_PADDING = 1
TAB_DIVIDER = "│"


@dataclass(frozen=True)
class KeyPress:
    """A key press, named the way Textual names keys (``"ctrl+s"``, ``"up"``)."""

    key: str
    character: Optional[str] = None

    @property
    def is_printable(self) -> bool:
        if self.character is None or len(self.character) != 1:
            return False
        return self.character.isprintable()


@dataclass(frozen=True)
class PointerPress:
    """A mouse button press in screen cell coordinates."""

    x: int
    y: int
    button: int = LEFT_BUTTON


@dataclass(frozen=True)
class Rect:
    """Screen-space rectangle of a drawn widget."""

    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass
class InteractiveRects:
    """Rectangles drawn in the last frame; ``None`` means not drawn."""

    select_config_button: Optional[Rect] = None
    file_list: Optional[Rect] = None
    tabs: Optional[Rect] = None
    config_list: Optional[Rect] = None


def tab_at(rect: Rect, x: int, names: list[str]) -> Optional[int]:
    """Index of the tab under column ``x``, walking tab widths left to right."""
    cursor = rect.x + 1
    for index, name in enumerate(names):
        width = len(name) + 2 * TAB_PADDING
        if cursor <= x < cursor + width:
            return index
        cursor += width + len(TAB_DIVIDER)
    return None


def list_row_at(rect: Rect, y: int, scroll_offset: int) -> Optional[int]:
    """List row under line ``y`` for a bordered list; ``None`` on the top border."""
    row = y - rect.y - 1
    if row < 0:
        return None
    return row + scroll_offset
