"""Editor model: grouped sections plus section and item cursors."""

from __future__ import annotations

from typing import Literal, Optional

from dcm.conf.schema import ConfigEntry
from dcm.conf.sections import ConfigSection

ActivateResult = Literal["toggled", "edit", "none"]


class EditorModel:
    """
    Selection and mutation over a list of config sections.

    Navigation wraps around. Every operation is a no-op when there is no
    section or no item under the cursor.
    """

    def __init__(self, sections: Optional[list[ConfigSection]] = None) -> None:
        self.sections: list[ConfigSection] = []
        self.selected_section_index = 0
        self.selected_item_index = 0
        self.scroll_offset = 0
        if sections is not None:
            self.load(sections)

    def load(self, sections: list[ConfigSection]) -> None:
        self.sections = list(sections)
        self.selected_section_index = 0
        self.selected_item_index = 0
        self.scroll_offset = 0

    @property
    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]

    @property
    def current_section(self) -> Optional[ConfigSection]:
        if not 0 <= self.selected_section_index < len(self.sections):
            return None
        return self.sections[self.selected_section_index]

    @property
    def current_entry(self) -> Optional[ConfigEntry]:
        section = self.current_section
        if section is None or not 0 <= self.selected_item_index < len(section.items):
            return None
        return section.items[self.selected_item_index]

    def _reset_item(self) -> None:
        self.selected_item_index = 0
        self.scroll_offset = 0

    def next_section(self) -> None:
        if not self.sections:
            return
        self.selected_section_index = (self.selected_section_index + 1) % len(self.sections)
        self._reset_item()

    def previous_section(self) -> None:
        if not self.sections:
            return
        self.selected_section_index = (self.selected_section_index - 1) % len(self.sections)
        self._reset_item()

    def select_section(self, index: int) -> None:
        if not 0 <= index < len(self.sections) or index == self.selected_section_index:
            return
        self.selected_section_index = index
        self._reset_item()

    def _item_count(self) -> int:
        section = self.current_section
        return len(section.items) if section is not None else 0

    def next_item(self) -> None:
        count = self._item_count()
        if count == 0:
            return
        self.selected_item_index = (self.selected_item_index + 1) % count

    def previous_item(self) -> None:
        count = self._item_count()
        if count == 0:
            return
        self.selected_item_index = (self.selected_item_index - 1) % count

    def select_item(self, index: int) -> None:
        if 0 <= index < self._item_count():
            self.selected_item_index = index

    def toggle_enabled(self) -> bool:
        entry = self.current_entry
        if entry is None:
            return False
        entry.toggle_enabled()
        return True

    def activate(self) -> ActivateResult:
        """
        Activate the current entry.

        Boolean entries flip in place and report ``"toggled"``; other entries
        report ``"edit"`` so the caller can open the value editor.
        """
        entry = self.current_entry
        if entry is None:
            return "none"
        if entry.is_boolean:
            entry.flip_boolean()
            return "toggled"
        return "edit"

    def commit_edit(self, buffer: str) -> bool:
        entry = self.current_entry
        if entry is None:
            return False
        entry.commit(buffer)
        return True

    def ensure_visible(self, height: int) -> None:
        """Scroll so the selected item is inside a window of ``height`` rows."""
        if height <= 0:
            return
        if self.selected_item_index < self.scroll_offset:
            self.scroll_offset = self.selected_item_index
        elif self.selected_item_index >= self.scroll_offset + height:
            self.scroll_offset = self.selected_item_index - height + 1
