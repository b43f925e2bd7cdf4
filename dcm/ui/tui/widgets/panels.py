"""
Renderables for the config editor panels.

Each function builds a ``rich`` ``Text`` from session state. They read
state only; scroll offsets are settled by the caller before drawing.
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.text import Text

from dcm.conf.schema import ConfigEntry
from dcm.conf.sections import ConfigSection
from dcm.ui.tui.state.events import TAB_DIVIDER, TAB_PADDING
from dcm.ui.tui.state.explorer import ExplorerEntry
from dcm.ui.tui.state.session import MENU, ScreenName

HIGHLIGHT_STYLE = "bold black on white"
LIST_HIGHLIGHT_SYMBOL = ">> "
ITEM_HIGHLIGHT_SYMBOL = "> "

FOOTER_HINTS: dict[ScreenName, str] = {
    "home": "↑/↓: menu  Enter: select  q: quit",
    "bitcoin": "↑/↓: menu  Enter: load config  q: quit",
    "p2pool": "↑/↓: menu  Enter: load config  q: quit",
    "explorer": "↑/↓: navigate  Enter: open/select  Esc: back  q: quit",
    "editing": (
        "↑/↓: select  ←/→ Tab: section  Space: enable  Enter: edit/toggle  "
        "Ctrl+S: save  Esc: back  q: quit"
    ),
    "editing_value": "Type: edit  Backspace: delete  Enter: apply  Esc: cancel  Ctrl+S: save  Ctrl+C: quit",
}

HOME_TEXT = (
    "Welcome to Daemon Config Manager.\n\n"
    "Pick a config type in the menu to browse for a file and edit it.\n"
    "Press 'q' to quit."
)


def render_sidebar(selected_index: int) -> Text:
    text = Text()
    for index, (_, label) in enumerate(MENU):
        style = HIGHLIGHT_STYLE if index == selected_index else ""
        text.append(f" {label} ", style=style)
        if index < len(MENU) - 1:
            text.append("\n")
    return text


def render_role_intro(title: str, default_path: Optional[str]) -> Text:
    text = Text(f"{title}\n\n", style="bold")
    if default_path:
        text.append("Default location: ")
        text.append(default_path, style="cyan")
    else:
        text.append("No default location for this platform.", style="dim")
    return text


def _window(count: int, offset: int, height: Optional[int]) -> range:
    if height is None or height <= 0:
        return range(offset, count)
    return range(offset, min(count, offset + height))


def render_file_rows(
    files: Sequence[ExplorerEntry],
    selection: Optional[int],
    offset: int = 0,
    height: Optional[int] = None,
) -> Text:
    """File explorer rows starting at ``offset``; directories get a trailing slash."""
    text = Text()
    rows = _window(len(files), offset, height)
    for position, index in enumerate(rows):
        entry = files[index]
        selected = index == selection
        prefix = LIST_HIGHLIGHT_SYMBOL if selected else " " * len(LIST_HIGHLIGHT_SYMBOL)
        style = "blue" if entry.is_dir else ""
        if selected:
            style = HIGHLIGHT_STYLE
        text.append(prefix + entry.label, style=style)
        if position < len(rows) - 1:
            text.append("\n")
    return text


def render_tabs(names: Sequence[str], selected: int) -> Text:
    """Tab strip laid out the way pointer hit-testing walks it."""
    text = Text()
    pad = " " * TAB_PADDING
    for index, name in enumerate(names):
        style = "bold yellow" if index == selected else ""
        text.append(f"{pad}{name}{pad}", style=style)
        if index < len(names) - 1:
            text.append(TAB_DIVIDER, style="dim")
    return text


def entry_line(entry: ConfigEntry) -> str:
    status = "[x]" if entry.enabled else "[ ]"
    return f"{status} {entry.key} = {entry.value}"


def render_entry_rows(
    section: Optional[ConfigSection],
    selected: int,
    offset: int = 0,
    height: Optional[int] = None,
) -> Text:
    if section is None:
        return Text("No configuration loaded or empty.", style="dim")
    text = Text()
    rows = _window(len(section.items), offset, height)
    for position, index in enumerate(rows):
        entry = section.items[index]
        is_selected = index == selected
        prefix = ITEM_HIGHLIGHT_SYMBOL if is_selected else " " * len(ITEM_HIGHLIGHT_SYMBOL)
        style = HIGHLIGHT_STYLE if is_selected else ("" if entry.enabled else "dim")
        text.append(prefix + entry_line(entry), style=style)
        if position < len(rows) - 1:
            text.append("\n")
    return text


def render_details(entry: Optional[ConfigEntry]) -> Text:
    if entry is None:
        return Text("")
    text = Text()
    text.append("Key: ", style="bold")
    text.append(f"{entry.key}\n")
    text.append("Value: ", style="bold")
    text.append(f"{entry.value}\n")
    text.append("Type: ", style="bold")
    text.append(f"{entry.type_label}\n")
    if entry.schema is not None:
        text.append("Default: ", style="bold")
        text.append(f"{entry.schema.default}\n")
    text.append("Written on save: ", style="bold")
    text.append("yes" if entry.enabled else "no")
    text.append("\n\nDescription:\n", style="bold")
    text.append(entry.description)
    return text


def render_value_editor(buffer: str, key: str) -> Text:
    text = Text(f"{key} = ", style="bold")
    text.append(buffer, style="yellow")
    text.append("█", style="blink")
    return text
