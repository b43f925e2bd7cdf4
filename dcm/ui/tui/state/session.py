"""
Config session state machine.

``ConfigSession`` owns every model of a running session (explorer, editor,
value-edit buffer, notification, hit-test rectangles) and turns key and
pointer events into screen transitions and model mutations. It knows
nothing about Textual; the app forwards events here and draws whatever
state results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Literal, Mapping, Optional, cast

from dcm.conf.errors import ConfigError
from dcm.conf.parser import parse_config
from dcm.conf.roles import ROLES, ConfigRole, RoleName
from dcm.conf.sections import ConfigSection
from dcm.conf.serializer import write_config
from dcm.fs import FileSystem, LocalFileSystem
from dcm.logging import exception_exc_info, format_exception_summary, get_logger

from .editor import EditorModel
from .events import (
    LEFT_BUTTON,
    InteractiveRects,
    KeyPress,
    PointerPress,
    list_row_at,
    tab_at,
)
from .explorer import FileExplorerState

logger = get_logger(__name__)

ScreenName = Literal["home", "bitcoin", "p2pool", "explorer", "editing", "editing_value"]
Severity = Literal["info", "warning", "error"]

ROLE_SCREENS: tuple[RoleName, ...] = ("bitcoin", "p2pool")

MENU: tuple[tuple[ScreenName, str], ...] = (
    ("home", "Home"),
    ("bitcoin", "Bitcoin Config"),
    ("p2pool", "P2Pool Config"),
)

QUIT_KEYS = frozenset({"q", "ctrl+c"})
SAVE_KEY = "ctrl+s"


@dataclass(frozen=True)
class Notification:
    """Single UI notification event."""

    message: str
    severity: Severity = "info"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ValueEdit:
    """Text buffer of the value editor; exists only while editing a value."""

    buffer: str = ""


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable snapshot of the state a frame is drawn from."""

    screen: ScreenName
    sidebar_index: int
    section_names: tuple[str, ...]
    selected_section_index: int
    selected_item_index: int
    editing_value: str
    config_file_path: Optional[Path]
    dirty: bool
    notification: Optional[Notification]
    running: bool


def _is_role_screen(screen: str) -> bool:
    return screen in ROLE_SCREENS


class ConfigSession:
    """State machine behind the config editor screens."""

    def __init__(
        self,
        *,
        start_dir: Optional[Path] = None,
        fs: Optional[FileSystem] = None,
        default_paths: Optional[Mapping[str, Optional[Path]]] = None,
        initial_screen: ScreenName = "home",
    ) -> None:
        self.fs: FileSystem = fs or LocalFileSystem()
        self._default_paths = dict(default_paths or {})

        self.current_screen: ScreenName = "home"
        self.config_flow_return_screen: ScreenName = "home"
        self.sidebar_index = 0
        self.active_role: Optional[ConfigRole] = None
        self.editor = EditorModel()
        self.value_edit: Optional[ValueEdit] = None
        self.config_file_path: Optional[Path] = None
        self.notification: Optional[Notification] = None
        self.explorer = FileExplorerState(start_dir or Path.cwd(), fs=self.fs)
        self.interactive_rects = InteractiveRects()
        self.running = True
        self.dirty = False

        if initial_screen in {name for name, _ in MENU}:
            self._show_menu_item(initial_screen)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def sections(self) -> list[ConfigSection]:
        return self.editor.sections

    @property
    def selected_section_index(self) -> int:
        return self.editor.selected_section_index

    @property
    def selected_item_index(self) -> int:
        return self.editor.selected_item_index

    @property
    def editing_value(self) -> str:
        return self.value_edit.buffer if self.value_edit is not None else ""

    def snapshot(self) -> SessionSnapshot:
        """Return an immutable snapshot of the session."""
        return SessionSnapshot(
            screen=self.current_screen,
            sidebar_index=self.sidebar_index,
            section_names=tuple(self.editor.section_names),
            selected_section_index=self.editor.selected_section_index,
            selected_item_index=self.editor.selected_item_index,
            editing_value=self.editing_value,
            config_file_path=self.config_file_path,
            dirty=self.dirty,
            notification=self.notification,
            running=self.running,
        )

    def default_path_for(self, role: ConfigRole) -> Optional[Path]:
        """Configured or platform default path for ``role``."""
        override = self._default_paths.get(role.name)
        if override is not None:
            return Path(override)
        return role.default_path()

    # ------------------------------------------------------------------
    # Mutations used by the key and pointer handlers
    # ------------------------------------------------------------------

    def notify(self, message: str, *, severity: Severity = "info") -> Notification:
        self.notification = Notification(message=message, severity=severity)
        return self.notification

    def _set_screen(self, screen: ScreenName) -> None:
        if screen != self.current_screen:
            logger.debug("Screen %s -> %s", self.current_screen, screen)
        self.current_screen = screen

    def _show_menu_item(self, screen: ScreenName) -> None:
        for index, (name, _) in enumerate(MENU):
            if name == screen:
                self.sidebar_index = index
                break
        self._set_screen(screen)

    def quit(self) -> None:
        logger.info("Quit requested on %s screen", self.current_screen)
        self.running = False

    def open_explorer(self) -> bool:
        """Open the file explorer for the role screen currently shown."""
        if not _is_role_screen(self.current_screen):
            return False

        role = ROLES[cast(RoleName, self.current_screen)]
        self.active_role = role
        self.config_flow_return_screen = self.current_screen

        default_path = self.default_path_for(role)
        if default_path is not None and self.fs.is_dir(default_path.parent):
            self.explorer.change_dir(default_path.parent)
            self.explorer.select_path(default_path)
        else:
            self.explorer.refresh()

        self._set_screen("explorer")
        return True

    def close_explorer(self) -> None:
        self._return_to_flow_screen()

    def _return_to_flow_screen(self) -> None:
        self.value_edit = None
        self._show_menu_item(self.config_flow_return_screen)

    def open_config_file(self, path: Path, role: Optional[RoleName] = None) -> bool:
        """
        Parse ``path`` and load it into the editor.

        Args:
            path: Config file to open. A missing file opens with defaults.
            role: Role to parse with; defaults to the active role, then
                bitcoin.

        Returns:
            True when the editor was loaded. On failure the screen does not
            change and an error notification is set.
        """
        if role is not None:
            self.active_role = ROLES[role]
            self.config_flow_return_screen = role
        config_role = self.active_role or ROLES["bitcoin"]
        self.active_role = config_role

        try:
            entries = parse_config(path, config_role.schema, self.fs)
        except ConfigError as exc:
            summary = format_exception_summary(exc)
            logger.warning("Failed to open %s: %s", path, summary)
            self.notify(f"Could not open {path.name}: {summary}", severity="error")
            return False

        self.editor.load(config_role.group(entries))
        self.config_file_path = Path(path)
        self.dirty = False
        self.value_edit = None
        logger.info("Loaded %s as %s (%d entries)", path, config_role.name, len(entries))
        self.notify(f"Loaded {path}")
        self._set_screen("editing")
        return True

    def save(self) -> bool:
        """Write the enabled entries back to ``config_file_path``."""
        path = self.config_file_path
        if path is None:
            self.notify("No config file loaded.", severity="warning")
            return False

        try:
            write_config(path, self.editor.sections, self.fs)
        except ConfigError as exc:
            summary = format_exception_summary(exc)
            logger.error("Failed to save %s: %s", path, summary, exc_info=exception_exc_info(exc))
            self.notify(f"Save failed: {summary}", severity="error")
            return False

        self.dirty = False
        self.notify(f"Saved {path}")
        return True

    def begin_value_edit(self) -> bool:
        entry = self.editor.current_entry
        if entry is None:
            return False
        self.value_edit = ValueEdit(buffer=entry.value)
        self._set_screen("editing_value")
        return True

    def commit_value_edit(self) -> None:
        if self.value_edit is not None and self.editor.commit_edit(self.value_edit.buffer):
            self.dirty = True
        self.value_edit = None
        self._set_screen("editing")

    def cancel_value_edit(self) -> None:
        self.value_edit = None
        self._set_screen("editing")

    def begin_frame(self) -> InteractiveRects:
        """Start a frame with every hit-test rectangle cleared."""
        self.interactive_rects = InteractiveRects()
        return self.interactive_rects

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def handle_key(self, press: KeyPress) -> bool:
        """
        Apply a key press.

        Returns:
            True when the key was consumed.
        """
        if not self.running:
            return False

        if press.key in QUIT_KEYS and not (self.current_screen == "editing_value" and press.is_printable):
            self.quit()
            return True

        handler = self._key_handlers()[self.current_screen]
        return handler(press)

    def _key_handlers(self) -> dict[ScreenName, Callable[[KeyPress], bool]]:
        return {
            "home": self._handle_menu_key,
            "bitcoin": self._handle_menu_key,
            "p2pool": self._handle_menu_key,
            "explorer": self._handle_explorer_key,
            "editing": self._handle_editing_key,
            "editing_value": self._handle_editing_value_key,
        }

    def _handle_menu_key(self, press: KeyPress) -> bool:
        if press.key == "up":
            if self.sidebar_index > 0:
                self._show_menu_item(MENU[self.sidebar_index - 1][0])
            return True
        if press.key == "down":
            if self.sidebar_index < len(MENU) - 1:
                self._show_menu_item(MENU[self.sidebar_index + 1][0])
            return True
        if press.key == "enter":
            return self.open_explorer()
        return False

    def _handle_explorer_key(self, press: KeyPress) -> bool:
        key = press.key
        if key == "up":
            self.explorer.select_previous()
        elif key == "down":
            self.explorer.select_next()
        elif key == "escape":
            self.close_explorer()
        elif key == "enter":
            path = self.explorer.activate()
            if path is not None:
                self.open_config_file(path)
        else:
            return False
        return True

    def _handle_editing_key(self, press: KeyPress) -> bool:
        key = press.key
        if key in {"right", "tab"}:
            self.editor.next_section()
        elif key in {"left", "shift+tab"}:
            self.editor.previous_section()
        elif key == "down":
            self.editor.next_item()
        elif key == "up":
            self.editor.previous_item()
        elif key == "space":
            if self.editor.toggle_enabled():
                self.dirty = True
        elif key == "enter":
            result = self.editor.activate()
            if result == "toggled":
                self.dirty = True
            elif result == "edit":
                self.begin_value_edit()
        elif key == SAVE_KEY:
            self.save()
        elif key == "escape":
            self._return_to_flow_screen()
        else:
            return False
        return True

    def _handle_editing_value_key(self, press: KeyPress) -> bool:
        assert self.value_edit is not None
        key = press.key
        if key == "enter":
            self.commit_value_edit()
        elif key == "escape":
            self.cancel_value_edit()
        elif key == SAVE_KEY:
            self.commit_value_edit()
            self.save()
        elif key == "backspace":
            self.value_edit.buffer = self.value_edit.buffer[:-1]
        elif press.is_printable:
            self.value_edit.buffer += cast(str, press.character)
        else:
            return False
        return True

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    def handle_pointer(self, press: PointerPress) -> bool:
        """
        Apply a pointer press against the rectangles of the last frame.

        Returns:
            True when the press hit an interactive region.
        """
        if not self.running or press.button != LEFT_BUTTON:
            return False

        rects = self.interactive_rects
        screen = self.current_screen

        if _is_role_screen(screen):
            button = rects.select_config_button
            if button is not None and button.contains(press.x, press.y):
                return self.open_explorer()
            return False

        if screen == "explorer":
            rect = rects.file_list
            if rect is None or not rect.contains(press.x, press.y):
                return False
            row = list_row_at(rect, press.y, self.explorer.scroll_offset)
            if row is None:
                return False
            self.explorer.select(row)
            return True

        if screen == "editing":
            tabs = rects.tabs
            if tabs is not None and tabs.contains(press.x, press.y):
                index = tab_at(tabs, press.x, self.editor.section_names)
                if index is None:
                    return False
                self.editor.select_section(index)
                return True

            rect = rects.config_list
            if rect is None or not rect.contains(press.x, press.y):
                return False
            row = list_row_at(rect, press.y, self.editor.scroll_offset)
            section = self.editor.current_section
            if row is None or section is None or not section.items:
                return False
            self.editor.select_item(min(row, len(section.items) - 1))
            return True

        return False
