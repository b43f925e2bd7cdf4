"""
Main TUI application for DCM.

A thin Textual front end over ``ConfigSession``:
- key and mouse events are forwarded to the session
- widgets are redrawn from session state after every event
- widget regions are recorded as the frame's hit-test rectangles
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widget import Widget
from textual.widgets import Header, Static

from dcm.conf.roles import ROLES
from dcm.logging import get_logger
from dcm.ui.tui.state import ConfigSession, KeyPress, PointerPress, Rect
from dcm.ui.tui.widgets.panels import (
    FOOTER_HINTS,
    HOME_TEXT,
    render_details,
    render_entry_rows,
    render_file_rows,
    render_role_intro,
    render_sidebar,
    render_tabs,
    render_value_editor,
)
from dcm.ui.tui.widgets.status import KeyHintBar

if TYPE_CHECKING:
    from dcm.config.models import DCMConfig

logger = get_logger(__name__)

_PANELS = ("home-panel", "role-panel", "file-list", "editor-panel")
_SCREEN_PANEL = {
    "home": "home-panel",
    "bitcoin": "role-panel",
    "p2pool": "role-panel",
    "explorer": "file-list",
    "editing": "editor-panel",
    "editing_value": "editor-panel",
}


def rect_of(widget: Widget) -> Optional[Rect]:
    """Screen rectangle of a displayed widget, or ``None`` if it is hidden."""
    if not widget.display:
        return None
    region = widget.region
    if region.width <= 0 or region.height <= 0:
        return None
    return Rect(region.x, region.y, region.width, region.height)


def key_press_from_event(event: events.Key) -> KeyPress:
    return KeyPress(key=event.key, character=event.character)


class DCMApp(App):
    """
    Daemon Config Manager TUI application.

    Browse for a bitcoin.conf or p2pool.conf file and edit it section by
    section.
    """

    TITLE = "Daemon Config Manager"
    SUB_TITLE = "bitcoin.conf / p2pool.conf editor"

    CSS = """
    #body {
        height: 1fr;
    }

    #sidebar {
        width: 25;
        height: 100%;
        border: round $primary;
        border-title-align: left;
    }

    #content {
        width: 1fr;
        height: 100%;
    }

    #home-panel, #role-panel, #file-list {
        height: 100%;
        border: round $primary;
    }

    #role-intro {
        height: auto;
        margin: 1 2;
    }

    #select-config-button {
        width: 40;
        height: 3;
        margin: 1 2;
        border: round $accent;
        background: $boost;
        content-align: center middle;
        text-style: bold;
    }

    #tabs {
        height: 3;
        border: round $primary;
        padding: 0;
    }

    #editor-body {
        height: 1fr;
    }

    #config-list, #details {
        width: 1fr;
        height: 100%;
        border: round $primary;
        padding: 0;
    }

    #details {
        padding: 0 1;
    }

    #value-popup {
        dock: bottom;
        height: 3;
        border: round $warning;
        padding: 0 1;
        display: none;
    }
    """

    # Keys Textual would otherwise consume before they reach on_key.
    BINDINGS = [
        Binding("tab", "session_key('tab')", "Next section", show=False, priority=True),
        Binding("shift+tab", "session_key('shift+tab')", "Previous section", show=False, priority=True),
        Binding("ctrl+s", "session_key('ctrl+s')", "Save", show=False, priority=True),
        Binding("ctrl+c", "session_key('ctrl+c')", "Quit", show=False, priority=True),
    ]

    def __init__(self, session: ConfigSession, *args, **kwargs) -> None:
        """
        Initialize the DCM TUI application.

        Args:
            session: Session engine driving the screens
        """
        super().__init__(*args, **kwargs)
        self.session = session

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header(icon="")
        with Horizontal(id="body"):
            yield Static(id="sidebar")
            with Container(id="content"):
                yield Static(HOME_TEXT, id="home-panel")
                with Vertical(id="role-panel"):
                    yield Static(id="role-intro")
                    yield Static(id="select-config-button")
                yield Static(id="file-list")
                with Vertical(id="editor-panel"):
                    yield Static(id="tabs")
                    with Horizontal(id="editor-body"):
                        yield Static(id="config-list")
                        yield Static(id="details")
                yield Static(id="value-popup")
        yield KeyHintBar(id="key-hints")

    def on_mount(self) -> None:
        """Draw the first frame."""
        logger.info("DCM TUI mounted on %s screen", self.session.current_screen)
        self.query_one("#sidebar", Static).border_title = "DCM"
        self._sync()

    def on_resize(self, event: events.Resize) -> None:
        self._sync()

    # -------------------------------------------------------------------------
    # Input forwarding
    # -------------------------------------------------------------------------

    def on_key(self, event: events.Key) -> None:
        """Forward key presses to the session."""
        if self.session.handle_key(key_press_from_event(event)):
            event.stop()
            event.prevent_default()
            self._after_event()

    def action_session_key(self, key: str) -> None:
        """Forward a key bound with priority to the session."""
        if self.session.handle_key(KeyPress(key=key)):
            self._after_event()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        """Forward pointer presses, resolved against the last frame's rectangles."""
        press = PointerPress(x=event.screen_x, y=event.screen_y, button=event.button)
        if self.session.handle_pointer(press):
            event.stop()
            self._after_event()

    def _after_event(self) -> None:
        if not self.session.running:
            self.exit(0)
            return
        self._sync()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _content_height(self, selector: str) -> int:
        try:
            return self.query_one(selector, Static).content_size.height
        except Exception:
            return 0

    def _sync(self) -> None:
        """Redraw every widget from session state, then record the frame."""
        session = self.session
        screen = session.current_screen

        active_panel = _SCREEN_PANEL[screen]
        for panel_id in _PANELS:
            self.query_one(f"#{panel_id}").display = panel_id == active_panel

        self.query_one("#sidebar", Static).update(render_sidebar(session.sidebar_index))

        if active_panel == "role-panel":
            self._draw_role_panel()
        elif active_panel == "file-list":
            self._draw_file_list()
        elif active_panel == "editor-panel":
            self._draw_editor()

        popup = self.query_one("#value-popup", Static)
        popup.display = screen == "editing_value"
        if popup.display:
            entry = session.editor.current_entry
            popup.border_title = "Edit Value"
            popup.update(render_value_editor(session.editing_value, entry.key if entry else ""))

        title = str(session.config_file_path) if session.config_file_path else self.SUB_TITLE
        self.sub_title = f"{title} *" if session.dirty else title

        note = session.notification
        self.query_one("#key-hints", KeyHintBar).show(
            FOOTER_HINTS[screen],
            note.message if note else "",
            note.severity if note else "info",
        )

        self.call_after_refresh(self._record_frame)

    def _draw_role_panel(self) -> None:
        role = ROLES[self.session.current_screen]  # type: ignore[index]
        default_path = self.session.default_path_for(role)
        panel = self.query_one("#role-panel")
        panel.border_title = role.title
        self.query_one("#role-intro", Static).update(
            render_role_intro(role.title, str(default_path) if default_path else None)
        )
        self.query_one("#select-config-button", Static).update(f"Load {role.title}")

    def _draw_file_list(self) -> None:
        explorer = self.session.explorer
        height = self._content_height("#file-list")
        explorer.ensure_visible(height)
        widget = self.query_one("#file-list", Static)
        widget.border_title = f"File Explorer: {explorer.current_dir}"
        widget.update(render_file_rows(explorer.files, explorer.selection, explorer.scroll_offset, height))

    def _draw_editor(self) -> None:
        editor = self.session.editor
        tabs = self.query_one("#tabs", Static)
        tabs.border_title = "Sections"
        tabs.update(render_tabs(editor.section_names, editor.selected_section_index))

        height = self._content_height("#config-list")
        editor.ensure_visible(height)
        options = self.query_one("#config-list", Static)
        options.border_title = "Options"
        options.update(
            render_entry_rows(
                editor.current_section,
                editor.selected_item_index,
                editor.scroll_offset,
                height,
            )
        )

        details = self.query_one("#details", Static)
        details.border_title = "Details"
        details.update(render_details(editor.current_entry))

    def _record_frame(self) -> None:
        """Record the regions drawn this frame; undrawn slots stay empty."""
        session = self.session
        rects = session.begin_frame()
        screen = session.current_screen

        if screen in ("bitcoin", "p2pool"):
            rects.select_config_button = rect_of(self.query_one("#select-config-button"))
        elif screen == "explorer":
            rects.file_list = rect_of(self.query_one("#file-list"))
            # Heights are only known after layout; settle the scroll offset again.
            self._draw_file_list()
        elif screen == "editing":
            rects.tabs = rect_of(self.query_one("#tabs"))
            rects.config_list = rect_of(self.query_one("#config-list"))
            self._draw_editor()


def build_session(config: "DCMConfig", role: Optional[str] = None, path: Optional[Path] = None) -> ConfigSession:
    """
    Create the session described by the settings and CLI choices.

    Args:
        config: DCM settings
        role: Role screen to start on (``None`` starts on Home)
        path: Config file to open straight away

    Returns:
        Configured session
    """
    default_paths = {
        "bitcoin": config.role_path_override("bitcoin"),
        "p2pool": config.role_path_override("p2pool"),
    }
    initial = role or "home"
    session = ConfigSession(
        start_dir=config.start_dir,
        default_paths=default_paths,
        initial_screen=initial,  # type: ignore[arg-type]
    )
    if path is not None:
        session.open_config_file(path, role=(role or config.default_role))  # type: ignore[arg-type]
    return session


def run_tui(config: "DCMConfig", role: Optional[str] = None, path: Optional[Path] = None) -> int:
    """
    Run the TUI application.

    Args:
        config: DCM settings
        role: Role screen to start on
        path: Config file to open straight away

    Returns:
        Exit code (0 for success)
    """
    session = build_session(config, role=role, path=path)
    app = DCMApp(session)
    app.run()
    return 0
