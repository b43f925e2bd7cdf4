"""
Key hint bar widget for the DCM TUI.

Displays:
- Latest notification (colored by severity)
- Key hints for the active screen
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

from dcm.logging import get_logger

logger = get_logger(__name__)

SEVERITY_CLASSES = {
    "info": "status-info",
    "warning": "status-warning",
    "error": "status-error",
}


class KeyHintBar(Widget):
    """
    Bottom bar with the last notification and the active key hints.
    """

    DEFAULT_CSS = """
    KeyHintBar {
        dock: bottom;
        height: 3;
        border: round $primary-darken-1;
        border-title-color: $text-muted;
        padding: 0 1;
    }

    KeyHintBar > Horizontal {
        width: 100%;
        height: 1;
    }

    .status-notification {
        width: auto;
        margin-right: 2;
        text-style: bold;
    }

    .status-info {
        color: $success;
    }

    .status-warning {
        color: $warning;
    }

    .status-error {
        color: $error;
    }

    .status-hints {
        color: $text-muted;
    }
    """

    hints: reactive[str] = reactive("")
    message: reactive[str] = reactive("")
    severity: reactive[str] = reactive("info")

    def compose(self) -> ComposeResult:
        """Compose the bar layout."""
        self.border_title = "Keys"
        with Horizontal():
            yield Static(
                self.message,
                id="status-notification",
                classes="status-notification status-info",
            )
            yield Static(self.hints, id="status-hints", classes="status-hints")

    def watch_hints(self, hints: str) -> None:
        """React to hint changes."""
        try:
            self.query_one("#status-hints", Static).update(hints)
        except Exception:
            pass

    def watch_message(self, message: str) -> None:
        """React to notification changes."""
        try:
            self.query_one("#status-notification", Static).update(message)
        except Exception:
            pass

    def watch_severity(self, severity: str) -> None:
        """Swap the severity color class."""
        try:
            widget = self.query_one("#status-notification", Static)
        except Exception:
            return
        for css_class in SEVERITY_CLASSES.values():
            widget.remove_class(css_class)
        widget.add_class(SEVERITY_CLASSES.get(severity, "status-info"))

    def show(self, hints: str, message: str = "", severity: str = "info") -> None:
        self.hints = hints
        self.message = message
        self.severity = severity
