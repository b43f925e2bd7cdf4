"""File explorer model: directory listing plus a selection cursor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from dcm.fs import FileSystem, LocalFileSystem
from dcm.logging import format_exception_summary, get_logger

logger = get_logger(__name__)

EntryKind = Literal["parent", "dir", "file"]
PARENT_NAME = ".."


@dataclass(frozen=True)
class ExplorerEntry:
    """Single row of the explorer listing."""

    path: Path
    name: str
    kind: EntryKind

    @property
    def is_parent(self) -> bool:
        return self.kind == "parent"

    @property
    def is_dir(self) -> bool:
        return self.kind in {"parent", "dir"}

    @property
    def label(self) -> str:
        return f"{self.name}/" if self.is_dir else self.name


def _has_parent(path: Path) -> bool:
    return path.parent != path


class FileExplorerState:
    """
    Directory listing with a selection cursor.

    ``files`` starts with a ``..`` row when the directory has a parent, then
    directories, then files, each group sorted by name.
    """

    def __init__(self, current_dir: Path, fs: Optional[FileSystem] = None) -> None:
        self.fs: FileSystem = fs or LocalFileSystem()
        self.current_dir = Path(current_dir)
        self.files: list[ExplorerEntry] = []
        self.selection: Optional[int] = 0
        self.scroll_offset = 0
        self.refresh()

    @property
    def selected_entry(self) -> Optional[ExplorerEntry]:
        if self.selection is None or not 0 <= self.selection < len(self.files):
            return None
        return self.files[self.selection]

    def refresh(self) -> None:
        """Rebuild the listing, keeping the selection in range."""
        rows: list[ExplorerEntry] = []
        if _has_parent(self.current_dir):
            rows.append(ExplorerEntry(path=self.current_dir.parent, name=PARENT_NAME, kind="parent"))

        try:
            children = self.fs.list_dir(self.current_dir)
        except OSError as exc:
            logger.warning(
                "Cannot list %s: %s", self.current_dir, format_exception_summary(exc)
            )
            children = []

        dirs = sorted((c for c in children if c.is_dir), key=lambda c: c.name)
        files = sorted((c for c in children if not c.is_dir), key=lambda c: c.name)
        rows.extend(ExplorerEntry(path=c.path, name=c.name, kind="dir") for c in dirs)
        rows.extend(ExplorerEntry(path=c.path, name=c.name, kind="file") for c in files)
        self.files = rows

        if not self.files:
            self.selection = None
        elif self.selection is not None and self.selection >= len(self.files):
            self.selection = len(self.files) - 1
        self.scroll_offset = min(self.scroll_offset, max(len(self.files) - 1, 0))

    def select_next(self) -> None:
        if not self.files:
            return
        if self.selection is None:
            self.selection = 0
        else:
            self.selection = (self.selection + 1) % len(self.files)

    def select_previous(self) -> None:
        if not self.files:
            return
        if self.selection is None:
            self.selection = 0
        else:
            self.selection = (self.selection - 1) % len(self.files)

    def select(self, index: int) -> None:
        """Move the cursor to ``index``, clamped to the last row."""
        if not self.files or index < 0:
            return
        self.selection = min(index, len(self.files) - 1)

    def select_path(self, path: Path) -> bool:
        for index, entry in enumerate(self.files):
            if entry.path == path and not entry.is_parent:
                self.selection = index
                return True
        return False

    def change_dir(self, path: Path) -> None:
        logger.debug("Explorer entering %s", path)
        self.current_dir = Path(path)
        self.selection = 0
        self.scroll_offset = 0
        self.refresh()

    def activate(self) -> Optional[Path]:
        """
        Act on the selected row.

        Returns:
            The selected file's path, or ``None`` when the row was a
            directory (the explorer navigated into it) or nothing is
            selected.
        """
        entry = self.selected_entry
        if entry is None:
            return None
        if entry.is_parent:
            self.change_dir(self.current_dir.parent)
            return None
        if entry.kind == "dir":
            self.change_dir(entry.path)
            return None
        return entry.path

    def ensure_visible(self, height: int) -> None:
        """Scroll so the selected row is inside a window of ``height`` rows."""
        if height <= 0 or self.selection is None:
            return
        if self.selection < self.scroll_offset:
            self.scroll_offset = self.selection
        elif self.selection >= self.scroll_offset + height:
            self.scroll_offset = self.selection - height + 1
