"""
Narrow filesystem access used by the config session.

The parser, serializer and file explorer only touch the disk through a
``FileSystem`` object, so tests can hand them an in-memory tree.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class DirEntry:
    """Single child of a listed directory."""

    name: str
    path: Path
    is_dir: bool


@runtime_checkable
class FileSystem(Protocol):
    """Operations the session engine needs from a filesystem."""

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def list_dir(self, path: Path) -> list[DirEntry]: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, text: str) -> None: ...


class LocalFileSystem:
    """``FileSystem`` backed by the real disk."""

    encoding = "utf-8"

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def list_dir(self, path: Path) -> list[DirEntry]:
        entries: list[DirEntry] = []
        with os.scandir(path) as it:
            for item in it:
                try:
                    is_dir = item.is_dir()
                except OSError:
                    is_dir = False
                entries.append(DirEntry(name=item.name, path=Path(item.path), is_dir=is_dir))
        return entries

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding=self.encoding)

    def write_text(self, path: Path, text: str) -> None:
        """Replace ``path`` atomically: write a sibling temp file, then rename."""
        target = Path(path)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.",
            suffix=".tmp",
            dir=str(target.parent),
        )
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="\n") as handle:
                handle.write(text)
            if target.exists():
                os.chmod(tmp_name, target.stat().st_mode & 0o777)
            os.replace(tmp_name, target)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
