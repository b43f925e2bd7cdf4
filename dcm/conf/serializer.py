"""Serialization of edited sections back to ``key=value`` text."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from dcm.conf.errors import ConfigWriteError
from dcm.conf.sections import ConfigSection
from dcm.fs import FileSystem, LocalFileSystem
from dcm.logging import get_logger

logger = get_logger(__name__)


def serialize_sections(sections: Iterable[ConfigSection]) -> str:
    """
    Render sections as config text.

    Each section with at least one enabled entry becomes a ``# <name>``
    header, its enabled ``key=value`` lines and a blank line. Disabled
    entries and empty sections are left out.
    """
    lines: list[str] = []
    for section in sections:
        enabled = section.enabled_items
        if not enabled:
            continue
        lines.append(f"# {section.name}")
        lines.extend(f"{entry.key}={entry.value}" for entry in enabled)
        lines.append("")
    return "\n".join(lines) + ("\n" if lines else "")


def write_config(
    path: Path,
    sections: Iterable[ConfigSection],
    fs: Optional[FileSystem] = None,
) -> str:
    """
    Serialize and write sections to ``path`` in one step.

    Returns:
        The text that was written.

    Raises:
        ConfigWriteError: If the file cannot be written. The previous
            file content is left untouched.
    """
    filesystem = fs or LocalFileSystem()
    text = serialize_sections(sections)
    try:
        filesystem.write_text(path, text)
    except OSError as exc:
        raise ConfigWriteError(path, f"Cannot write config file ({exc})") from exc
    logger.info("Wrote %d bytes to %s", len(text.encode("utf-8")), path)
    return text
