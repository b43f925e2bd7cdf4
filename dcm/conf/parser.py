"""
Parser for line-oriented ``key=value`` daemon configuration files.

The parse result merges what the file contains with a schema table: keys
found in the file are enabled, unknown keys are kept as custom entries, and
every schema key missing from the file is added disabled with its default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Optional

from dcm.conf.errors import ConfigReadError
from dcm.conf.schema import ConfigEntry, ConfigSchema, schema_by_key, scoped_key, split_scope
from dcm.fs import FileSystem, LocalFileSystem
from dcm.logging import get_logger

logger = get_logger(__name__)

FLAG_VALUE = "1"


def iter_pairs(text: str) -> Iterator[tuple[str, str]]:
    """
    Yield ``(key, value)`` pairs from config text.

    Blank lines and ``#`` comments are skipped. Keys after a ``[section]``
    header are yielded as ``section.key`` until the next header. A line
    without ``=`` is a flag and yields value ``"1"``. Lines with an empty key
    are malformed and skipped.
    """
    scope = ""
    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            scope = line[1:-1].strip()
            continue

        key, sep, value = line.partition("=")
        key = key.strip()
        value = value.strip() if sep else FLAG_VALUE
        if not key:
            logger.debug("Skipping malformed line %d: %r", line_no, raw_line)
            continue
        if scope and not split_scope(key)[0]:
            key = scoped_key(scope, key)
        yield key, value


def parse_text(text: str, schema_table: Iterable[ConfigSchema]) -> list[ConfigEntry]:
    """
    Merge config text with a schema table.

    Args:
        text: File contents.
        schema_table: Known keys.

    Returns:
        Entries in parse order, followed by disabled entries for every
        schema key the text does not mention.
    """
    table = tuple(schema_table)
    known = schema_by_key(table)
    found: set[str] = set()
    entries: list[ConfigEntry] = []

    for key, value in iter_pairs(text):
        # Scoped keys share the schema row of the bare key but never count
        # as the global occurrence.
        schema = known.get(split_scope(key)[1])
        if schema is not None:
            found.add(key)
        entries.append(ConfigEntry(key=key, value=value, schema=schema, enabled=True))

    entries.extend(ConfigEntry.from_default(row) for row in table if row.key not in found)
    return entries


def parse_config(
    path: Path,
    schema_table: Iterable[ConfigSchema],
    fs: Optional[FileSystem] = None,
) -> list[ConfigEntry]:
    """
    Parse a config file against a schema table.

    Args:
        path: Config file path. A missing file is not an error.
        schema_table: Known keys.
        fs: Filesystem access (defaults to the local disk).

    Returns:
        Merged entry list; all-default disabled entries when ``path`` does
        not exist.

    Raises:
        ConfigReadError: If an existing file cannot be read or decoded.
    """
    filesystem = fs or LocalFileSystem()
    table = tuple(schema_table)

    if not filesystem.exists(path):
        logger.info("Config file %s does not exist, using schema defaults", path)
        return [ConfigEntry.from_default(row) for row in table]

    try:
        text = filesystem.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(path, f"Cannot read config file ({exc})") from exc

    entries = parse_text(text, table)
    logger.debug(
        "Parsed %s: %d entries, %d enabled",
        path,
        len(entries),
        sum(1 for entry in entries if entry.enabled),
    )
    return entries
