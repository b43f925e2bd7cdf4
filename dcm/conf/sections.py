"""Grouping of parsed entries into named, alphabetically ordered sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from dcm.conf.schema import ConfigEntry

BucketRule = Callable[[str], str]

CUSTOM_SECTION = "Custom"
GENERAL_SECTION = "General Settings"

# First match wins; order matters ("bitcoind.rpcport" is a node key, not
# a network key).
KEY_BUCKET_RULES: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("Authentication", lambda key: any(token in key for token in ("user", "pass", "auth"))),
    ("Bitcoin Node", lambda key: key.startswith("bitcoind")),
    ("Network", lambda key: any(token in key for token in ("port", "address", "listen"))),
    ("Payouts", lambda key: any(token in key for token in ("payout", "wallet"))),
)


@dataclass
class ConfigSection:
    """Named group of entries shown as one editor tab."""

    name: str
    items: list[ConfigEntry] = field(default_factory=list)

    @property
    def enabled_items(self) -> list[ConfigEntry]:
        return [entry for entry in self.items if entry.enabled]


def custom_bucket(key: str) -> str:
    """Bucket for unknown keys of schema-driven roles."""
    return CUSTOM_SECTION


def classify_key(key: str) -> str:
    """Bucket an unknown key by naming convention."""
    for section, matches in KEY_BUCKET_RULES:
        if matches(key):
            return section
    return GENERAL_SECTION


def group_entries(
    entries: Iterable[ConfigEntry],
    unknown_bucket: BucketRule = custom_bucket,
) -> list[ConfigSection]:
    """
    Bucket entries into sections sorted by name.

    Known entries go to their schema section, unknown entries to
    ``unknown_bucket(key)``. Entries keep their input order inside a section.
    """
    buckets: dict[str, list[ConfigEntry]] = {}
    for entry in entries:
        name = entry.schema.section if entry.schema is not None else unknown_bucket(entry.key)
        buckets.setdefault(name, []).append(entry)

    return [ConfigSection(name=name, items=buckets[name]) for name in sorted(buckets)]
