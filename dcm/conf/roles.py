"""
Config roles: the kinds of daemon configuration file the tool edits.

A role ties together the schema table, the bucket rule for unknown keys and
the platform default path of one daemon.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional

from dcm.conf.schema import BITCOIN_SCHEMA, P2POOL_SCHEMA, ConfigEntry, ConfigSchema
from dcm.conf.sections import BucketRule, ConfigSection, classify_key, custom_bucket, group_entries
from dcm.paths import get_bitcoin_conf_path, get_p2pool_conf_path

RoleName = Literal["bitcoin", "p2pool"]
ROLE_NAMES: tuple[RoleName, ...] = ("bitcoin", "p2pool")


@dataclass(frozen=True)
class ConfigRole:
    """Static description of one editable config file kind."""

    name: RoleName
    title: str
    file_name: str
    schema: tuple[ConfigSchema, ...]
    unknown_bucket: BucketRule
    default_path_resolver: Callable[[], Optional[Path]]

    def default_path(self) -> Optional[Path]:
        return self.default_path_resolver()

    def group(self, entries: list[ConfigEntry]) -> list[ConfigSection]:
        return group_entries(entries, self.unknown_bucket)


BITCOIN_ROLE = ConfigRole(
    name="bitcoin",
    title="Bitcoin Config",
    file_name="bitcoin.conf",
    schema=BITCOIN_SCHEMA,
    unknown_bucket=custom_bucket,
    default_path_resolver=get_bitcoin_conf_path,
)

P2POOL_ROLE = ConfigRole(
    name="p2pool",
    title="P2Pool Config",
    file_name="p2pool.conf",
    schema=P2POOL_SCHEMA,
    unknown_bucket=classify_key,
    default_path_resolver=get_p2pool_conf_path,
)

ROLES: dict[RoleName, ConfigRole] = {
    "bitcoin": BITCOIN_ROLE,
    "p2pool": P2POOL_ROLE,
}


def get_role(name: str) -> ConfigRole:
    """Look up a role by name, raising ``ValueError`` for unknown names."""
    try:
        return ROLES[name]  # type: ignore[index]
    except KeyError:
        raise ValueError(f"Unknown config role {name!r}; expected one of {', '.join(ROLE_NAMES)}") from None
