"""
Daemon configuration file model for DCM.

Schema tables, the ``key=value`` parser and serializer, and section grouping.
"""

from .errors import ConfigError, ConfigReadError, ConfigWriteError
from .parser import parse_config, parse_text
from .roles import BITCOIN_ROLE, P2POOL_ROLE, ROLES, ConfigRole, get_role
from .schema import BITCOIN_SCHEMA, P2POOL_SCHEMA, ConfigEntry, ConfigSchema, ConfigType
from .sections import ConfigSection, classify_key, group_entries
from .serializer import serialize_sections, write_config

__all__ = [
    "BITCOIN_ROLE",
    "BITCOIN_SCHEMA",
    "ConfigEntry",
    "ConfigError",
    "ConfigReadError",
    "ConfigRole",
    "ConfigSchema",
    "ConfigSection",
    "ConfigType",
    "ConfigWriteError",
    "P2POOL_ROLE",
    "P2POOL_SCHEMA",
    "ROLES",
    "classify_key",
    "get_role",
    "group_entries",
    "parse_config",
    "parse_text",
    "serialize_sections",
    "write_config",
]
