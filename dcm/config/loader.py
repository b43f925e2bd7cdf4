"""
Settings loader for Daemon Config Manager.

Loads settings from a JSON or YAML file, applies environment variable
overrides, and builds the typed ``DCMConfig`` model. Settings are only ever
read; the tool does not write them back.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from dcm.logging import get_logger
from dcm.paths import find_settings_file

from .models import DCMConfig

logger = get_logger(__name__)

ENV_OVERRIDES: dict[str, str] = {
    "DCM_START_DIR": "start_dir",
    "DCM_DEFAULT_ROLE": "default_role",
    "DCM_BITCOIN_CONF": "bitcoin_conf",
    "DCM_P2POOL_CONF": "p2pool_conf",
    "DCM_LOG_LEVEL": "log_level",
    "DCM_LOG_FILE": "log_file",
}

_KNOWN_KEYS = frozenset(ENV_OVERRIDES.values())


def load_raw_config(path: Path) -> Dict[str, Any]:
    """
    Load raw settings from a JSON or YAML file.

    Args:
        path: Path to settings file (.json, .yaml, or .yml)

    Returns:
        Dictionary with raw settings

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is unsupported, the content is not valid
            JSON/YAML, or the top level is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    suffix = path.suffix.lower()
    content = path.read_text(encoding="utf-8")

    if suffix in {".yaml", ".yml"}:
        try:
            raw = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in settings file {path}: {exc}") from exc
    elif suffix == ".json":
        raw = json.loads(content) if content.strip() else {}
    else:
        raise ValueError(
            f"Unsupported settings format: {suffix}. "
            f"Use .json, .yaml, or .yml"
        )

    if not isinstance(raw, dict):
        raise ValueError(f"Settings file must contain a mapping at the top level: {path}")
    return raw


def apply_env_overrides(raw: Dict[str, Any], environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Return a copy of ``raw`` with ``DCM_*`` environment variables applied."""
    env = os.environ if environ is None else environ
    merged = dict(raw)
    for var, key in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            merged[key] = value
    return merged


def build_config_from_raw(raw: Dict[str, Any], path: Optional[Path] = None) -> DCMConfig:
    """
    Build a validated ``DCMConfig`` from a raw dictionary.

    Unknown keys are ignored with a warning.
    """
    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))

    config = DCMConfig(
        start_dir=raw.get("start_dir"),
        default_role=raw.get("default_role", "bitcoin"),
        bitcoin_conf=raw.get("bitcoin_conf"),
        p2pool_conf=raw.get("p2pool_conf"),
        log_level=raw.get("log_level", "INFO"),
        log_file=raw.get("log_file"),
        config_path=path,
    )
    config.validate()
    return config


def load_config_from_file(path: Path | str) -> DCMConfig:
    """
    Load settings from an explicit file.

    Also loads environment variables from a ``.env`` file if present.
    """
    load_dotenv()
    settings_path = Path(path).expanduser().resolve()
    raw = load_raw_config(settings_path)
    return build_config_from_raw(apply_env_overrides(raw), settings_path)


def load_config(path: Optional[Path | str] = None) -> DCMConfig:
    """
    Load settings from ``path``, the default settings file, or defaults.

    An explicit ``path`` must exist. Without one, the first settings file in
    the DCM folder is used when present; otherwise defaults plus environment
    overrides apply.
    """
    if path is not None:
        return load_config_from_file(path)

    found = find_settings_file()
    if found is not None:
        logger.debug("Using settings file %s", found)
        return load_config_from_file(found)

    load_dotenv()
    return build_config_from_raw(apply_env_overrides({}))
