"""
Settings management for Daemon Config Manager.

This package provides the typed settings model and its loader.
"""

from .models import DCMConfig
from .loader import load_config, load_config_from_file

__all__ = [
    "DCMConfig",
    "load_config",
    "load_config_from_file",
]
