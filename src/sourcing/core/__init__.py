"""
Core Utilities Package

Shared utilities used across the matching and delivery domains.

This package provides:
- Currency handling with integer fen arithmetic
- Configuration management for environment-specific settings
- JSON report helpers
- An explicit snapshot cache with injectable clock
"""

from .cache import SnapshotCache
from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    get_output_dir,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    fen_to_yuan_str,
    safe_currency_to_fen,
)
from .json_utils import format_json, read_json, write_json
from .money import Money

__all__ = [
    "Config",
    "Environment",
    "Money",
    "SnapshotCache",
    "fen_to_yuan_str",
    "format_json",
    "get_config",
    "get_data_dir",
    "get_output_dir",
    "is_production",
    "is_test",
    "read_json",
    "reload_config",
    "safe_currency_to_fen",
    "write_json",
]
