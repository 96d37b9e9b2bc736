"""Configuration constants and utilities for the daily URL hit report."""
from __future__ import annotations
import yaml
from pathlib import Path
from typing import Dict
from enum import Enum

from .exceptions import ConfigError


# Record layout: <epoch_seconds>|<url>
RECORD_SEPARATOR = '|'

SECONDS_PER_DAY = 86400
GMT_SUFFIX = 'GMT'

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

DEFAULT_ENCODING = 'utf-8'

# DuckDB export defaults
DEFAULT_EXPORT_DB = 'url_hits.duckdb'
DEFAULT_EXPORT_TABLE = 'url_hits_daily'

CONFIG_KEYS = ('db', 'table', 'encoding')


class DateFormat(Enum):
    """Supported renderings of a date header (before the GMT suffix)."""
    MONTH_FIRST = "{month:02d}/{day:02d}/{year:04d}"
    DAY_FIRST = "{day:02d}/{month:02d}/{year:04d}"


DEFAULT_DATE_FORMAT = DateFormat.MONTH_FIRST


def load_report_config(cfg_path: Path) -> Dict:
    """Load an optional YAML config used by the export command.

    Unknown keys are rejected so typos do not silently fall back to defaults.
    """
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Failed to read config file {cfg_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {cfg_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {cfg_path} must contain a mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigError(f"Unknown config keys in {cfg_path}: {', '.join(map(str, unknown))}")

    for key, value in data.items():
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Config key {key!r} in {cfg_path} must be a non-empty string, got {value!r}")

    return data
