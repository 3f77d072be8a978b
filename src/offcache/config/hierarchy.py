"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.offcache/config.yaml)
  3. Project config   (./offcache.yaml, searched upward from cwd)
  4. Environment variables (OFFCACHE_<KEY>)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from offcache.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".offcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "offcache.yaml"

_ENV_PREFIX = "OFFCACHE_"

# Scalar keys settable from the environment as OFFCACHE_<KEY upper-cased>
_ENV_KEYS = (
    "origin",
    "cache_version",
    "cache_assets",
    "cache_images",
    "cache_backend",
    "cache_db_path",
    "seed_region",
    "refresh_tag",
    "refresh_url",
    "network_timeout",
    "network_max_attempts",
    "log_level",
)

_NUMERIC_KEYS: dict[str, type] = {
    "network_timeout": float,
    "network_max_attempts": int,
}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Resolve the flat config dict from every source.

    ``None`` runtime values mean "not given" and never override.
    """
    config = get_defaults()
    for path in _config_files():
        config.update(_load_yaml_config(path) or {})
    config.update(_load_env_vars())
    config.update({k: v for k, v in runtime_overrides.items() if v is not None})
    return config


def _config_files() -> Iterator[Path]:
    yield _GLOBAL_CONFIG_PATH
    # Nearest project file wins; parents are not merged
    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        candidate = directory / _PROJECT_CONFIG_NAME
        if candidate.is_file():
            yield candidate
            return


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Read one config file; unreadable or non-mapping files are skipped."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Skipping config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring", path)
        return None
    return data


def _load_env_vars() -> dict[str, Any]:
    found: dict[str, Any] = {}
    for key in _ENV_KEYS:
        raw = os.environ.get(_ENV_PREFIX + key.upper())
        if raw is not None:
            found[key] = _coerce_env_value(key, raw)
    return found


def _coerce_env_value(key: str, value: str) -> Any:
    """Parse numeric keys; anything unparseable is left for schema validation."""
    cast = _NUMERIC_KEYS.get(key)
    if cast is None:
        return value
    try:
        return cast(value)
    except ValueError:
        logger.warning("OFFCACHE_%s is not a valid %s: %r", key.upper(), cast.__name__, value)
        return value
