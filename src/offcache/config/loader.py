"""YAML manifest loading and EngineConfig construction."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from offcache.config.schema import (
    CacheConfig,
    EngineConfig,
    NetworkConfig,
    RefreshConfig,
    RegionNames,
)
from offcache.errors.exceptions import ConfigError


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load any YAML file safely."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ConfigError(f"Expected YAML mapping, got {type(raw).__name__} in {path}")

    return raw


def load_manifest_yaml(path: str | Path) -> list[str]:
    """Load a seed manifest file: a top-level ``manifest`` list of URLs."""
    raw = load_yaml(path)
    manifest = raw.get("manifest")
    if not isinstance(manifest, list) or not all(isinstance(u, str) for u in manifest):
        raise ConfigError(f"Invalid manifest YAML: 'manifest' must be a list of URLs in {path}")
    return manifest


def build_engine_config(config: dict[str, Any]) -> EngineConfig:
    """Turn a flat merged config dict into a validated EngineConfig."""
    manifest = config.get("seed_manifest")
    manifest_file = config.get("seed_manifest_file")
    if manifest_file:
        manifest = load_manifest_yaml(manifest_file)

    db_path = config.get("cache_db_path")

    try:
        return EngineConfig(
            origin=config["origin"],
            regions=RegionNames(
                version=config["cache_version"],
                assets=config["cache_assets"],
                images=config["cache_images"],
            ),
            seed_manifest=manifest if manifest is not None else [],
            seed_region=config["seed_region"],
            refresh=RefreshConfig(tag=config["refresh_tag"], url=config["refresh_url"]),
            network=NetworkConfig(
                timeout_seconds=config["network_timeout"],
                max_attempts=config["network_max_attempts"],
            ),
            cache=CacheConfig(
                backend=config["cache_backend"],
                db_path=Path(db_path) if db_path else None,
            ),
            strategies=config.get("strategies") or {},
        )
    except KeyError as e:
        raise ConfigError(f"Missing config key: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
