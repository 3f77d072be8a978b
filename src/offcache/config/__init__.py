"""Configuration — defaults, layered sources and validated engine settings."""

from offcache.config.hierarchy import load_config_hierarchy
from offcache.config.loader import build_engine_config, load_manifest_yaml
from offcache.config.schema import EngineConfig, RegionNames

__all__ = [
    "EngineConfig",
    "RegionNames",
    "build_engine_config",
    "load_config_hierarchy",
    "load_manifest_yaml",
]
