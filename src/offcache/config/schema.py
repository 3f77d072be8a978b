"""Pydantic models for engine configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from offcache.config import defaults
from offcache.types import RegionPurpose, RequestClass, StrategyName


class RegionNames(BaseModel):
    """Versioned names of the three regions the current deploy recognizes."""

    version: str = defaults.DEFAULT_CACHE_VERSION
    assets: str = defaults.DEFAULT_CACHE_ASSETS
    images: str = defaults.DEFAULT_CACHE_IMAGES

    def for_purpose(self, purpose: RegionPurpose) -> str:
        return getattr(self, purpose.value)

    @property
    def known(self) -> frozenset[str]:
        return frozenset({self.version, self.assets, self.images})


class RefreshConfig(BaseModel):
    tag: str = defaults.DEFAULT_REFRESH_TAG
    url: str = defaults.DEFAULT_REFRESH_URL


class NetworkConfig(BaseModel):
    timeout_seconds: float = Field(default=defaults.DEFAULT_NETWORK_TIMEOUT, gt=0)
    max_attempts: int = Field(default=defaults.DEFAULT_NETWORK_MAX_ATTEMPTS, ge=1)


class CacheConfig(BaseModel):
    backend: str = defaults.DEFAULT_CACHE_BACKEND
    db_path: Path | None = None

    @field_validator("backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        if value not in ("memory", "disk"):
            raise ValueError(f"cache backend must be 'memory' or 'disk', got '{value}'")
        return value


def _default_strategies() -> dict[RequestClass, StrategyName]:
    return {
        RequestClass.STATIC_ASSET: StrategyName.CACHE_FIRST,
        RequestClass.PAGE_OR_DATA: StrategyName.NETWORK_FIRST,
        RequestClass.IMAGE: StrategyName.CACHE_FIRST_IMAGE_FALLBACK,
        RequestClass.OTHER: StrategyName.NETWORK_FIRST_DEFAULT,
    }


class EngineConfig(BaseModel):
    origin: str = defaults.DEFAULT_ORIGIN
    regions: RegionNames = Field(default_factory=RegionNames)
    seed_manifest: list[str] = Field(
        default_factory=lambda: list(defaults.DEFAULT_SEED_MANIFEST)
    )
    seed_region: RegionPurpose = RegionPurpose.ASSETS
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    strategies: dict[RequestClass, StrategyName] = Field(default_factory=_default_strategies)

    @field_validator("strategies")
    @classmethod
    def _all_classes_covered(
        cls, value: dict[RequestClass, StrategyName]
    ) -> dict[RequestClass, StrategyName]:
        merged = _default_strategies()
        merged.update(value)
        return merged
