"""Shared Pydantic models for offcache."""

from __future__ import annotations

import json
from enum import Enum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ── Enums ──


class RequestClass(StrEnum):
    STATIC_ASSET = "static-asset"
    PAGE_OR_DATA = "page-or-data"
    IMAGE = "image"
    OTHER = "other"


class StrategyName(StrEnum):
    CACHE_FIRST = "cache-first"
    NETWORK_FIRST = "network-first"
    CACHE_FIRST_IMAGE_FALLBACK = "cache-first-image-fallback"
    NETWORK_FIRST_DEFAULT = "network-first-default"


class RegionPurpose(StrEnum):
    VERSION = "version"
    ASSETS = "assets"
    IMAGES = "images"


class Signal(Enum):
    """Non-response outcomes of ``OfflineEngine.handle``."""

    PASS_THROUGH = "pass-through"


# ── Request / response ──


class RequestDescriptor(BaseModel):
    """Read-only description of an intercepted request."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: str = "GET"
    destination: str = ""

    @property
    def is_get(self) -> bool:
        return self.method.upper() == "GET"


class Response(BaseModel):
    """A response snapshot: live, cached, or synthesized."""

    status: int = 200
    status_text: str = "OK"
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def content_type(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value
        return ""

    def json(self) -> Any:  # type: ignore[override]
        return json.loads(self.body)

    def clone(self) -> Response:
        return self.model_copy(deep=True)
