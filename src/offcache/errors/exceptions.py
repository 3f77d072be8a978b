"""Custom exception hierarchy for offcache."""

from __future__ import annotations

from typing import Any


class OffcacheError(Exception):
    """Base exception for all offcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(OffcacheError):
    """Network failure — the fetch was rejected or timed out.

    Recovered locally by every strategy (cache lookup or synthesized response).
    """

    def __init__(
        self,
        message: str = "",
        url: str = "",
        error_type: str = "connection_error",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.error_type = error_type
        self.original = original


class CacheBackendError(OffcacheError):
    """Cache store read/write/delete was rejected by the backend.

    Treated as a miss in fallback paths; best-effort in write-through paths.
    """

    def __init__(
        self,
        message: str = "",
        region: str | None = None,
        operation: str = "read",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.region = region
        self.operation = operation
        self.original = original


class PopulateError(OffcacheError):
    """A seed resource could not be fetched during install."""

    def __init__(
        self,
        message: str = "",
        failed_urls: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.failed_urls = failed_urls or []


class RefreshError(OffcacheError):
    """Background refresh could not fetch or parse its resource."""

    def __init__(self, message: str = "", tag: str = "", url: str = "") -> None:
        super().__init__(message)
        self.tag = tag
        self.url = url


class ConfigError(OffcacheError):
    """Invalid configuration or manifest file."""
