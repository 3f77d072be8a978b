"""Async network fetcher built on httpx."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from offcache.cache.keys import normalize_url
from offcache.errors.exceptions import NetworkError
from offcache.types import RequestDescriptor, Response

logger = logging.getLogger(__name__)

# Headers that describe the wire encoding, not the stored body
_HOP_BY_HOP_HEADERS = {"content-encoding", "transfer-encoding", "connection", "keep-alive"}


class Fetcher(Protocol):
    """Anything that turns a request into a Response or raises NetworkError."""

    async def fetch(self, request: RequestDescriptor) -> Response: ...


class AsyncFetcher:
    """Performs GET requests against the network.

    Every resolved HTTP exchange (any status) is returned as a Response.
    Transport failures and timeouts raise ``NetworkError`` after
    ``max_attempts`` tries.
    """

    def __init__(
        self,
        origin: str | None = None,
        timeout: float = 10.0,
        max_attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._origin = origin
        self._max_attempts = max_attempts
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )
        self.calls = 0

    async def fetch(self, request: RequestDescriptor) -> Response:
        try:
            url = normalize_url(request.url, self._origin)
        except ValueError as e:
            raise NetworkError(
                f"Invalid URL {request.url!r}: {e}",
                url=request.url,
                error_type="invalid_url",
                original=e,
            ) from e

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(httpx.TransportError),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
                stop=stop_after_attempt(self._max_attempts),
                reraise=True,
            ):
                with attempt:
                    self.calls += 1
                    raw = await self._client.request(request.method.upper(), url)
        except httpx.TimeoutException as e:
            logger.warning("Network timeout for %s: %s", url, e)
            raise NetworkError(
                f"Timed out fetching {url}", url=url, error_type="timeout", original=e
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Network error for %s: %s", url, e)
            raise NetworkError(f"Failed to fetch {url}: {e}", url=url, original=e) from e

        logger.debug("Fetched %s → %d", url, raw.status_code)
        return _to_response(raw)

    async def close(self) -> None:
        await self._client.aclose()


def _to_response(raw: httpx.Response) -> Response:
    headers = {
        key: value
        for key, value in raw.headers.items()
        if key.lower() not in _HOP_BY_HOP_HEADERS
    }
    return Response(
        status=raw.status_code,
        status_text=raw.reason_phrase,
        headers=headers,
        body=raw.content,
    )
