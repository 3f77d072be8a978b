import httpx
import pytest

from offcache.cache.manager import CacheManager
from offcache.cache.memory import MemoryCacheStore
from offcache.concurrency.tasks import DetachedTasks
from offcache.config.schema import EngineConfig
from offcache.core import OfflineEngine
from offcache.network.client import AsyncFetcher

ORIGIN = "http://localhost:8000"


class FakeNetwork:
    """Routes requests to canned responses; can be switched offline."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, bytes, dict[str, str]]] = {}
        self.offline = False
        self.fail_urls: set[str] = set()
        self.calls: list[str] = []

    def route(
        self,
        url: str,
        body: bytes | str = b"",
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.routes[_absolute(url)] = (status, body, headers or {})

    def fail(self, url: str) -> None:
        self.fail_urls.add(_absolute(url))

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        if self.offline or url in self.fail_urls:
            raise httpx.ConnectError("network unreachable", request=request)
        if url not in self.routes:
            return httpx.Response(404, content=b"not found")
        status, body, headers = self.routes[url]
        return httpx.Response(status, content=body, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class BrokenStore(MemoryCacheStore):
    """Memory store whose selected operations raise like a failing backend."""

    def __init__(self, fail_on: set[str] | None = None, fail_regions: set[str] | None = None):
        super().__init__()
        self.fail_on = fail_on or set()
        self.fail_regions = fail_regions

    def _check(self, operation: str, region: str | None = None) -> None:
        if operation not in self.fail_on:
            return
        if self.fail_regions is not None and region not in self.fail_regions:
            return
        raise OSError(f"disk I/O error during {operation}")

    async def match(self, region, key):
        self._check("match", region)
        return await super().match(region, key)

    async def put(self, region, entry):
        self._check("put", region)
        await super().put(region, entry)

    async def regions(self):
        self._check("regions")
        return await super().regions()

    async def delete_region(self, region):
        self._check("delete_region", region)
        return await super().delete_region(region)


def _absolute(url: str) -> str:
    if url.startswith("http"):
        return url
    return ORIGIN + url


@pytest.fixture
def network():
    return FakeNetwork()


@pytest.fixture
async def fetcher(network):
    f = AsyncFetcher(origin=ORIGIN, transport=network.transport)
    yield f
    await f.close()


@pytest.fixture
def cache():
    return CacheManager(MemoryCacheStore(), origin=ORIGIN)


@pytest.fixture
def tasks():
    return DetachedTasks()


@pytest.fixture
def engine_config():
    return EngineConfig(
        origin=ORIGIN,
        seed_manifest=["/", "/index.html", "/app.js"],
    )


@pytest.fixture
async def engine(engine_config, cache, fetcher):
    eng = OfflineEngine(config=engine_config, cache=cache, fetcher=fetcher)
    yield eng
    await eng.close()


@pytest.fixture
def broken_cache():
    """Factory: a CacheManager whose backend fails on the given operations."""

    def _make(*operations: str, regions: set[str] | None = None) -> CacheManager:
        return CacheManager(BrokenStore(set(operations), regions), origin=ORIGIN)

    return _make
