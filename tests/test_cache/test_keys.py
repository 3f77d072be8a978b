"""Tests for cache key generation."""

from offcache.cache.keys import generate_cache_key, normalize_url, url_from_key


class TestNormalizeUrl:
    def test_relative_joined_to_origin(self):
        assert normalize_url("/index.html", "http://localhost:8000") == (
            "http://localhost:8000/index.html"
        )

    def test_origin_trailing_slash(self):
        assert normalize_url("/a.js", "http://localhost:8000/") == "http://localhost:8000/a.js"

    def test_absolute_kept(self):
        url = "https://unpkg.com/vue@3/dist/vue.global.js"
        assert normalize_url(url, "http://localhost:8000") == url

    def test_fragment_dropped(self):
        assert normalize_url("http://x.test/page.html#top") == "http://x.test/page.html"

    def test_query_kept(self):
        assert normalize_url("http://x.test/data/a.json?v=2") == "http://x.test/data/a.json?v=2"

    def test_root_gets_slash(self):
        assert normalize_url("http://x.test") == "http://x.test/"


class TestGenerateCacheKey:
    def test_method_prefix(self):
        assert generate_cache_key("http://x.test/a.css") == "GET http://x.test/a.css"

    def test_method_uppercased(self):
        assert generate_cache_key("http://x.test/a.css", method="get").startswith("GET ")

    def test_relative_and_absolute_collide(self):
        origin = "http://localhost:8000"
        assert generate_cache_key("/", origin=origin) == generate_cache_key(
            "http://localhost:8000/", origin=origin
        )

    def test_url_from_key(self):
        key = generate_cache_key("http://x.test/a.css")
        assert url_from_key(key) == "http://x.test/a.css"
