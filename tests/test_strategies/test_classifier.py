"""Tests for request classification."""

import pytest

from offcache.strategies.classifier import classify
from offcache.types import RequestClass, RequestDescriptor


def _req(url: str, destination: str = "") -> RequestDescriptor:
    return RequestDescriptor(url=url, destination=destination)


class TestStaticAssets:
    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost:8000/app.js",
            "http://localhost:8000/styles/main.css",
            "https://cdn.test/fonts/icons.woff",
            "https://cdn.test/fonts/icons.woff2",
        ],
    )
    def test_suffixes(self, url):
        assert classify(_req(url)) == RequestClass.STATIC_ASSET

    def test_query_string_ignored(self):
        assert classify(_req("http://x.test/app.js?v=3")) == RequestClass.STATIC_ASSET

    def test_relative_url(self):
        assert classify(_req("/vendor/vue.global.js")) == RequestClass.STATIC_ASSET

    def test_wins_over_image_destination(self):
        assert classify(_req("http://x.test/foo.js", "image")) == RequestClass.STATIC_ASSET

    def test_wins_over_data_segment(self):
        assert classify(_req("http://x.test/data/loader.js")) == RequestClass.STATIC_ASSET

    def test_wins_over_github(self):
        url = "https://raw.githubusercontent.com/x/y/main/app.css"
        assert classify(_req(url)) == RequestClass.STATIC_ASSET


class TestPagesAndData:
    def test_html(self):
        assert classify(_req("http://x.test/index.html")) == RequestClass.PAGE_OR_DATA

    def test_data_segment(self):
        assert classify(_req("http://x.test/data/news.json")) == RequestClass.PAGE_OR_DATA

    def test_github_anywhere_in_url(self):
        url = "https://api.github.com/repos/owner/repo/releases"
        assert classify(_req(url)) == RequestClass.PAGE_OR_DATA

    def test_github_in_query(self):
        assert classify(_req("http://x.test/proxy?u=github.com")) == RequestClass.PAGE_OR_DATA

    def test_wins_over_image_destination(self):
        assert classify(_req("http://x.test/data/chart.png", "image")) == RequestClass.PAGE_OR_DATA

    def test_data_without_slashes_not_matched(self):
        assert classify(_req("http://x.test/metadata.json")) == RequestClass.OTHER


class TestImagesAndOther:
    def test_image_destination(self):
        assert classify(_req("http://x.test/logo.png", "image")) == RequestClass.IMAGE

    def test_image_extension_without_hint_is_other(self):
        assert classify(_req("http://x.test/logo.png")) == RequestClass.OTHER

    def test_root_is_other(self):
        assert classify(_req("http://x.test/")) == RequestClass.OTHER

    def test_unknown_destination_is_other(self):
        assert classify(_req("http://x.test/api/items", "script")) == RequestClass.OTHER

    def test_pure(self):
        req = _req("http://x.test/a.js", "image")
        assert classify(req) == classify(req)
        assert req.destination == "image"

    @pytest.mark.parametrize("url", ["http://[::1/page.html", "//[bad/app.js"])
    def test_unparseable_url_is_other(self, url):
        assert classify(_req(url, destination="image")) == RequestClass.OTHER
