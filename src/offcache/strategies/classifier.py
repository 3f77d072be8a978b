"""Request classification — maps a request to the class that picks its strategy."""

from __future__ import annotations

from urllib.parse import urlsplit

from offcache.types import RequestClass, RequestDescriptor

_STATIC_ASSET_SUFFIXES = (".js", ".css", ".woff", ".woff2")
_PAGE_SUFFIX = ".html"
_DATA_SEGMENT = "/data/"
_DATA_HOST_MARKER = "github.com"
_IMAGE_DESTINATION = "image"


def classify(request: RequestDescriptor) -> RequestClass:
    """Classify a request. Pure and total; the first matching rule wins.

    1. static asset by path suffix (.js, .css, .woff, .woff2)
    2. page or data: .html path, a /data/ segment, or a github.com URL
    3. image by destination hint
    4. everything else
    """
    try:
        path = urlsplit(request.url).path
    except ValueError:
        # Unparseable URL, e.g. an unterminated IPv6 host
        return RequestClass.OTHER

    if path.endswith(_STATIC_ASSET_SUFFIXES):
        return RequestClass.STATIC_ASSET

    if (
        path.endswith(_PAGE_SUFFIX)
        or _DATA_SEGMENT in path
        or _DATA_HOST_MARKER in request.url
    ):
        return RequestClass.PAGE_OR_DATA

    if request.destination == _IMAGE_DESTINATION:
        return RequestClass.IMAGE

    return RequestClass.OTHER
