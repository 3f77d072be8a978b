"""Synthesized responses returned when neither cache nor network can answer."""

from __future__ import annotations

from offcache.types import Response

SERVICE_UNAVAILABLE = 503
SERVICE_UNAVAILABLE_TEXT = "Service Unavailable"

ASSET_ERROR_MESSAGE = "Ошибка загрузки ресурса"
OFFLINE_USE_CACHE_MESSAGE = "Вы оффлайн. Используйте кэшированные данные."
OFFLINE_MESSAGE = "Вы оффлайн."

PLACEHOLDER_SVG = (
    '<svg width="100" height="100" xmlns="http://www.w3.org/2000/svg">'
    '<rect width="100" height="100" fill="#ddd"/>'
    '<text x="50" y="50" text-anchor="middle" dy=".3em" fill="#999" font-size="12">'
    "No Image</text></svg>"
)
PLACEHOLDER_CONTENT_TYPE = "image/svg+xml"


def service_unavailable(message: str) -> Response:
    """A 503 with a plain-text explanation."""
    return Response(
        status=SERVICE_UNAVAILABLE,
        status_text=SERVICE_UNAVAILABLE_TEXT,
        headers={"Content-Type": "text/plain;charset=UTF-8"},
        body=message.encode("utf-8"),
    )


def asset_error() -> Response:
    return service_unavailable(ASSET_ERROR_MESSAGE)


def offline_use_cache() -> Response:
    return service_unavailable(OFFLINE_USE_CACHE_MESSAGE)


def offline() -> Response:
    return service_unavailable(OFFLINE_MESSAGE)


def image_placeholder() -> Response:
    """A valid 100x100 "No Image" SVG, served as a success."""
    return Response(
        status=200,
        status_text="OK",
        headers={"Content-Type": PLACEHOLDER_CONTENT_TYPE},
        body=PLACEHOLDER_SVG.encode("utf-8"),
    )
