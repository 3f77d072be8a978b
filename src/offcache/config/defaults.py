"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Origin that relative request URLs resolve against
DEFAULT_ORIGIN = "http://localhost:8000"

# Region names; bump a name on deploy to retire its previous generation
DEFAULT_CACHE_VERSION = "techflow-v1.2"
DEFAULT_CACHE_ASSETS = "techflow-assets-v1"
DEFAULT_CACHE_IMAGES = "techflow-images-v1"

# Default cache settings
DEFAULT_CACHE_BACKEND = "memory"

# Resources fetched and stored on install
DEFAULT_SEED_MANIFEST = [
    "/",
    "/index.html",
    "/miniapp.html",
    "/admin.html",
    "https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.4.0/css/all.min.css",
    "https://unpkg.com/vue@3/dist/vue.global.js",
]
DEFAULT_SEED_REGION = "assets"

# Background refresh
DEFAULT_REFRESH_TAG = "sync-news"
DEFAULT_REFRESH_URL = "/data/news.json"

# Network settings
DEFAULT_NETWORK_TIMEOUT = 10.0
DEFAULT_NETWORK_MAX_ATTEMPTS = 1

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "origin": DEFAULT_ORIGIN,
        "cache_version": DEFAULT_CACHE_VERSION,
        "cache_assets": DEFAULT_CACHE_ASSETS,
        "cache_images": DEFAULT_CACHE_IMAGES,
        "cache_backend": DEFAULT_CACHE_BACKEND,
        "cache_db_path": None,
        "seed_manifest": list(DEFAULT_SEED_MANIFEST),
        "seed_region": DEFAULT_SEED_REGION,
        "refresh_tag": DEFAULT_REFRESH_TAG,
        "refresh_url": DEFAULT_REFRESH_URL,
        "network_timeout": DEFAULT_NETWORK_TIMEOUT,
        "network_max_attempts": DEFAULT_NETWORK_MAX_ATTEMPTS,
        "log_level": DEFAULT_LOG_LEVEL,
    }
