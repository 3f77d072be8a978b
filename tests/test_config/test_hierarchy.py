"""Tests for config hierarchy."""

import pytest

from offcache.config import hierarchy
from offcache.config.hierarchy import (
    _coerce_env_value,
    _load_yaml_config,
    load_config_hierarchy,
)


@pytest.fixture(autouse=True)
def _no_global_config(tmp_path, monkeypatch):
    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "missing" / "config.yaml")
    monkeypatch.chdir(tmp_path)


class TestLoadConfigHierarchy:
    def test_returns_defaults(self):
        config = load_config_hierarchy()
        assert config["cache_version"] == "techflow-v1.2"
        assert config["refresh_tag"] == "sync-news"
        assert config["cache_backend"] == "memory"

    def test_runtime_overrides(self):
        config = load_config_hierarchy(cache_version="techflow-v2.0", network_max_attempts=3)
        assert config["cache_version"] == "techflow-v2.0"
        assert config["network_max_attempts"] == 3

    def test_none_overrides_ignored(self):
        config = load_config_hierarchy(origin=None)
        assert config["origin"] == "http://localhost:8000"  # Default preserved

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("OFFCACHE_CACHE_ASSETS", "techflow-assets-v2")
        config = load_config_hierarchy()
        assert config["cache_assets"] == "techflow-assets-v2"

    def test_runtime_beats_env(self, monkeypatch):
        monkeypatch.setenv("OFFCACHE_ORIGIN", "http://env.test")
        config = load_config_hierarchy(origin="http://runtime.test")
        assert config["origin"] == "http://runtime.test"  # Runtime wins

    def test_env_numeric_coercion(self, monkeypatch):
        monkeypatch.setenv("OFFCACHE_NETWORK_TIMEOUT", "2.5")
        config = load_config_hierarchy()
        assert config["network_timeout"] == 2.5
        assert isinstance(config["network_timeout"], float)

    def test_project_config(self, tmp_path):
        (tmp_path / "offcache.yaml").write_text(
            "cache_version: techflow-v1.3\nseed_manifest:\n  - /\n  - /index.html\n"
        )
        config = load_config_hierarchy()
        assert config["cache_version"] == "techflow-v1.3"
        assert config["seed_manifest"] == ["/", "/index.html"]

    def test_project_config_found_from_subdir(self, tmp_path, monkeypatch):
        (tmp_path / "offcache.yaml").write_text("refresh_tag: sync-feed\n")
        sub = tmp_path / "a" / "b"
        sub.mkdir(parents=True)
        monkeypatch.chdir(sub)
        assert load_config_hierarchy()["refresh_tag"] == "sync-feed"

    def test_nearest_project_config_wins(self, tmp_path, monkeypatch):
        (tmp_path / "offcache.yaml").write_text("refresh_tag: sync-outer\ncache_version: outer\n")
        inner = tmp_path / "inner"
        inner.mkdir()
        (inner / "offcache.yaml").write_text("refresh_tag: sync-inner\n")
        monkeypatch.chdir(inner)

        config = load_config_hierarchy()
        assert config["refresh_tag"] == "sync-inner"
        assert config["cache_version"] == "techflow-v1.2"

    def test_global_config(self, tmp_path, monkeypatch):
        global_path = tmp_path / "global.yaml"
        global_path.write_text("origin: http://global.test\n")
        monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", global_path)
        assert load_config_hierarchy()["origin"] == "http://global.test"


class TestLoadYamlConfig:
    def test_loads_valid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("key: value\n")
        assert _load_yaml_config(path) == {"key": "value"}

    def test_returns_none_for_missing(self, tmp_path):
        assert _load_yaml_config(tmp_path / "nonexistent.yaml") is None

    def test_returns_none_for_non_dict(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- item1\n- item2\n")
        assert _load_yaml_config(path) is None

    def test_returns_none_for_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("key: [unclosed\n")
        assert _load_yaml_config(path) is None


class TestCoerceEnvValue:
    def test_int(self):
        assert _coerce_env_value("network_max_attempts", "3") == 3

    def test_float(self):
        assert _coerce_env_value("network_timeout", "1.5") == 1.5

    def test_bad_number_kept_as_string(self):
        assert _coerce_env_value("network_max_attempts", "many") == "many"

    def test_plain_string(self):
        assert _coerce_env_value("origin", "http://x.test") == "http://x.test"
