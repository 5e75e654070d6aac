"""
Tests for config.py
===================

Tests for settings resolution and sources file loading.
"""

import json

import pytest

from storydocs.config import ConfigError, ServerSettings, load_sources
from storydocs.schemas import OutputFormat


def write_sources(tmp_path, data):
    path = tmp_path / "sources.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return path


class TestLoadSources:
    """Tests for load_sources."""

    def test_valid(self, tmp_path):
        path = write_sources(tmp_path, [
            {"id": "local", "title": "Local"},
            {"id": "remote", "title": "Remote", "url": "https://remote.example.com"},
        ])

        sources = load_sources(path)

        assert [source.id for source in sources] == ["local", "remote"]
        assert sources[0].is_local
        assert not sources[1].is_local

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_sources(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_sources(write_sources(tmp_path, "[{"))

    def test_schema_error(self, tmp_path):
        with pytest.raises(ConfigError, match="0.title"):
            load_sources(write_sources(tmp_path, [{"id": "x"}]))

    def test_duplicate_ids(self, tmp_path):
        path = write_sources(tmp_path, [{"id": "a", "title": "A"}, {"id": "a", "title": "Again"}])
        with pytest.raises(ConfigError, match="Duplicate source id 'a'"):
            load_sources(path)


class TestServerSettings:
    """Tests for ServerSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("STORYDOCS_LOG_FILE")
        settings = ServerSettings.from_env()

        assert settings.format == OutputFormat.MARKDOWN
        assert settings.component_manifest_path is None
        assert settings.sources == []
        assert not settings.is_multi_source
        assert settings.log_file == "/tmp/storydocs_mcp_server.log"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("STORYDOCS_FORMAT", "xml")
        monkeypatch.setenv("STORYDOCS_COMPONENT_MANIFEST", "./components.json")
        monkeypatch.setenv("STORYDOCS_MANIFEST_URL", "http://localhost:6006/mcp")

        settings = ServerSettings.from_env()

        assert settings.format == OutputFormat.XML
        assert settings.component_manifest_path == "./components.json"
        assert settings.manifest_url == "http://localhost:6006/mcp"

    def test_overrides_win_and_none_is_ignored(self, monkeypatch):
        monkeypatch.setenv("STORYDOCS_FORMAT", "xml")
        monkeypatch.setenv("STORYDOCS_DOCS_MANIFEST", "./docs.json")

        settings = ServerSettings.from_env(format="markdown", docs_manifest_path=None)

        assert settings.format == OutputFormat.MARKDOWN
        assert settings.docs_manifest_path == "./docs.json"

    def test_sources_file(self, tmp_path, monkeypatch):
        path = write_sources(tmp_path, [
            {"id": "local", "title": "Local"},
            {"id": "remote", "title": "Remote", "url": "https://remote.example.com"},
        ])
        monkeypatch.setenv("STORYDOCS_SOURCES_FILE", str(path))

        settings = ServerSettings.from_env()

        assert len(settings.sources) == 2
        assert settings.is_multi_source

    def test_only_local_sources_is_single_source(self, tmp_path):
        path = write_sources(tmp_path, [{"id": "local", "title": "Local"}])
        settings = ServerSettings.from_env(sources_file=str(path))
        assert not settings.is_multi_source

    def test_invalid_format(self):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            ServerSettings.from_env(format="yaml")
