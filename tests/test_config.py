"""Tests for configuration loading."""

import pytest

from shared.config import ServerSettings, Settings, get_settings


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "log_level: DEBUG\n"
        "zendesk:\n"
        "  subdomain: from-file\n"
        "  email: file@acme.example\n"
        "server:\n"
        "  mode: http\n"
        "  port: 9000\n"
        "cache:\n"
        "  list_ttl_seconds: 30\n"
    )
    return path


class TestSettings:
    """Tests for settings precedence: environment > file > default."""

    def test_defaults_without_file(self, tmp_path):
        settings = Settings.from_yaml(tmp_path / "missing.yaml")

        assert settings.zendesk.subdomain == ""
        assert settings.server.mode == "stdio"
        assert settings.server.port == 8080
        assert settings.cache.search_ttl_seconds == 300
        assert settings.cache.article_ttl_seconds == 900
        assert settings.cache.list_ttl_seconds == 120

    def test_file_overrides_defaults(self, config_file):
        settings = Settings.from_yaml(config_file)

        assert settings.log_level == "DEBUG"
        assert settings.zendesk.subdomain == "from-file"
        assert settings.zendesk.resolved_base_url == "https://from-file.zendesk.com"
        assert settings.server.mode == "http"
        assert settings.server.port == 9000
        assert settings.cache.list_ttl_seconds == 30
        assert settings.cache.search_ttl_seconds == 300

    def test_environment_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("ZENDESK_SUBDOMAIN", "from-env")
        monkeypatch.setenv("ZENDESK_API_TOKEN", "env-token")
        monkeypatch.setenv("MCP_SERVER_MODE", "stdio")
        monkeypatch.setenv("MCP_CACHE_LIST_TTL_SECONDS", "15")
        monkeypatch.setenv("MCP_LOG_LEVEL", "WARNING")

        settings = Settings.from_yaml(config_file)

        assert settings.zendesk.subdomain == "from-env"
        assert settings.zendesk.email == "file@acme.example"
        assert settings.zendesk.api_token == "env-token"
        assert settings.server.mode == "stdio"
        assert settings.cache.list_ttl_seconds == 15
        assert settings.log_level == "WARNING"

    def test_port_environment_variable(self, config_file, monkeypatch):
        monkeypatch.setenv("PORT", "7000")

        assert Settings.from_yaml(config_file).server.port == 7000

    def test_base_url_override(self, monkeypatch):
        monkeypatch.setenv("ZENDESK_BASE_URL", "http://localhost:9999/")

        settings = Settings.from_yaml("missing.yaml")

        assert settings.zendesk.resolved_base_url == "http://localhost:9999"

    def test_get_settings_reads_config_path(self, config_file, monkeypatch):
        monkeypatch.setenv("MCP_CONFIG_PATH", str(config_file))
        get_settings.cache_clear()

        try:
            assert get_settings().zendesk.subdomain == "from-file"
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestServerSettings:
    def test_bind_address_from_host_and_port(self):
        assert ServerSettings(host="127.0.0.1", port=8123).bind_address() == ("127.0.0.1", 8123)

    def test_bind_address_prefers_url(self):
        settings = ServerSettings(url="http://localhost:5005")

        assert settings.bind_address() == ("localhost", 5005)
