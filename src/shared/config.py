"""Configuration management for the Zendesk MCP Server.

Supports a YAML configuration file and environment variable overrides.
Precedence is environment variable > config file > default. Configuration
is loaded once and cached.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Optional
from urllib.parse import urlsplit

import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class FileBackedSettings(BaseSettings):
    """
    Settings section whose constructor arguments come from the config file.

    Environment variables are consulted before constructor arguments, so a
    value in the environment always wins over the same value in the file.
    """

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings


class ZendeskSettings(FileBackedSettings):
    """Zendesk Help Center credentials and client options."""
    subdomain: str = Field(default="", description="Zendesk subdomain ({subdomain}.zendesk.com)")
    email: str = Field(default="", description="Agent email used for API token auth")
    api_token: str = Field(default="", description="Zendesk API token")
    base_url: Optional[str] = Field(default=None, description="Override for the API base URL")
    timeout_seconds: Optional[float] = Field(default=None, gt=0, description="Upstream timeout; none waits forever")

    model_config = SettingsConfigDict(
        env_prefix="ZENDESK_",
        env_file=".env",
        extra="ignore"
    )

    @property
    def resolved_base_url(self) -> str:
        """Return the API base URL for the configured subdomain."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return f"https://{self.subdomain}.zendesk.com"


class ServerSettings(FileBackedSettings):
    """Transport configuration."""
    mode: Literal["stdio", "http"] = Field(default="stdio")
    host: str = Field(default="0.0.0.0")
    port: int = Field(
        default=8080,
        validation_alias=AliasChoices("mcp_server_port", "port"),
    )
    url: Optional[str] = Field(default=None, description="Listen URL; overrides host and port")

    model_config = SettingsConfigDict(
        env_prefix="MCP_SERVER_",
        env_file=".env",
        extra="ignore"
    )

    def bind_address(self) -> tuple[str, int]:
        """Return the (host, port) to listen on, preferring the URL when set."""
        if self.url:
            parts = urlsplit(self.url)
            return parts.hostname or self.host, parts.port or self.port
        return self.host, self.port


class CacheSettings(FileBackedSettings):
    """Time-to-live per cached operation, in seconds."""
    search_ttl_seconds: float = Field(default=300, gt=0)
    article_ttl_seconds: float = Field(default=900, gt=0)
    list_ttl_seconds: float = Field(default=120, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="MCP_CACHE_",
        env_file=".env",
        extra="ignore"
    )


class Settings(FileBackedSettings):
    """Main application settings."""
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    zendesk: ZendeskSettings = Field(default_factory=ZendeskSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    model_config = SettingsConfigDict(
        env_prefix="MCP_",
        env_file=".env",
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file, letting the environment override it."""
        data = load_yaml_config(path)

        return cls(
            zendesk=ZendeskSettings(**(data.pop("zendesk", None) or {})),
            server=ServerSettings(**(data.pop("server", None) or {})),
            cache=CacheSettings(**(data.pop("cache", None) or {})),
            **data,
        )


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file."""
    path = Path(path)
    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    config_path = os.environ.get("MCP_CONFIG_PATH", "config/settings.yaml")
    return Settings.from_yaml(config_path)
