import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from folio.lib.resolver import UrlTemplates

# Load .env file early so env vars are available for YAML interpolation
_env_file = Path(__file__).parent.parent / ".env"
load_dotenv(_env_file)

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def get_config_path() -> Path:
    """Path of the YAML config, overridable with FOLIO_CONFIG."""
    return Path(os.environ.get("FOLIO_CONFIG", Path.cwd() / "app.yaml"))


def load_app_config() -> dict:
    """Load and parse app.yaml with environment variable interpolation."""
    config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"app.yaml not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    return interpolate_env_vars(config or {})


class UpstreamConfig(BaseModel):
    """Blob-store endpoints used by the resolver and the asset proxy."""

    # "drive" or "module:ClassName"
    backend: str = "drive"
    media_base_url: str = "https://www.googleapis.com/drive/v3/files"
    view_template: str = UrlTemplates.view
    thumbnail_template: str = UrlTemplates.thumbnail
    preview_template: str = UrlTemplates.preview
    thumbnail_size: int = UrlTemplates.thumbnail_size
    # When set, direct view candidates point at this deployment's /asset route
    proxy_base_url: str | None = None

    def url_templates(self) -> UrlTemplates:
        templates = UrlTemplates(
            view=self.view_template,
            thumbnail=self.thumbnail_template,
            preview=self.preview_template,
            thumbnail_size=self.thumbnail_size,
        )
        if self.proxy_base_url:
            return templates.via_proxy(self.proxy_base_url)
        return templates


class ProxyConfig(BaseModel):
    """Response policy for proxied assets."""

    cache_max_age: int = 3600
    allow_origin: str = "*"
    chunk_size: int = 64 * 1024

    def response_headers(self) -> dict[str, str]:
        """Headers attached to every successful asset response."""
        return {
            "Cache-Control": f"public, max-age={self.cache_max_age}",
            "Access-Control-Allow-Origin": self.allow_origin,
        }


class LogfireConfig(BaseModel):
    """Pydantic Logfire observability configuration."""

    enabled: bool = False
    service_name: str = "folio"
    environment: str | None = None
    sample_rate: float = 1.0
    console: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    # Application
    debug: bool = False

    # Server-held upstream credential; never accepted from callers
    upstream_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "FOLIO_UPSTREAM_API_KEY", "GOOGLE_API_KEY", "REACT_APP_GOOGLE_API_KEY"
        ),
    )

    # Loaded from app.yaml
    upstream: UpstreamConfig = UpstreamConfig()
    proxy: ProxyConfig = ProxyConfig()
    logfire: LogfireConfig = LogfireConfig()


@lru_cache
def get_settings() -> Settings:
    """Load settings from .env and app.yaml."""
    # First create base settings from .env
    base_settings = Settings()

    # Load app.yaml config
    try:
        app_config = load_app_config()
    except FileNotFoundError:
        return base_settings

    # Merge YAML config with settings
    updates = {}

    if "debug" in app_config:
        updates["debug"] = bool(app_config["debug"])

    if "upstream" in app_config:
        updates["upstream"] = UpstreamConfig(**app_config["upstream"])

    if "proxy" in app_config:
        updates["proxy"] = ProxyConfig(**app_config["proxy"])

    if "logfire" in app_config:
        updates["logfire"] = LogfireConfig(**app_config["logfire"])

    if updates:
        return base_settings.model_copy(update=updates)

    return base_settings


def clear_settings_cache() -> None:
    """Forget cached settings so the next get_settings() call reloads them."""
    get_settings.cache_clear()
