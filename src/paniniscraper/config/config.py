"""
Configuration management for paniniscraper using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class ProxyAuth(BaseModel):
    username: str
    password: str


class ProxyConfig(BaseModel):
    """Outbound HTTP proxy."""

    host: str
    port: int = Field(ge=1, le=65535)
    auth: Optional[ProxyAuth] = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


class HttpConfig(BaseModel):
    """Transport configuration for page fetches."""

    timeout_ms: int = Field(default=15000, gt=0, description="Connect/read timeout in milliseconds.")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra request headers.")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent string for HTTP requests.")
    proxy: Optional[ProxyConfig] = Field(default=None, description="Optional HTTP proxy.")

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("user_agent must not be blank")
        return v


class SiteConfig(BaseModel):
    """The single retail site the extractors are tuned for."""

    base_url: str = Field(default="https://panini.com.br", description="Origin used to resolve relative paths.")
    url_pattern: str = Field(
        default=r"^https?://(www\.)?panini\.com\.br",
        description="Regex a normalized product URL must match.",
    )
    id_prefix: str = Field(default="panini", description="Prefix for synthesized product IDs.")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class MonitoringConfig(BaseModel):
    """Configuration for logging output."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


class ScraperSettings(BaseSettings):
    project_name: str = "paniniscraper"
    http: HttpConfig = Field(default_factory=HttpConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="PANINI_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> ScraperSettings:
        """Settings from a YAML document. An empty document means defaults."""
        if not path.is_file():
            raise FileNotFoundError(f"No scraper configuration at {path}")
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        log.debug("Loaded scraper configuration from %s", path)
        return cls.model_validate(data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "config.yaml", current_dir / "config.yml"):
        if path.exists():
            return path
    return None


def load_settings(path: Path | None = None) -> ScraperSettings:
    """Load settings from an explicit YAML path, a discovered one, or defaults."""
    config_path = path or find_config_file()
    if config_path is None:
        return ScraperSettings()
    return ScraperSettings.from_yaml(config_path)
