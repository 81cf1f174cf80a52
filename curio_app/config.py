"""Application configuration — env vars, YAML files, defaults."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


def _repo_root() -> Path:
    """Find the repository root (directory containing pyproject.toml)."""
    current = Path(__file__).resolve().parent.parent
    if (current / "pyproject.toml").exists():
        return current
    return Path.cwd()


REPO_ROOT = _repo_root()


class DatabaseBackend(str, Enum):
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class DatabaseConfig(BaseSettings):
    backend: DatabaseBackend = DatabaseBackend.SQLITE
    sqlite_path: Path = REPO_ROOT / "data" / "curio.db"
    postgresql_url: str = ""

    model_config = {"env_prefix": "CURIO_DB_"}


class LLMSettings(BaseSettings):
    description_model: str = "mistral/mistral-small-latest"
    max_quote_tokens: int = 200
    max_art_tokens: int = 350
    temperature: float = 0.7

    model_config = {"env_prefix": "CURIO_LLM_"}


class ServerConfig(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"
    worker_concurrency: int = 2
    admin_user: str = ""
    admin_password: str = ""
    # Proxies whose X-Forwarded-For uvicorn trusts for the client address
    forwarded_allow_ips: str = "127.0.0.1"
    cors_origins: list[str] = [
        "http://localhost:5500",
        "http://127.0.0.1:5500",
        "http://localhost:3000",
        "https://curio.day",
        "https://www.curio.day",
    ]

    model_config = {"env_prefix": "CURIO_SERVER_"}


class ProvidersConfig(BaseSettings):
    """Third-party content APIs. A provider without a key is skipped."""

    api_ninjas_key: str = ""
    favqs_api_key: str = ""
    rijksmuseum_api_key: str = ""
    quote_timeout: float = 5.0
    art_timeout: float = 10.0
    max_retries: int = 2

    model_config = {"env_prefix": "CURIO_PROVIDERS_"}


class CacheConfig(BaseSettings):
    art_min_size: int = 2
    art_batch_size: int = 2
    art_api_delay: float = 3.0
    quote_min_size: int = 10
    quote_batch_size: int = 20
    quote_api_delay: float = 1.0

    model_config = {"env_prefix": "CURIO_CACHE_"}


class TierLimit(BaseModel):
    """Daily views per content type. ``None`` means unlimited."""

    art: int | None
    quotes: int | None


class LimitsConfig(BaseSettings):
    guest: TierLimit = Field(default_factory=lambda: TierLimit(art=3, quotes=3))
    registered: TierLimit = Field(default_factory=lambda: TierLimit(art=10, quotes=10))
    premium: TierLimit = Field(default_factory=lambda: TierLimit(art=50, quotes=50))

    model_config = {"env_prefix": "CURIO_LIMITS_"}


class SchedulerConfig(BaseSettings):
    enabled: bool = True
    daily_time: str = "00:01"
    timezone: str = "Europe/Berlin"
    ensure_on_startup: bool = True

    model_config = {"env_prefix": "CURIO_SCHEDULER_"}


class AuthConfig(BaseSettings):
    access_token_ttl_seconds: int = 3600
    refresh_token_ttl_days: int = 30
    password_iterations: int = 260_000
    premium_fallback_emails: list[str] = Field(default_factory=list)

    model_config = {"env_prefix": "CURIO_AUTH_"}


class AppConfig(BaseSettings):
    """Top-level application configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    server: ServerConfig = Field(default_factory=ServerConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    # Environment & Sentry
    environment: str = "development"
    sentry_dsn: str = ""

    # Paths
    config_dir: Path = REPO_ROOT / "config"
    data_dir: Path = REPO_ROOT / "data"

    model_config = {"env_prefix": "CURIO_"}

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> AppConfig:
        """Load config from YAML file, with env var overrides."""
        if path is None:
            path = REPO_ROOT / "config" / "app.yml"

        values: dict[str, Any] = {}
        if path.exists():
            with open(path) as f:
                values = yaml.safe_load(f) or {}

        return cls(**values)


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML config file from the config directory."""
    path = REPO_ROOT / "config" / filename
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_seed_content() -> dict[str, Any]:
    """Load seed.yml with sample artworks and quotes for bulk loading."""
    return load_yaml_config("seed.yml")
