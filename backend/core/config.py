"""
Configuration loader for the task board service.

Loads configuration from config.yaml and environment variables using pydantic-settings.
Supports storage/cors/logging sections plus Supabase credentials from .env.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fragments that mark a credential copied verbatim from .env.example
PLACEHOLDER_MARKERS = ("your-project", "your_supabase", "placeholder")


class StorageProvider(str, Enum):
    """Supported task/identity backends."""

    SUPABASE = "supabase"
    MEMORY = "memory"


def is_placeholder(value: str | None) -> bool:
    """Return True when a credential is missing or still a template value."""
    if not value:
        return True
    return any(marker in value for marker in PLACEHOLDER_MARKERS)


class StorageConfig(BaseModel):
    """
    Storage provider configuration.

    Example config.yaml:
        storage:
          provider: supabase
          tasks_table: tasks
          request_timeout_seconds: 10.0
    """

    provider: StorageProvider = Field(
        default=StorageProvider.SUPABASE,
        description="Backend used for tasks and identities",
    )
    tasks_table: str = Field(
        default="tasks",
        min_length=1,
        description="Name of the Postgres table holding tasks",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Timeout for calls to the identity provider and task store",
    )


class CorsConfig(BaseModel):
    """CORS configuration for browser clients."""

    allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API",
    )


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and config.yaml.

    Priority (highest to lowest):
    1. Environment variables (from .env file or system)
    2. config.yaml file
    3. Default values

    Secrets (loaded from .env only - NEVER commit to git):
        - SUPABASE_URL: Supabase project URL
        - SUPABASE_ANON_KEY: Supabase anonymous key (user-scoped calls)
        - SUPABASE_SERVICE_ROLE_KEY: Optional service role key (admin calls)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(
        default="Task Board API",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode",
        alias="APP_DEBUG",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    mount_dashboard: bool = Field(
        default=True,
        description="Mount the Dash kanban board at /dashboard/",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Bind address for the development server",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Listen port for the development server",
        alias="PORT",
    )

    @field_validator("debug", mode="before")
    @classmethod
    def parse_debug_bool(cls, v):
        """Handle empty string as False for boolean debug field."""
        if v == "" or v is None:
            return False
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if not v:
            return "INFO"
        return str(v).upper()

    # Supabase credentials (from .env)
    supabase_url: str = Field(
        default="",
        description="Supabase project URL",
    )
    supabase_anon_key: str = Field(
        default="",
        description="Supabase anonymous key",
    )
    supabase_service_role_key: str = Field(
        default="",
        description="Supabase service role key for administrative auth calls",
    )

    # Configuration sections (from config.yaml)
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Storage provider configuration",
    )
    cors: CorsConfig = Field(
        default_factory=CorsConfig,
        description="CORS configuration",
    )

    @property
    def supabase_configured(self) -> bool:
        """Whether URL and anon key are set to real (non-template) values."""
        return not is_placeholder(self.supabase_url) and not is_placeholder(
            self.supabase_anon_key
        )

    @property
    def admin_configured(self) -> bool:
        """Whether a usable service role key is available."""
        return self.supabase_configured and not is_placeholder(
            self.supabase_service_role_key
        )

    @classmethod
    def from_yaml(cls, config_path: Path | str | None = None) -> "Settings":
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to config.yaml file. If None, looks for config.yaml
                        in the current directory and project root.

        Returns:
            Settings instance with values from YAML merged with env vars.
        """
        config_data: dict = {}

        if config_path is None:
            search_paths = [
                Path.cwd() / "config.yaml",
                Path(__file__).parent.parent.parent / "config.yaml",
            ]
            for path in search_paths:
                if path.exists():
                    config_path = path
                    break

        if config_path is not None:
            config_path = Path(config_path)
            if config_path.exists():
                with open(config_path, encoding="utf-8") as f:
                    config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings.from_yaml()
