"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOW_ORIGINS = (
    "https://realtysass.com,"
    "https://www.realtysass.com,"
    "https://realtysass.netlify.app,"
    "https://realtysass.webflow.io,"
    "https://www.realtysass.webflow.io,"
    "http://localhost:8888,"
    "http://localhost:3000"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "elena-gateway"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (comma-separated origins)
    allow_origins: str = DEFAULT_ALLOW_ORIGINS

    # Profile store (Supabase REST)
    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_profiles_table: str = "profiles"
    supabase_timeout: float = 5.0
    supabase_max_retries: int = 3

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def allow_origins_list(self) -> List[str]:
        """Configured CORS origins as a list."""
        return [origin.strip() for origin in self.allow_origins.split(",") if origin.strip()]

    @property
    def profile_store_configured(self) -> bool:
        """Whether both Supabase URL and service key are set."""
        return bool(self.supabase_url.strip() and self.supabase_service_key.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
