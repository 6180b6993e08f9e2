"""
App configuration - using pydantic settings for env vars
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings - loads from .env file"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # basic app stuff
    app_name: str = Field(default="TenantNotes API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)  # set to True for dev

    # server config
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)

    # DB settings - sqlite for local dev, postgresql+asyncpg in deployments
    database_url: str = Field(default="sqlite+aiosqlite:///./tenantnotes.db")
    database_echo: bool = Field(default=False)  # useful for debugging

    # Redis (rate limiting + token revocation)
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    redis_max_connections: int = Field(default=10, description="Redis connection pool size")

    # JWT
    secret_key: str = Field(
        default="your-secret-key-change-in-production", description="JWT secret key"
    )
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(
        default=60, description="Access token expiration in minutes"
    )

    # CORS - wide open for the demo profile, restrict in production
    cors_origins: list[str] = Field(default=["*"], description="CORS allowed origins")
    cors_allow_credentials: bool = Field(default=False, description="CORS allow credentials")

    # Pagination
    default_page_size: int = Field(default=10, description="Default pagination size")
    max_page_size: int = Field(default=100, description="Maximum pagination size")

    # Rate limiting (per tenant, requests allowed come from the subscription plan)
    rate_limit_enabled: bool = Field(default=True, description="Enforce plan API rate limits")
    rate_limit_window_seconds: int = Field(default=60, description="Rate limit time window")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(default=False, description="Also write rotating log files")
    log_dir: str = Field(default="logs", description="Directory for log files")

    # Environment
    environment: str = Field(default="development", description="Environment name")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
