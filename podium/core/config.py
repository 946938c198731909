"""
Application configuration using Pydantic BaseSettings
"""

from decimal import Decimal
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application settings
    app_name: str = "Podium"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./data/podium.db"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    run_migrations_on_startup: bool = True

    # Redis settings (rate limiting is disabled when unset)
    redis_url: Optional[str] = None

    # JWT settings
    jwt_secret_key: str = "your-jwt-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60
    jwt_refresh_token_expire_days: int = 7

    # Rate limiting settings
    rate_limit_requests: int = 30
    rate_limit_window_seconds: int = 60

    # Business settings
    starting_balance: Decimal = Decimal("50")
    betting_window_days: int = 7
    timezone: str = "UTC"
    admin_signup_code: Optional[str] = None

    # Observability
    sentry_dsn: Optional[str] = None

    # API settings
    api_v1_prefix: str = "/api/v1"


# Global settings instance
settings = Settings()
