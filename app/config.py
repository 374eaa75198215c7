"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

DEFAULT_CORS_ORIGINS = ["http://localhost:3000"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")

    # API Configuration
    api_title: str = Field(default="Cobranca API")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(..., description="PostgreSQL connection URL")
    database_echo: bool = Field(default=False)

    # Authentication
    auth_secret: str = Field(..., min_length=1, description="Secret used to sign session tokens")
    jwt_algorithm: str = Field(default="HS256")
    session_cookie_name: str = Field(default="session_token")

    # CORS
    cors_origins: str | List[str] = Field(default="http://localhost:3000")

    # Billing rules
    timezone: str = Field(default="America/Sao_Paulo")
    max_message_attempts: int = Field(default=3)
    integration_max_page_size: int = Field(default=50)
    upcoming_window_days: int = Field(default=2)

    # Scheduler (Celery beat)
    celery_broker_url: str = Field(default="memory://")
    celery_result_backend: Optional[str] = Field(default=None)
    celery_task_always_eager: bool = Field(default=False)
    billing_scheduler_enabled: bool = Field(default=True)
    billing_cron_hour: int = Field(default=23, ge=0, le=23)
    billing_cron_minute: int = Field(default=59, ge=0, le=59)

    # Error monitoring
    sentry_dsn: Optional[str] = Field(default=None)
    sentry_traces_sample_rate: float = Field(default=0.1)

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only PostgreSQL URLs are accepted."""
        if not v.startswith(("postgresql://", "postgres://")):
            raise ValueError("DATABASE_URL must start with postgresql:// or postgres://")
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            if not v.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in v.split(",")]
        elif v is None:
            return list(DEFAULT_CORS_ORIGINS)
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def sqlalchemy_database_url(self) -> str:
        """Database URL with the driver name SQLAlchemy expects."""
        if self.database_url.startswith("postgres://"):
            return "postgresql://" + self.database_url[len("postgres://"):]
        return self.database_url


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    return Settings()
