"""
Application configuration management.

Settings are read from environment variables (or a local .env file) so that
secrets such as the JWT signing key never live in source control.
"""

from functools import lru_cache
from typing import List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-secret-change-in-production"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = "sqlite:///./roomescape.db"
    log_sql_queries: bool = False

    # JWT Authentication - MUST be overridden in production
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60
    auth_cookie_name: str = "token"

    # API
    # Comma-separated in the environment
    cors_origins: Union[List[str], str] = ["http://localhost:3000"]

    # Environment Settings
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Populate themes, time slots and demo members on startup
    seed_sample_data: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()


settings = get_settings()


def validate_production_config(config: Settings = settings):
    """Validate configuration for production deployment."""
    if not config.is_production:
        return

    security_issues = []

    if config.jwt_secret_key == DEFAULT_JWT_SECRET:
        security_issues.append("JWT_SECRET_KEY is using default value")

    if config.debug:
        security_issues.append("DEBUG is enabled in production")

    if config.database_url.startswith("sqlite"):
        security_issues.append("DATABASE_URL points at SQLite")

    if security_issues:
        raise ValueError(
            f"Production security issues detected: {', '.join(security_issues)}"
        )
