# settings.py
"""
Lunchbox API Settings.

Pydantic settings management with environment variable support.
"""

from typing import FrozenSet, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = Field(
        default="sqlite:///./lunchbox.db",
        description="SQLAlchemy connection string (PostgreSQL in production)"
    )
    AUTO_CREATE_TABLES: bool = True

    # Environment
    ENV: str = "development"
    DEBUG: bool = True

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Comma-separated emails that are always treated as admins
    MASTER_ADMIN_EMAILS: str = ""

    # Identity provider (GoTrue-compatible auth server)
    IDENTITY_PROVIDER_URL: Optional[str] = None
    IDENTITY_PROVIDER_API_KEY: Optional[str] = None
    IDENTITY_SERVICE_ROLE_KEY: Optional[str] = None
    IDENTITY_JWT_SECRET: Optional[str] = Field(
        default=None,
        description="When set, access tokens are verified locally instead of via the provider"
    )
    IDENTITY_JWT_ALGORITHM: str = "HS256"
    IDENTITY_JWT_AUDIENCE: Optional[str] = "authenticated"
    IDENTITY_TIMEOUT_SECONDS: float = 5.0
    SESSION_COOKIE_NAME: str = "sb-access-token"

    # Sentry Error Tracking
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @property
    def master_admin_emails(self) -> FrozenSet[str]:
        """Normalized master-admin allow-list."""
        return frozenset(
            email.strip().lower()
            for email in self.MASTER_ADMIN_EMAILS.split(",")
            if email.strip()
        )

    def get_cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_required_settings(self) -> None:
        """Validate that required settings are configured."""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set")
        if not self.IDENTITY_JWT_SECRET and not self.IDENTITY_PROVIDER_URL:
            raise ValueError("Either IDENTITY_JWT_SECRET or IDENTITY_PROVIDER_URL must be set")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()

# Validate in production
if settings.ENV == "production":
    settings.validate_required_settings()


def get_settings() -> Settings:
    """Dependency returning the process-wide settings instance."""
    return settings
