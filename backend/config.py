"""
Studio configuration. All environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")

    # Auth
    JWT_SECRET: str = os.environ.get("JWT_SECRET", "")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_HOURS: int = 24
    LOGIN_RATE_LIMIT_PER_IP: int = int(os.environ.get("LOGIN_RATE_LIMIT_PER_IP", "20"))  # per 15 minutes

    # GitHub
    GITHUB_API_URL: str = os.environ.get("GITHUB_API_URL", "https://api.github.com")
    GITHUB_REPOS_PER_PAGE: int = 50
    GITHUB_USER_AGENT: str = "ProDev-Studio"

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def COOKIE_SECURE(self) -> bool:
        return self.ENVIRONMENT != "development"


# Singleton instance
settings = Settings()

# Shorthand used by the db module
DATABASE_URL = settings.DATABASE_URL

if not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required")
if not settings.JWT_SECRET:
    raise RuntimeError("JWT_SECRET environment variable is required")
