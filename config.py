"""Application configuration.

This module provides environment-specific configuration settings for the application.
"""

import os
from pathlib import Path
from typing import Any, Dict


class Config:
    """Base configuration with settings common to all environments."""

    # Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-key-change-in-production")

    # Flask settings
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    TESTING: bool = False

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")  # nosec B104
    PORT: int = int(os.getenv("PORT", "3000"))

    # Database settings
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_ENGINE_OPTIONS: Dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_recycle": 300,  # 5 minutes
    }

    # Session settings
    SESSION_COOKIE_SECURE: bool = False
    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = "Lax"
    PERMANENT_SESSION_LIFETIME: int = 3600  # 1 hour in seconds

    # CSRF
    WTF_CSRF_ENABLED: bool = True
    WTF_CSRF_TIME_LIMIT: int = 3600

    # Third-party lookup APIs
    NUTRITIONIX_APP_ID: str = os.getenv("NUTRITIONIX_APP_ID", "")
    NUTRITIONIX_API_KEY: str = os.getenv("NUTRITIONIX_API_KEY", "")
    GEOCODE_API_KEY: str = os.getenv("GEOCODE_API_KEY", "")
    LOOKUP_TIMEOUT: int = 10

    # Application settings
    APP_NAME: str = os.getenv("APP_NAME", "moodlog")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    def __init__(self) -> None:
        """Initialize configuration."""
        os.environ.setdefault("FLASK_ENV", "development")
        self.SQLALCHEMY_DATABASE_URI = self._get_database_uri()

    def _get_database_uri(self) -> str:
        """Get the appropriate database URI for the current environment."""
        # Handle Heroku-style database URLs
        if "DATABASE_URL" in os.environ:
            uri = os.environ["DATABASE_URL"]
            if uri.startswith("postgres://"):
                uri = uri.replace("postgres://", "postgresql+pg8000://", 1)
            elif uri.startswith("postgresql://"):
                uri = uri.replace("postgresql://", "postgresql+pg8000://", 1)
            return uri

        # Default to SQLite in development
        instance_path = Path(__file__).parent / "instance"
        instance_path.mkdir(exist_ok=True)
        return f'sqlite:///{instance_path}/moodlog-{os.getenv("FLASK_ENV")}.db'


class DevelopmentConfig(Config):
    """Development configuration."""


class TestingConfig(Config):
    """Testing configuration."""

    TESTING: bool = True
    DEBUG: bool = True
    WTF_CSRF_ENABLED: bool = False
    SECRET_KEY: str = "test-secret-key"  # nosec B105

    def _get_database_uri(self) -> str:
        return "sqlite:///:memory:"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG: bool = False
    TESTING: bool = False
    SESSION_COOKIE_SECURE: bool = True


def get_config() -> Config:
    """Get the appropriate configuration based on environment."""
    env = os.getenv("FLASK_ENV", "development").lower()

    configs = {
        "development": DevelopmentConfig,
        "testing": TestingConfig,
        "production": ProductionConfig,
    }

    config_class = configs.get(env, DevelopmentConfig)
    return config_class()
