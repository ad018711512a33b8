"""Application configuration using Pydantic Settings.

This module centralizes all configuration values that may vary between environments.
Values can be overridden via environment variables or .env file.
"""
import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List, Optional

# Project root, next to pyproject.toml
ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


def load_environment(env_file: Path = ENV_FILE) -> bool:
    """Load ``env_file`` into os.environ without overriding variables already set.

    Must run before ``Settings`` is defined, since its defaults read os.environ.
    """
    return load_dotenv(env_file)


load_environment()


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # ===== Database =====
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DATABASE_HOST: str = os.getenv("DATABASE_HOST", "localhost")
    DATABASE_PORT: int = int(os.getenv("DATABASE_PORT", "3306"))
    DATABASE_USER: str = os.getenv("DATABASE_USER", "root")
    DATABASE_PASSWORD: str = os.getenv("DATABASE_PASSWORD", "")
    DATABASE_NAME: str = os.getenv("DATABASE_NAME", "vehicle_inventory")
    DB_INIT_ON_STARTUP: bool = os.getenv("DB_INIT_ON_STARTUP", "true").lower() == "true"
    SEED_DEFAULT_ADMIN: bool = os.getenv("SEED_DEFAULT_ADMIN", "true").lower() == "true"
    DEFAULT_ADMIN_EMAIL: str = os.getenv("DEFAULT_ADMIN_EMAIL", "administrador@teste.com")
    DEFAULT_ADMIN_SECRET: str = os.getenv("DEFAULT_ADMIN_SECRET", "123456")

    # ===== Authentication =====
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    # ===== Pagination Defaults =====
    VEHICLE_PAGE_SIZE: int = int(os.getenv("VEHICLE_PAGE_SIZE", "10"))
    ADMIN_PAGE_SIZE: int = int(os.getenv("ADMIN_PAGE_SIZE", "10"))

    # ===== Validation Limits =====
    RATING_MIN_STARS: int = 1
    RATING_MAX_STARS: int = 5
    RATING_COMMENT_MAX_LENGTH: int = 500
    VEHICLE_MIN_YEAR: int = 1950
    VEHICLE_MAX_YEAR: int = 2100
    VEHICLE_NAME_MAX_LENGTH: int = 150
    VEHICLE_MAKE_MAX_LENGTH: int = 100
    VEHICLE_PLATE_MAX_LENGTH: int = 8
    VEHICLE_COLOR_MAX_LENGTH: int = 50
    VEHICLE_DESCRIPTION_MAX_LENGTH: int = 500
    PHOTO_URL_MAX_LENGTH: int = 500

    # ===== CORS =====
    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "*")  # comma separated

    class Config:
        env_file = ".env"
        case_sensitive = True
        # Allow extra fields from .env that aren't defined here
        extra = "ignore"

    def database_url(self) -> str:
        """Return DATABASE_URL or build a MySQL URL from the individual variables."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    def cors_origins(self) -> List[str]:
        """Split CORS_ALLOW_ORIGINS into a list of origins."""
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure singleton pattern - settings are loaded once.
    """
    return Settings()


# Global settings instance for easy import
settings = get_settings()
