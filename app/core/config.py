"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Set up basic logger for config module
logger = logging.getLogger(__name__)

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# URL-safe alphabet used for random short codes (64 symbols)
DEFAULT_CODE_ALPHABET = "_-0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "URL Shortener"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Short links with alias suggestions and QR codes"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # API Configuration
    BASE_URL: Optional[str] = None  # Overrides the request host when building short URLs
    API_PREFIX: str = "/api"
    DEBUG: bool = False

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Static client assets (index.html doubles as the 404 page)
    STATIC_DIR: Optional[str] = None

    # Database
    SQLALCHEMY_DATABASE_URI: str = Field(
        default="sqlite+aiosqlite:///./urls.db",
        validation_alias=AliasChoices("DATABASE_URL", "SQLALCHEMY_DATABASE_URI"),
    )
    DB_POOL_SIZE: int = 5
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    # Short code allocation
    URL_CODE_LENGTH: int = Field(default=6, ge=1)
    URL_CODE_CHARS: str = DEFAULT_CODE_ALPHABET
    URL_CODE_MAX_ATTEMPTS: int = Field(default=10, ge=1)  # Random-code collision retries
    ALIAS_PRECHECK_ENABLED: bool = True  # Early rejection only; the insert decides

    # Alias suggestion
    ALIAS_SUGGESTION_MAX_LENGTH: int = 20
    ALIAS_SUGGESTION_FALLBACK: str = "link"

    # QR codes
    QR_BOX_SIZE: int = 10
    QR_BORDER: int = 4

    # Redirects
    REDIRECT_STATUS_CODE: int = 302

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{function}:{line} | {message}"
    LOG_FILE_ENABLED: bool = False
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_JSON: bool = False
    REQUEST_LOGGING_ENABLED: bool = True

    # Validators
    @field_validator("CORS_ORIGINS")
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v

    @field_validator("BASE_URL", "STATIC_DIR", mode="before")
    def empty_string_to_none(cls, v: Any) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("BASE_URL")
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    @field_validator("URL_CODE_CHARS")
    def validate_code_alphabet(cls, v: str) -> str:
        if len(set(v)) < 2:
            raise ValueError("URL_CODE_CHARS must contain at least two distinct characters")
        if len(set(v)) < 60:
            logger.warning(
                "URL_CODE_CHARS has fewer than 60 symbols; collisions become more likely."
            )
        return v

    @field_validator("REDIRECT_STATUS_CODE")
    def validate_redirect_status(cls, v: int) -> int:
        if v not in (301, 302, 303, 307, 308):
            raise ValueError("REDIRECT_STATUS_CODE must be a 3xx redirect status")
        return v


# Create a singleton instance of the settings
settings = Settings()
