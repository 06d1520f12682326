"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the pricing catalog service using Pydantic
Settings.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Computed properties for derived URLs
- Cached singleton accessor

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Network Settings:
----------------
- PRICING_BASE_URL: endpoint hosting the offer index and offer files
- OFFER_INDEX_PATH: path of the offer index below the base endpoint
- REQUEST_TIMEOUT_SECONDS: timeout applied to every catalog request

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


DEFAULT_PRICING_BASE_URL = "https://pricing.us-east-1.amazonaws.com"
DEFAULT_OFFER_INDEX_PATH = "/offers/v1.0/aws/index.json"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        pricing_base_url: Base endpoint for the offer index and offer files
        offer_index_path: Path of the offer index below the base endpoint
        request_timeout_seconds: Timeout for each HTTP request
        user_agent: User-Agent header sent with catalog requests
        allow_local_paths: Allow path-mode queries through the HTTP API
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> print(settings.offer_index_url)
        'https://pricing.us-east-1.amazonaws.com/offers/v1.0/aws/index.json'
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        # Load from .env file if present
        env_file=".env",
        env_file_encoding="utf-8",
        # Environment variables are case-insensitive
        case_sensitive=False,
        # Ignore extra environment variables
        extra="ignore",
        # Validate default values
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Pricing Catalog API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # PRICING ENDPOINT SETTINGS
    # =========================================================================
    pricing_base_url: str = Field(
        default=DEFAULT_PRICING_BASE_URL,
        min_length=1,
        description="Base endpoint hosting the offer index and offer files"
    )

    offer_index_path: str = Field(
        default=DEFAULT_OFFER_INDEX_PATH,
        min_length=1,
        description="Path of the offer index below the base endpoint"
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=600,  # Max 10 minutes
        description="Timeout for every catalog HTTP request"
    )

    user_agent: str = Field(
        default="pricing-catalog/1.0",
        description="User-Agent header sent with catalog requests"
    )

    # =========================================================================
    # API SETTINGS
    # =========================================================================
    allow_local_paths: bool = Field(
        default=False,
        description="Allow path-mode queries through the HTTP API"
    )

    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Args:
            value: Raw environment value

        Returns:
            Lowercase normalized environment name
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("pricing_base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """
        Strip trailing slashes so relative offer paths join cleanly.

        Raises:
            ValueError: If the URL is not http(s)
        """
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Pricing base URL must be http(s): {value}")
        return value

    @field_validator("offer_index_path")
    @classmethod
    def validate_index_path(cls, value: str) -> str:
        """Ensure the index path is rooted."""
        value = value.strip()
        return value if value.startswith("/") else f"/{value}"

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def offer_index_url(self) -> str:
        """Fully-qualified URL of the offer index."""
        return f"{self.pricing_base_url}{self.offer_index_path}"

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"pricing_base_url={self.pricing_base_url!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
