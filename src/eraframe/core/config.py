"""Configuration management for Eraframe.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the ERAFRAME_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (ERAFRAME_* prefix)
2. .env file in the project root
3. Default values defined in EraframeConfig

The API key is an exception to the prefix rule: it is also accepted from
``GEMINI_API_KEY`` or the bare ``API_KEY`` variable.

Example .env file:
    ERAFRAME_API_KEY=your-gemini-key
    ERAFRAME_GEMINI_MODEL_ID=gemini-2.5-flash-image
    ERAFRAME_MAX_RETRIES=3
    ERAFRAME_INITIAL_DELAY_MS=1000

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Creating it never fails because of a missing key: the key is only checked
through :meth:`EraframeConfig.require_api_key` when a generation is attempted.

Usage Example
-------------
    from eraframe.core.config import config

    print(config.gemini_model_id)
    print(config.max_retries)
"""

from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class EraframeConfig(BaseSettings):
    """Main configuration for Eraframe.

    Attributes
    ----------
    Backend Settings:
        api_key : SecretStr | None
            Gemini API key (ERAFRAME_API_KEY, GEMINI_API_KEY or API_KEY)
        default_backend : str
            Name of the registered backend used by DecadeRestyler
        gemini_model_id : str
            Gemini model used for image generation

    Retry Settings:
        max_retries : int
            Maximum attempts per generation cycle (1-10)
        initial_delay_ms : int
            Backoff before the second attempt; doubles on every retry

    Logging:
        log_level : str
            Level applied by configure_logging()

    Examples
    --------
        >>> custom_config = EraframeConfig(max_retries=5, initial_delay_ms=250)
        >>> custom_config.max_retries
        5
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ERAFRAME_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("ERAFRAME_API_KEY", "GEMINI_API_KEY", "API_KEY"),
        description="Gemini API key",
    )

    default_backend: str = Field(
        default="Gemini-Flash-Image",
        description="Registered backend used for generation",
    )
    gemini_model_id: str = Field(
        default="gemini-2.5-flash-image",
        description="Gemini model ID for image generation",
    )

    max_retries: int = Field(
        default=3,
        description="Maximum attempts per generation cycle",
        ge=1,
        le=10,
    )
    initial_delay_ms: int = Field(
        default=1000,
        description="Delay before the first retry in milliseconds (doubles each retry)",
        ge=0,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level used by configure_logging()",
    )

    def require_api_key(self) -> str:
        """Return the API key, raising if it is not configured.

        Returns:
            The API key as plain text

        Raises:
            ConfigurationError: If no API key was provided
        """
        if self.api_key is None or not self.api_key.get_secret_value():
            raise ConfigurationError(
                "API key is not set. Set ERAFRAME_API_KEY (or GEMINI_API_KEY / API_KEY)."
            )
        return self.api_key.get_secret_value()


# Global configuration instance
# Loaded from ERAFRAME_* environment variables and .env at import time.
config = EraframeConfig()
