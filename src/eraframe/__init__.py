"""Eraframe - decade-styled portraits with resilient Gemini image generation."""

__version__ = "0.1.0"

from eraframe.core.config import EraframeConfig, config
from eraframe.core.errors import (
    ConfigurationError,
    ContentRejection,
    EraframeError,
    FallbackFailedError,
    GenerationError,
    InvalidInputError,
    RetriesExhaustedError,
    TerminalServiceFault,
)
from eraframe.core.logging_setup import configure_logging
from eraframe.core.payloads import DecadeToken, extract_decade_token
from eraframe.core.restyler import DecadeRestyler, generate_styled_image

__all__ = [
    "ConfigurationError",
    "ContentRejection",
    "DecadeRestyler",
    "DecadeToken",
    "EraframeConfig",
    "EraframeError",
    "FallbackFailedError",
    "GenerationError",
    "InvalidInputError",
    "RetriesExhaustedError",
    "TerminalServiceFault",
    "config",
    "configure_logging",
    "extract_decade_token",
    "generate_styled_image",
]
