"""Backend implementations.

Importing this package registers every backend with
:data:`eraframe.core.backends.backend_registry`.
"""

from .gemini_flash_image import GeminiFlashImageBackend

__all__ = ["GeminiFlashImageBackend"]
