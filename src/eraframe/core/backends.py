"""Base classes and registry for image generation backends.

A backend is the external capability Eraframe orchestrates: it takes one
:class:`~eraframe.core.payloads.GenerationRequest` and returns a
backend-neutral :class:`~eraframe.core.responses.GenerationResponse`. All
retry, fallback and interpretation logic lives outside the backend, so a
backend only has to translate requests, responses and errors for its SDK.

Backend Pattern
---------------
Each backend encapsulates:
- Lazy client creation (credentials are checked on first use, not at import)
- Request translation (image + instruction into the SDK's request format)
- Response translation (SDK parts into ResponsePart objects)
- Error translation (SDK exceptions into BackendError with code/status)

Usage Example
-------------
    >>> from eraframe.core.backends import backend_registry
    >>> from eraframe.core.config import config
    >>>
    >>> backend_registry.list_available()
    ['Gemini-Flash-Image']
    >>> backend = backend_registry.instantiate("Gemini-Flash-Image", config)
    >>> response = backend.generate(request)

See Also
--------
- GeminiFlashImageBackend: The Gemini implementation
- ResilientInvoker: Retry loop that calls backends
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from .config import EraframeConfig
from .payloads import GenerationRequest
from .responses import GenerationResponse

logger = logging.getLogger(__name__)


class ImageBackend(ABC):
    """Abstract base class for image generation backends.

    Attributes
    ----------
    name : str
        Registry name of the backend (e.g., "Gemini-Flash-Image")
    description : str
        Brief description of the backend
    config : EraframeConfig
        Configuration object containing backend settings

    Notes
    -----
    - Backends must not validate credentials in __init__; do it on first generate()
    - Backends must be safe to share between threads
    - Failures should be raised as BackendError when the SDK exposes a status
    """

    name: str = "Base Backend"
    description: str = "Base class for image generation backends"
    version: str = "0.1.0"

    def __init__(self, config: EraframeConfig) -> None:
        self.config = config
        logger.info(f"Initialized {self.name} backend")

    @abstractmethod
    def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Send one request to the backend.

        Args:
            request: Image and instruction to send

        Returns
        -------
        GenerationResponse
            Backend-neutral view of the response

        Raises
        ------
        ConfigurationError
            If credentials are missing
        BackendError
            If the backend call fails
        """
        pass

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """Whether the underlying client has been created."""
        pass

    def get_backend_info(self) -> dict[str, Any]:
        """Get information about this backend."""
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "is_ready": self.is_ready,
        }


class BackendRegistry:
    """Registry for managing available backends.

    Usage
    -----
    Registering a new backend:

        >>> backend_registry.register(MyBackend)

    Instantiating a backend:

        >>> backend = backend_registry.instantiate("Gemini-Flash-Image", config)
    """

    def __init__(self) -> None:
        self._backends: dict[str, type[ImageBackend]] = {}

    def register(self, backend_class: type[ImageBackend]) -> type[ImageBackend]:
        """Register a backend class.

        Returns the class unchanged so this can be used as a decorator.
        """
        backend_name = backend_class.name

        if backend_name in self._backends:
            logger.warning(f"Backend '{backend_name}' is already registered, overwriting")

        self._backends[backend_name] = backend_class
        logger.debug(f"Registered backend: {backend_name}")
        return backend_class

    def instantiate(self, backend_name: str, config: EraframeConfig) -> ImageBackend:
        """Create an instance of a registered backend.

        Raises
        ------
        KeyError
            If backend_name is not registered
        """
        if backend_name not in self._backends:
            available = ", ".join(self.list_available())
            raise KeyError(f"Backend '{backend_name}' not found. Available backends: {available}")

        instance = self._backends[backend_name](config=config)
        logger.info(f"Instantiated backend: {backend_name}")
        return instance

    def get_backend_class(self, backend_name: str) -> type[ImageBackend] | None:
        return self._backends.get(backend_name)

    def list_available(self) -> list[str]:
        return list(self._backends.keys())

    def get_backend_info(self, backend_name: str) -> dict[str, Any] | None:
        """Get metadata about a registered backend, or None if unknown."""
        if backend_name not in self._backends:
            return None

        backend_class = self._backends[backend_name]
        return {
            "name": backend_class.name,
            "description": backend_class.description,
            "version": backend_class.version,
        }


# Global backend registry instance
backend_registry = BackendRegistry()
