"""Decade restyling with content-rejection fallback.

:class:`DecadeRestyler` is the top-level operation: it turns a source image
data URL and a free-text instruction into a generated image data URL.

Generation Flow
---------------
1. Decode the data URL (``InvalidInputError`` on malformed input, before any
   backend call).
2. **Primary cycle**: send the original instruction through the
   :class:`~eraframe.core.retry.ResilientInvoker` and interpret the response.
   An image is returned immediately.
3. **Content rejection**: if the model answered without an image, look for an
   era marker in the original instruction. Without one there is nothing to
   fall back to and the rejection is raised.
4. **Fallback cycle**: send the fixed, pre-vetted prompt for that decade with
   the same image. An image is returned; anything else raises
   :class:`~eraframe.core.errors.FallbackFailedError`.

Backend failures in the primary cycle (terminal faults or exhausted retries)
never trigger the fallback; they are re-raised with context.

Usage Example
-------------
    >>> from eraframe import generate_styled_image
    >>> result = generate_styled_image(
    ...     "data:image/png;base64,iVBORw0...",
    ...     "Show this person as they would look in the 1970s",
    ... )
    >>> result.startswith("data:image/")
    True
"""

import logging
import time
from typing import Callable

from .backends import ImageBackend, backend_registry
from .config import EraframeConfig
from .config import config as default_config
from .errors import (
    ConfigurationError,
    ContentRejection,
    EraframeError,
    FallbackFailedError,
    GenerationError,
    InvalidInputError,
)
from .payloads import (
    ImagePayload,
    build_fallback_instruction,
    build_request,
    decode_data_url,
    extract_decade_token,
)
from .responses import ImageOutcome, interpret_response
from .retry import ResilientInvoker, RetryPolicy

logger = logging.getLogger(__name__)


class DecadeRestyler:
    """Generates decade-styled images with retries and a one-shot prompt fallback.

    Each call to :meth:`generate_styled_image` is independent: no state is
    kept between calls apart from the backend's lazily created client.

    Args:
        config: Configuration (defaults to the global config)
        backend: Backend instance; resolved from ``config.default_backend``
            through the registry when omitted
        sleep: Blocking sleep used between retries (seconds)
    """

    def __init__(
        self,
        config: EraframeConfig | None = None,
        backend: ImageBackend | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or default_config
        if backend is None:
            # Registering adapters happens on import
            import eraframe.core.adapters  # noqa: F401

            backend = backend_registry.instantiate(self.config.default_backend, self.config)
        self.backend = backend
        self.invoker = ResilientInvoker(backend, RetryPolicy.from_config(self.config), sleep=sleep)

    def _run_cycle(self, image: ImagePayload, instruction: str, *, is_fallback: bool) -> str:
        """Invoke the backend once (with retries) and return the image data URL.

        Raises:
            ContentRejection: If the response contains no image
        """
        request = build_request(image, instruction, is_fallback=is_fallback)
        response = self.invoker.invoke(request)
        outcome = interpret_response(response)

        if isinstance(outcome, ImageOutcome):
            return outcome.data_url

        shown = outcome.raw_text or "no text was received"
        raise ContentRejection(
            f'The model answered with text instead of an image: "{shown}"',
            raw_text=outcome.raw_text,
        )

    def generate_styled_image(self, encoded_image: str, instruction: str) -> str:
        """Generate a styled image from a source image and an instruction.

        Args:
            encoded_image: Source image as ``data:image/...;base64,...``
            instruction: Free-text styling instruction

        Returns:
            Generated image as ``data:<media_type>;base64,<payload>``

        Raises:
            InvalidInputError: If ``encoded_image`` is not an image data URL
            ConfigurationError: If the backend has no API key
            ContentRejection: If no image was produced and no decade could be found
            FallbackFailedError: If the fallback prompt also failed
            TerminalServiceFault: If the backend failed with a non-retriable error
            RetriesExhaustedError: If the backend kept failing with internal errors
            GenerationError: On any other unexpected failure
        """
        image = decode_data_url(encoded_image)

        try:
            logger.info("Generating image with the original prompt...")
            return self._run_cycle(image, instruction, is_fallback=False)
        except ContentRejection as rejection:
            return self._fallback(image, instruction, rejection)
        except (ConfigurationError, InvalidInputError):
            raise
        except EraframeError as e:
            logger.error(f"Image generation failed: {e}")
            raise e.with_context("Image generation failed") from e
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            raise GenerationError(f"Image generation failed: {e}") from e

    def _fallback(self, image: ImagePayload, instruction: str, rejection: ContentRejection) -> str:
        """Retry once with the pre-vetted prompt for the instruction's decade."""
        logger.warning("Original prompt was probably blocked, trying the fallback prompt")

        decade = extract_decade_token(instruction)
        if decade is None:
            logger.error("No decade found in the prompt, cannot use the fallback prompt")
            raise rejection

        try:
            logger.info(f"Generating image with the fallback prompt for {decade.value}...")
            return self._run_cycle(image, build_fallback_instruction(decade), is_fallback=True)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Fallback prompt failed as well: {e}")
            raise FallbackFailedError(
                "The model could not generate the image with either the original or the "
                f"fallback prompt. Original error: {rejection}. Last error: {e}"
            ) from e


def generate_styled_image(
    encoded_image: str, instruction: str, config: EraframeConfig | None = None
) -> str:
    """Generate a styled image using a restyler built for this call.

    The backend, and with it the API key check, is created per call.
    """
    return DecadeRestyler(config=config).generate_styled_image(encoded_image, instruction)
