"""Gemini Flash Image backend.

This module provides the backend for Google's ``gemini-2.5-flash-image`` model
through the ``google-genai`` SDK. The model takes an image plus a natural
language instruction and answers with a new image.

Gemini Specifics
----------------
- **Request**: one inline image part and one text part, with
  ``response_modalities=["IMAGE"]``
- **Response**: candidates whose content parts may carry ``inline_data``
  (raw image bytes + MIME type) or text. When the prompt trips the safety
  filter the model often answers with text only.
- **Errors**: the SDK raises ``google.genai.errors.APIError`` subclasses that
  expose ``code`` (HTTP status) and ``status`` (e.g. ``"INTERNAL"``). These are
  translated into :class:`~eraframe.core.errors.BackendError` so the retry
  loop never has to parse SDK messages.

Client Lifecycle
----------------
The ``genai.Client`` is created on the first call to :meth:`generate`, never
at import or construction time, so a missing API key only surfaces when a
generation is actually attempted. Creation is guarded by a lock, making one
backend instance safe to share between threads.

Usage Example
-------------
    >>> from eraframe.core.adapters.gemini_flash_image import GeminiFlashImageBackend
    >>> from eraframe.core.config import config
    >>>
    >>> backend = GeminiFlashImageBackend(config)
    >>> response = backend.generate(request)
"""

import base64
import binascii
import logging
import threading

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from eraframe.core.backends import ImageBackend, backend_registry
from eraframe.core.config import EraframeConfig
from eraframe.core.errors import BackendError
from eraframe.core.payloads import GenerationRequest
from eraframe.core.responses import GenerationResponse, ResponsePart

logger = logging.getLogger(__name__)


@backend_registry.register
class GeminiFlashImageBackend(ImageBackend):
    """Backend for Gemini image generation via google-genai.

    Attributes
    ----------
    model_id : str
        Gemini model used for generation (from config.gemini_model_id)
    """

    name = "Gemini-Flash-Image"
    description = "Instruction-based image editing with Gemini 2.5 Flash Image"
    version = "1.0.0"

    def __init__(self, config: EraframeConfig) -> None:
        super().__init__(config)
        self.model_id = config.gemini_model_id
        self._client: genai.Client | None = None
        self._client_lock = threading.Lock()
        logger.info(f"Configured Gemini backend with model: {self.model_id}")

    @property
    def is_ready(self) -> bool:
        return self._client is not None

    def _get_client(self) -> genai.Client:
        """Create the genai client on first use.

        Raises:
            ConfigurationError: If no API key is configured
        """
        with self._client_lock:
            if self._client is None:
                api_key = self.config.require_api_key()
                self._client = genai.Client(api_key=api_key)
                logger.info("Created Gemini client")
            return self._client

    def generate(self, request: GenerationRequest) -> GenerationResponse:
        client = self._get_client()

        try:
            image_bytes = base64.b64decode(request.image.raw_data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BackendError(f"Image payload is not valid base64: {e}") from e

        label = "fallback" if request.is_fallback else "primary"
        logger.debug(
            f"Calling {self.model_id} ({label} prompt, {request.image.media_type}, "
            f"{len(image_bytes)} bytes)"
        )

        try:
            response = client.models.generate_content(
                model=self.model_id,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=request.image.media_type),
                    types.Part.from_text(text=request.instruction),
                ],
                config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
            )
        except genai_errors.APIError as e:
            raise BackendError(str(e), code=e.code, status=e.status) from e

        return self._to_generation_response(response)

    @staticmethod
    def _to_generation_response(response: types.GenerateContentResponse) -> GenerationResponse:
        """Convert an SDK response into a GenerationResponse.

        Only the first candidate is considered. Missing candidates, content or
        parts produce an empty response rather than an error.
        """
        sdk_parts = []
        if response.candidates:
            content = response.candidates[0].content
            if content is not None and content.parts:
                sdk_parts = content.parts

        parts = []
        texts = []
        for part in sdk_parts:
            inline = part.inline_data
            if inline is not None and inline.data:
                parts.append(
                    ResponsePart(
                        mime_type=inline.mime_type,
                        data=base64.b64encode(inline.data).decode("ascii"),
                    )
                )
            elif part.text:
                parts.append(ResponsePart(text=part.text))
                texts.append(part.text)

        return GenerationResponse(parts=tuple(parts), text="".join(texts))
