"""Backend-neutral responses and their interpretation.

Backends translate whatever their SDK returns into a :class:`GenerationResponse`:
an ordered list of :class:`ResponsePart` objects plus the response text.
:func:`interpret_response` then decides whether the model produced an image.

A response without image content is not an error at this level: it becomes a
:class:`NoImageProduced` outcome, and the restyler decides whether it is worth
retrying with the fallback prompt.
"""

import logging
from dataclasses import dataclass, field
from typing import Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResponsePart:
    """A single content part returned by a backend.

    Attributes:
        mime_type: MIME type of the inline data, if the part carries any
        data: Base64-encoded inline data, if any
        text: Text content, if any
    """

    mime_type: str | None = None
    data: str | None = None
    text: str | None = None

    @property
    def has_inline_data(self) -> bool:
        return bool(self.data)


@dataclass(frozen=True)
class GenerationResponse:
    """A successful backend response."""

    parts: tuple[ResponsePart, ...] = field(default_factory=tuple)
    text: str = ""


@dataclass(frozen=True)
class ImageOutcome:
    """The backend produced an image."""

    media_type: str
    raw_data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.raw_data}"


@dataclass(frozen=True)
class NoImageProduced:
    """The backend answered without an image (usually a content-policy refusal)."""

    raw_text: str = ""


GenerationOutcome = Union[ImageOutcome, NoImageProduced]


def interpret_response(response: GenerationResponse) -> GenerationOutcome:
    """Pick the first inline image out of a response.

    Args:
        response: Response returned by a backend

    Returns:
        ImageOutcome for the first part with inline data, otherwise
        NoImageProduced carrying the response text (possibly empty)
    """
    for part in response.parts:
        if part.has_inline_data:
            media_type = part.mime_type or "image/png"
            return ImageOutcome(media_type=media_type, raw_data=part.data)

    raw_text = response.text or ""
    logger.error(f"Backend did not return an image. Response text: {raw_text!r}")
    return NoImageProduced(raw_text=raw_text)
