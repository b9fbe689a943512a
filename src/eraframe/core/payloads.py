"""Request building for decade-styled image generation.

This module turns the caller's inputs into immutable request objects:

- :func:`decode_data_url` splits a ``data:image/...;base64,...`` URL into an
  :class:`ImagePayload` (media type + base64 payload).
- :func:`extract_decade_token` finds which era an instruction is asking for.
- :func:`build_fallback_instruction` renders the fixed, pre-vetted prompt used
  when the original instruction is rejected by the model's content filter.
- :func:`build_request` pairs one image with one instruction.

The payload is never inspected beyond the structural match: decoding the
base64 text is left to the backend adapter.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

_DATA_URL_PATTERN = re.compile(r"data:(image/[\w.+-]+);base64,(.*)")


class DecadeToken(str, Enum):
    """Eras supported by the fallback prompt."""

    FIFTIES = "1950s"
    SIXTIES = "1960s"
    SEVENTIES = "1970s"
    EIGHTIES = "1980s"
    NINETIES = "1990s"
    TWO_THOUSANDS = "2000s"

    def __str__(self) -> str:
        return self.value


# Ordered marker table: the first marker found in an instruction wins.
# Darija era names come first, canonical labels second.
DECADE_MARKERS: tuple[tuple[str, DecadeToken], ...] = (
    ("الخمسينات", DecadeToken.FIFTIES),
    ("الستينات", DecadeToken.SIXTIES),
    ("السبعينات", DecadeToken.SEVENTIES),
    ("الثمانينات", DecadeToken.EIGHTIES),
    ("التسعينات", DecadeToken.NINETIES),
    ("الألفينات", DecadeToken.TWO_THOUSANDS),
    ("1950s", DecadeToken.FIFTIES),
    ("1960s", DecadeToken.SIXTIES),
    ("1970s", DecadeToken.SEVENTIES),
    ("1980s", DecadeToken.EIGHTIES),
    ("1990s", DecadeToken.NINETIES),
    ("2000s", DecadeToken.TWO_THOUSANDS),
)

FALLBACK_TEMPLATE = (
    "صاوب تصويرة فوتوغرافية للشخص اللي فالتصويرة بحالا كان عايش ف {decade}. "
    "التصويرة خاصها تبين الموضة، تسريحات الشعر، والجو العام ديال ديك الفترة. "
    "تأكد أن التصويرة النهائية واضحة وكتبان حقيقية لديك الحقبة."
)


@dataclass(frozen=True)
class ImagePayload:
    """Source image split out of a data URL.

    Attributes:
        media_type: MIME type such as ``image/png``
        raw_data: Base64 payload exactly as it appeared in the data URL
    """

    media_type: str
    raw_data: str


@dataclass(frozen=True)
class GenerationRequest:
    """One image paired with one instruction, sent as a single generation cycle."""

    image: ImagePayload
    instruction: str
    is_fallback: bool = False


def decode_data_url(encoded_image: str) -> ImagePayload:
    """Split a ``data:image/<subtype>;base64,<payload>`` URL.

    Args:
        encoded_image: Data URL of the source image

    Returns:
        ImagePayload with the media type and base64 payload

    Raises:
        InvalidInputError: If the string is not an image data URL
    """
    match = _DATA_URL_PATTERN.fullmatch(encoded_image or "")
    if match is None:
        raise InvalidInputError(
            "Invalid image data URL. Expected the form 'data:image/...;base64,...'"
        )
    media_type, raw_data = match.groups()
    return ImagePayload(media_type=media_type, raw_data=raw_data)


def extract_decade_token(instruction: str) -> DecadeToken | None:
    """Find the era an instruction refers to.

    Args:
        instruction: Free-text instruction

    Returns:
        The DecadeToken of the first marker (in table order) contained in the
        instruction, or None if no marker is present
    """
    for marker, token in DECADE_MARKERS:
        if marker in instruction:
            logger.debug(f"Matched era marker {marker!r} -> {token.value}")
            return token
    return None


def build_fallback_instruction(decade: DecadeToken) -> str:
    """Render the pre-vetted fallback prompt for ``decade``."""
    return FALLBACK_TEMPLATE.format(decade=decade.value)


def build_request(
    image: ImagePayload, instruction: str, *, is_fallback: bool = False
) -> GenerationRequest:
    """Pair an image with an instruction for one generation cycle."""
    return GenerationRequest(image=image, instruction=instruction, is_fallback=is_fallback)
