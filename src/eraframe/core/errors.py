"""Exception hierarchy for Eraframe.

Every error raised by the library derives from :class:`EraframeError`, so
callers can catch the whole family with a single ``except`` clause. Messages
are plain English and intended to be shown to the end user.

Error Taxonomy
--------------
- :class:`ConfigurationError`: the API key is missing. Raised lazily, only
  when a generation is attempted.
- :class:`InvalidInputError`: the source image is not a valid data URL.
  Raised before any backend call.
- :class:`BackendError`: a backend call failed. Carries the structured
  ``code`` / ``status`` reported by the SDK so the retry loop can classify it
  without parsing the message.
- :class:`TerminalServiceFault`: a backend failure that will not be retried.
- :class:`RetriesExhaustedError`: a retriable backend failure that hit the
  attempt ceiling.
- :class:`ContentRejection`: the backend answered but returned no image,
  usually because the prompt was filtered.
- :class:`FallbackFailedError`: the fallback prompt was tried after a
  content rejection and also failed.
- :class:`GenerationError`: generic wrapper adding context to an unexpected
  failure.
"""

from __future__ import annotations

import copy


class EraframeError(Exception):
    """Base class for all Eraframe errors."""

    def with_context(self, context: str) -> "EraframeError":
        """Return a copy of this error with ``context`` prepended to its message.

        The copy keeps the concrete class and any extra attributes (attempt
        counts, status codes), so callers can still dispatch on the kind of
        failure after context has been added.

        Args:
            context: Human-readable description of what was being done

        Returns:
            New error instance of the same class
        """
        wrapped = copy.copy(self)
        wrapped.args = (f"{context}: {self}",)
        return wrapped


class ConfigurationError(EraframeError):
    """Required configuration (the backend API key) is missing."""

    pass


class InvalidInputError(EraframeError):
    """The source image is not a ``data:image/...;base64,...`` URL."""

    pass


class BackendError(EraframeError):
    """A backend call failed.

    Attributes:
        code: Numeric status code reported by the backend, if any
        status: Symbolic status reported by the backend (e.g. ``"INTERNAL"``)
    """

    def __init__(self, message: str, code: int | None = None, status: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class TerminalServiceFault(EraframeError):
    """A backend failure that is not retried.

    Attributes:
        attempts: Number of attempts made before giving up
    """

    def __init__(self, message: str, attempts: int = 1) -> None:
        super().__init__(message)
        self.attempts = attempts


class RetriesExhaustedError(TerminalServiceFault):
    """A retriable backend failure occurred on the last allowed attempt."""

    pass


class ContentRejection(EraframeError):
    """The backend responded successfully but returned no image.

    Attributes:
        raw_text: Text returned by the backend instead of an image (may be empty)
    """

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class FallbackFailedError(EraframeError):
    """Both the original prompt and the fallback prompt failed to produce an image."""

    pass


class GenerationError(EraframeError):
    """Image generation failed for a reason not covered by a more specific error."""

    pass
