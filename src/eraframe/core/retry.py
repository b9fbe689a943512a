"""Bounded exponential-backoff retry loop around a backend call.

:class:`ResilientInvoker` calls a backend up to ``max_retries`` times. After
each failure :func:`classify_fault` decides whether the failure is transient
(an internal server fault) or terminal:

- transient and not the last attempt: wait
  ``initial_delay_ms * 2 ** (attempt - 1)`` milliseconds and try again
- transient on the last attempt: raise :class:`RetriesExhaustedError`
- terminal: raise :class:`TerminalServiceFault` immediately

Both raised errors repeat the underlying message and chain the original
exception as ``__cause__``. A :class:`ConfigurationError` from the backend is
re-raised untouched.

Every path through the loop either returns, raises, or sleeps and advances
the attempt counter, so the loop cannot fall through.

Usage Example
-------------
    >>> invoker = ResilientInvoker(backend, RetryPolicy.from_config(config))
    >>> response = invoker.invoke(request)

Tests inject a recording ``sleep`` to run without real delays.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .backends import ImageBackend
from .config import EraframeConfig
from .errors import (
    BackendError,
    ConfigurationError,
    RetriesExhaustedError,
    TerminalServiceFault,
)
from .payloads import GenerationRequest
from .responses import GenerationResponse

logger = logging.getLogger(__name__)

# Message signatures of an internal server fault, used when an exception
# carries no structured status.
INTERNAL_FAULT_MARKERS: tuple[str, ...] = ('"code":500', '"code": 500', "INTERNAL")

INTERNAL_STATUS = "INTERNAL"
INTERNAL_CODE = 500


class FaultClass(str, Enum):
    """Classification of a failed backend call."""

    TRANSIENT = "transient"
    TERMINAL = "terminal"


def classify_fault(error: BaseException) -> FaultClass:
    """Decide whether a backend failure is worth retrying.

    Structured status wins: a :class:`BackendError` that reports a code or
    status is transient iff the code is 500 or the status is ``INTERNAL``.
    Anything else is classified from its message.

    Args:
        error: Exception raised by the backend

    Returns:
        FaultClass.TRANSIENT for internal server faults, FaultClass.TERMINAL otherwise
    """
    if isinstance(error, ConfigurationError):
        return FaultClass.TERMINAL

    if isinstance(error, BackendError) and (error.code is not None or error.status is not None):
        if error.code == INTERNAL_CODE or error.status == INTERNAL_STATUS:
            return FaultClass.TRANSIENT
        return FaultClass.TERMINAL

    message = str(error)
    if any(marker in message for marker in INTERNAL_FAULT_MARKERS):
        return FaultClass.TRANSIENT
    return FaultClass.TERMINAL


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt ceiling and backoff base for one invocation."""

    max_retries: int = 3
    initial_delay_ms: int = 1000

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")
        if self.initial_delay_ms < 0:
            raise ValueError(f"initial_delay_ms must be >= 0, got {self.initial_delay_ms}")

    @classmethod
    def from_config(cls, config: EraframeConfig) -> "RetryPolicy":
        return cls(max_retries=config.max_retries, initial_delay_ms=config.initial_delay_ms)

    def delay_ms(self, attempt: int) -> int:
        """Backoff to wait after failed ``attempt`` (1-based)."""
        return self.initial_delay_ms * 2 ** (attempt - 1)


@dataclass
class AttemptContext:
    """Call-local retry state."""

    max_retries: int
    attempt: int = 1
    delay_ms: int = 0

    @property
    def is_last_attempt(self) -> bool:
        return self.attempt >= self.max_retries


class ResilientInvoker:
    """Calls a backend with bounded exponential-backoff retries.

    Args:
        backend: Backend to call
        policy: Attempt ceiling and backoff base
        sleep: Blocking sleep taking seconds (``time.sleep`` by default)
    """

    def __init__(
        self,
        backend: ImageBackend,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.backend = backend
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    def invoke(self, request: GenerationRequest) -> GenerationResponse:
        """Call the backend until it succeeds or a terminal failure occurs.

        Args:
            request: Request to send on every attempt

        Returns:
            The first successful backend response

        Raises:
            ConfigurationError: If the backend has no credentials
            TerminalServiceFault: On a non-retriable failure
            RetriesExhaustedError: If the last allowed attempt failed with a transient fault
        """
        ctx = AttemptContext(max_retries=self.policy.max_retries)

        while True:
            try:
                return self.backend.generate(request)
            except ConfigurationError:
                raise
            except Exception as e:
                logger.error(
                    f"{self.backend.name} call failed "
                    f"(attempt {ctx.attempt}/{ctx.max_retries}): {e}"
                )
                fault = classify_fault(e)

                if fault is FaultClass.TERMINAL:
                    raise TerminalServiceFault(str(e), attempts=ctx.attempt) from e

                if ctx.is_last_attempt:
                    logger.error(f"Giving up after {ctx.attempt} attempts")
                    raise RetriesExhaustedError(str(e), attempts=ctx.attempt) from e

                ctx.delay_ms = self.policy.delay_ms(ctx.attempt)
                logger.warning(f"Internal backend error, retrying in {ctx.delay_ms} ms...")
                self._sleep(ctx.delay_ms / 1000)
                ctx.attempt += 1
