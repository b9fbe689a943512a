"""Shared pytest fixtures for Eraframe tests."""

from __future__ import annotations

from typing import Any

import pytest

from eraframe.core.backends import ImageBackend
from eraframe.core.config import EraframeConfig
from eraframe.core.payloads import GenerationRequest
from eraframe.core.responses import GenerationResponse, ResponsePart

SOURCE_DATA_URL = "data:image/png;base64,c291cmNlLWltYWdl"
GENERATED_B64 = "Z2VuZXJhdGVkLWltYWdl"


class ScriptedBackend(ImageBackend):
    """Backend that replays a scripted sequence of responses and exceptions.

    Each call to generate() pops the next item from the script: exceptions are
    raised, anything else is returned. Every request is recorded in ``calls``.
    """

    name = "Scripted"
    description = "Test backend replaying scripted outcomes"

    def __init__(self, config: EraframeConfig, script: list[Any] | None = None) -> None:
        super().__init__(config)
        self.script = list(script or [])
        self.calls: list[GenerationRequest] = []

    @property
    def is_ready(self) -> bool:
        return True

    def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.calls.append(request)
        if not self.script:
            raise AssertionError("ScriptedBackend called more times than scripted")
        outcome = self.script.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    """Stand-in for time.sleep that records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def image_response(data: str = GENERATED_B64, mime_type: str = "image/png") -> GenerationResponse:
    """Build a response carrying one inline image."""
    return GenerationResponse(parts=(ResponsePart(mime_type=mime_type, data=data),))


def text_response(text: str = "I can't help with that.") -> GenerationResponse:
    """Build a response with text only (a content rejection)."""
    return GenerationResponse(parts=(ResponsePart(text=text),), text=text)


@pytest.fixture
def test_config() -> EraframeConfig:
    """Create a test configuration that ignores the environment's .env file.

    Returns:
        EraframeConfig with a dummy API key and default retry settings
    """
    return EraframeConfig(
        _env_file=None,
        api_key="test-key",
        max_retries=3,
        initial_delay_ms=1000,
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_backend(test_config: EraframeConfig):
    """Factory fixture returning a ScriptedBackend for a given script."""

    def _make(*script: Any) -> ScriptedBackend:
        return ScriptedBackend(test_config, list(script))

    return _make
