"""Tests for eraframe.core.config: configuration management.

Tests cover:
- Default values for all configuration fields.
- Environment variable overrides via the ERAFRAME_ prefix.
- API key aliases and lazy validation.
- Pydantic validation constraints.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from eraframe.core.config import EraframeConfig
from eraframe.core.errors import ConfigurationError

API_KEY_VARS = ("ERAFRAME_API_KEY", "GEMINI_API_KEY", "API_KEY")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable that could supply an API key."""
    for name in API_KEY_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigDefaults:
    """Verify that EraframeConfig provides sensible defaults."""

    def test_default_backend(self, test_config: EraframeConfig):
        assert test_config.default_backend == "Gemini-Flash-Image"

    def test_default_model(self, test_config: EraframeConfig):
        assert test_config.gemini_model_id == "gemini-2.5-flash-image"

    def test_default_retry_settings(self, monkeypatch):
        monkeypatch.delenv("ERAFRAME_MAX_RETRIES", raising=False)
        monkeypatch.delenv("ERAFRAME_INITIAL_DELAY_MS", raising=False)
        cfg = EraframeConfig(_env_file=None)
        assert cfg.max_retries == 3
        assert cfg.initial_delay_ms == 1000

    def test_default_log_level(self, test_config: EraframeConfig):
        assert test_config.log_level == "INFO"


class TestApiKey:
    """Verify API key loading and lazy validation."""

    def test_missing_key_does_not_fail_construction(self, clean_env):
        cfg = EraframeConfig(_env_file=None)
        assert cfg.api_key is None

    def test_require_api_key_raises_when_missing(self, clean_env):
        cfg = EraframeConfig(_env_file=None)
        with pytest.raises(ConfigurationError, match="API key is not set"):
            cfg.require_api_key()

    def test_require_api_key_raises_when_empty(self, clean_env):
        cfg = EraframeConfig(_env_file=None, api_key="")
        with pytest.raises(ConfigurationError):
            cfg.require_api_key()

    @pytest.mark.parametrize("variable", API_KEY_VARS)
    def test_key_from_environment(self, clean_env, variable):
        clean_env.setenv(variable, "secret-from-env")
        cfg = EraframeConfig(_env_file=None)
        assert cfg.require_api_key() == "secret-from-env"

    def test_prefixed_key_wins_over_aliases(self, clean_env):
        clean_env.setenv("ERAFRAME_API_KEY", "prefixed")
        clean_env.setenv("GEMINI_API_KEY", "gemini")
        clean_env.setenv("API_KEY", "bare")
        assert EraframeConfig(_env_file=None).require_api_key() == "prefixed"

    def test_gemini_key_wins_over_bare_key(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "gemini")
        clean_env.setenv("API_KEY", "bare")
        assert EraframeConfig(_env_file=None).require_api_key() == "gemini"

    def test_key_is_not_shown_in_repr(self, test_config: EraframeConfig):
        assert "test-key" not in repr(test_config)
        assert test_config.require_api_key() == "test-key"


class TestEnvironmentOverrides:
    """Verify ERAFRAME_ prefixed environment variables."""

    def test_max_retries_override(self, monkeypatch):
        monkeypatch.setenv("ERAFRAME_MAX_RETRIES", "5")
        assert EraframeConfig(_env_file=None).max_retries == 5

    def test_model_override(self, monkeypatch):
        monkeypatch.setenv("ERAFRAME_GEMINI_MODEL_ID", "gemini-3-pro-image-preview")
        assert EraframeConfig(_env_file=None).gemini_model_id == "gemini-3-pro-image-preview"

    def test_env_file(self, tmp_path, clean_env):
        env_file = tmp_path / ".env"
        env_file.write_text("ERAFRAME_INITIAL_DELAY_MS=50\nGEMINI_API_KEY=from-file\n")
        cfg = EraframeConfig(_env_file=env_file)
        assert cfg.initial_delay_ms == 50
        assert cfg.require_api_key() == "from-file"


class TestConfigValidation:
    """Verify Pydantic validation constraints on config fields."""

    @pytest.mark.parametrize("value", [0, 11])
    def test_max_retries_out_of_range(self, value):
        with pytest.raises(ValidationError):
            EraframeConfig(_env_file=None, max_retries=value)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            EraframeConfig(_env_file=None, initial_delay_ms=-1)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            EraframeConfig(_env_file=None, log_level="VERBOSE")
