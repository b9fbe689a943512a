"""Unit tests for configure_logging."""

import logging

import pytest

from eraframe.core.logging_setup import configure_logging


@pytest.fixture
def eraframe_logger():
    logger = logging.getLogger("eraframe")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


@pytest.mark.unit
class TestConfigureLogging:
    def test_sets_level(self, eraframe_logger):
        configure_logging("DEBUG")
        assert eraframe_logger.level == logging.DEBUG

    def test_handler_added_once(self, eraframe_logger):
        configure_logging("INFO")
        configure_logging("WARNING")
        ours = [h for h in eraframe_logger.handlers if getattr(h, "_eraframe_handler", False)]
        assert len(ours) == 1
        assert eraframe_logger.level == logging.WARNING

    def test_defaults_to_config_level(self, eraframe_logger):
        from eraframe.core.config import config

        logger = configure_logging()
        assert logger.level == logging.getLevelName(config.log_level)
