"""Logging configuration for applications embedding Eraframe.

Library modules only create loggers (``logging.getLogger(__name__)``); this
helper is for scripts and services that want sensible output without writing
their own logging setup.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the ``eraframe`` logger.

    Safe to call more than once: the handler is only added the first time.

    Args:
        level: Log level name or number (defaults to ``config.log_level``)

    Returns:
        The configured ``eraframe`` logger
    """
    if level is None:
        from .config import config

        level = config.log_level

    logger = logging.getLogger("eraframe")
    logger.setLevel(level)

    if not any(getattr(h, "_eraframe_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._eraframe_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
