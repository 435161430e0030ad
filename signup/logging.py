"""Logging for the sign-up package."""

import logging
from pythonjsonlogger import jsonlogger

from . import config

_configured = False


def setup_logger() -> None:
    """
    Send JSON-formatted records from the root logger to stderr.

    Call this once from the application that embeds the form; importing the
    package does not install any handlers.
    """
    global _configured
    if _configured:
        return
    logHandler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(levelname)s %(name)s %(message)s',
        rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
    )
    logHandler.setFormatter(formatter)
    logger = logging.getLogger()
    logger.addHandler(logHandler)
    _configured = True


def getLogger(name: str) -> logging.Logger:
    """Get a logger for ``name`` at the configured level."""
    logger = logging.getLogger(name)
    logger.setLevel(config.LOGLEVEL)
    return logger
