"""Logging configuration helpers."""

import logging

_LOGGER_NAME = "meal_scan"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the service logger with a single stream handler."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
