"""Structured JSON logger setup shared across the service."""

import logging

from pythonjsonlogger.json import JsonFormatter

from kb_retrieval.config import settings


def get_logger(name: str) -> logging.Logger:
    """Configure a JSON logger once and reuse it.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter("%(levelname)s %(name)s %(message)s %(asctime)s"))
    logger.addHandler(handler)
    logger.setLevel(settings.log_level)
    logger.propagate = False
    return logger
