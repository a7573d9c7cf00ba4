"""
Logging for the upload pipeline.

Every stage logs through the single "upload_service" logger: rejections
(policy violations, infected files) at INFO/WARNING, backend and scanner
failures at ERROR with the underlying cause. The HTTP layer never echoes
those details to clients. The level comes from the LOG_LEVEL setting.
"""
import logging
import sys

from upload_service.config import settings

LOGGER_NAME = "upload_service"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Return the pipeline logger, attaching a stdout handler on first use.

    Args:
        level: Level name overriding LOG_LEVEL (e.g. "DEBUG")
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
