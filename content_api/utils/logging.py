"""
Logging utilities for the Content Publishing API.

Provides standardized logger configuration following security and privacy rules.

CRITICAL SECURITY RULES:
- NEVER log plaintext passwords or password digests
- NEVER log bearer tokens or the JWT signing secret
- NEVER log full request bodies of auth endpoints

Acceptable logging:
- High-level events (e.g., "User registered", "Article created")
- Identifiers (user id, author code, category code, article id)
- Error codes and sanitized error messages
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger for the specified module.

    Records propagate to the root logger, so the format and handlers set by
    configure_logging() apply even to loggers created at import time.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to the root level set by
               configure_logging, i.e. LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from content_api.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return logger
