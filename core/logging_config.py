"""Logging configuration for the reminder registry.

Every module obtains its logger with ``logging.getLogger(__name__)``; this
module only wires the root handler once at application start-up.
"""

from __future__ import annotations

import logging
from typing import Optional

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_configured = False

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """Configure root logging for the service.

    Safe to call more than once: later calls only adjust the level.

    Raises:
        ValueError: If ``level`` is not a standard logging level name.
    """
    global _logging_configured

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(
            f"Invalid log level: {level}. "
            f"Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )

    root = logging.getLogger()
    root.setLevel(numeric_level)
    if _logging_configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_LOG_FORMAT))
    root.addHandler(handler)
    _logging_configured = True
    logger.debug("Logging configured at %s", level.upper())
