"""Structured logging utilities.

Every record follows ``<event> | key=value | key=value`` so booking activity
can be grepped by field from plain stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

from backend.utils.config import get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None) -> None:
    """Configure process-wide logging once."""

    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    resolved_level = (level or get_settings().log_level).upper()
    logging.basicConfig(level=resolved_level, format=LOG_FORMAT, stream=sys.stdout)
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)


def format_fields(**fields: Any) -> str:
    """Render keyword fields as `` | key=value`` pairs in insertion order."""
    return "".join(f" | {key}={value}" for key, value in fields.items())


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit one structured event record."""
    if not logger.isEnabledFor(level):
        return
    logger.log(level, "%s%s", event, format_fields(**fields))
