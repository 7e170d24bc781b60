"""
Logging configuration for decimath.

Events are structlog dicts rendered on stdout, as JSON or as console lines.

The library never calls configure_logging() on its own: applications
embedding it decide how (and whether) log events are rendered.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict

from decimath.config import get_settings


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Store the upper-case level name under "level" ("warn" becomes "WARNING")."""
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(log_level: Optional[str] = None, json_output: bool = True) -> None:
    """
    Route decimath events (and the root logger) to stdout through structlog.

    Args:
        log_level: Level name (DEBUG, INFO, ...); defaults to Settings.LOG_LEVEL.
            Unknown names fall back to INFO.
        json_output: One JSON object per event when True, colored console
            lines otherwise
    """
    if log_level is None:
        log_level = get_settings().LOG_LEVEL
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    logging.basicConfig(format="%(message)s", handlers=[handler], level=level, force=True)

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger bound to `name` (usually the module's __name__)."""
    return structlog.get_logger(name)
