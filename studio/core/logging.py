"""Structured logging using structlog.

Console output with call sites in development, JSON lines in production.
Every event carries the app name and environment.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from studio.core.config import Config, get_config

_CALLSITE = structlog.processors.CallsiteParameter


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp ``app`` and ``env`` on each event."""
    config = get_config()
    event_dict["app"] = config.app_name
    event_dict["env"] = config.app_env
    return event_dict


def _output_processors(config: Config) -> list[Processor]:
    if config.is_production:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    processors: list[Processor] = []
    if config.is_development:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[_CALLSITE.FILENAME, _CALLSITE.FUNC_NAME, _CALLSITE.LINENO]
            )
        )
    processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def setup_logging() -> None:
    """Configure structlog on top of the stdlib root logger.

    Example:
        >>> setup_logging()
        >>> get_logger(__name__).info("Draft validated", kind="channel")
    """
    config = get_config()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.log_level),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_app_context,
            *_output_processors(config),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger, usually ``get_logger(__name__)``."""
    return structlog.get_logger(name)
