"""Logging configuration module."""

import re
from logging import (
    CRITICAL,
    DEBUG,
    ERROR,
    INFO,
    WARNING,
    Handler,
    Logger,
    StreamHandler,
    getLogger,
)
from typing import cast

import structlog
from structlog import dev, processors, stdlib
from structlog.processors import JSONRenderer, TimeStamper, dict_tracebacks
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor, WrappedLogger

from geonorm.core.config import settings

# Define log levels
LOG_LEVELS: dict[str, int] = {
    "debug": DEBUG,
    "info": INFO,
    "warning": WARNING,
    "error": ERROR,
    "critical": CRITICAL,
}

_KEY_PARAM = re.compile(r"([?&]key=)[^&]*")


def configure_logging(testing: bool = False, level: str | None = None) -> None:
    """Configure structured logging for the library.

    Args:
        testing: Whether the library is running in test mode
        level: Log level name, case insensitive; defaults to LOG_LEVEL
    """
    log_level = LOG_LEVELS.get((level or settings.LOG_LEVEL).lower(), INFO)
    json_logs = settings.JSON_LOGS and not testing

    # Configure root logger
    root_logger: Logger = getLogger()
    root_logger.setLevel(log_level)

    # Create and configure package logger
    package_logger: Logger = getLogger("geonorm")
    package_logger.setLevel(log_level)

    # Create handler
    handler: Handler = StreamHandler()
    handler.setLevel(log_level)

    # Define shared processors
    shared_processors: list[Processor] = [
        stdlib.add_logger_name,
        stdlib.add_log_level,
        stdlib.PositionalArgumentsFormatter(),
        TimeStamper(fmt="%Y-%m-%d %H:%M:%S.%f"),
        dict_tracebacks,
    ]

    # Configure structlog
    structlog.configure(
        processors=[
            stdlib.filter_by_level,
            *shared_processors,
            redact_api_key,
            processors.format_exc_info,
            JSONRenderer() if json_logs else processors.KeyValueRenderer(),
        ],
        context_class=dict,
        logger_factory=stdlib.LoggerFactory(),
        wrapper_class=stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure handler formatter
    formatter = stdlib.ProcessorFormatter(
        processor=processors.JSONRenderer() if json_logs else dev.ConsoleRenderer(),
        foreign_pre_chain=shared_processors,
    )
    handler.setFormatter(formatter)

    # Clear existing handlers to prevent duplicates
    root_logger.handlers = []
    package_logger.handlers = []

    root_logger.addHandler(handler)
    package_logger.addHandler(handler)


def get_logger() -> BoundLogger:
    """Get a configured logger instance.

    Returns:
        A structured logger instance.
    """
    return cast(BoundLogger, structlog.get_logger())


def redact_url(url: str) -> str:
    """Mask the ``key`` query parameter of a request URL."""
    return _KEY_PARAM.sub(r"\1<redacted>", url)


def redact_api_key(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Processor that masks API keys in a logged ``url`` field."""
    url = event_dict.get("url")
    if isinstance(url, str):
        event_dict["url"] = redact_url(url)
    return event_dict
