"""
Structured logging configuration for LinguaSync.

This module provides the logging infrastructure with support for structured
logging, JSON formatting and rich console output. It integrates structlog
for key-value logging while staying compatible with standard Python logging.

Functions:
    setup_logging(): Initialize logging configuration
    get_logger(name): Get configured logger instance
    bind_registry(name): Get a logger with a bound registry name

Configuration:
    Logging behavior is controlled by environment variables:
    - LOG_LEVEL: Minimum log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    - LOG_FORMAT: Output format (json/text)
    - LOG_FILE_PATH: Optional file output path
    - DEBUG: Enable development mode with rich formatting

Example:
    >>> from linguasync.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Profiles loaded", registry="DEFAULT", languages=55)
"""

import logging
import logging.config
import sys
from pathlib import Path

import structlog
from rich.console import Console
from rich.logging import RichHandler

from linguasync.core.config.settings import settings


def setup_logging() -> None:
    """
    Initialize logging configuration.

    Sets up structlog processors and the standard library handlers. The
    handler is chosen from the environment:
        - Development/DEBUG: Rich console handler on stderr
        - Otherwise: plain stream handler on stderr, so that CLI output
          on stdout stays machine readable
        - File: additional file handler when LOG_FILE_PATH is configured
    """

    # Configure structlog processors
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    handlers = []

    if settings.DEBUG or settings.ENVIRONMENT == "development":
        console = Console(stderr=True)
        rich_handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(rich_handler)
    else:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(stream_handler)

    if settings.LOG_FILE_PATH:
        file_path = Path(settings.LOG_FILE_PATH)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path)
        file_handler.setLevel(settings.LOG_LEVEL)
        handlers.append(file_handler)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        handlers=handlers,
        format="%(message)s",
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structured logger instance.

    Args:
        name (str): Logger name, typically __name__ of the calling module

    Returns:
        structlog.BoundLogger: Configured logger instance

    Note:
        If logging hasn't been configured yet, this function will
        call setup_logging() first.
    """
    if not structlog.is_configured():
        setup_logging()
    return structlog.get_logger(name)


def bind_registry(registry_name: str) -> structlog.BoundLogger:
    """
    Create a logger with a bound registry name.

    Every record emitted through the returned logger carries
    ``registry=<name>``, which keeps the load history of several named
    registries apart in aggregated logs.

    Example:
        >>> logger = bind_registry("DEFAULT")
        >>> logger.info("Loading profiles", source="/opt/profiles")
    """
    logger = get_logger("linguasync.detection.registry")
    return logger.bind(registry=registry_name)


# Setup logging on import
setup_logging()
