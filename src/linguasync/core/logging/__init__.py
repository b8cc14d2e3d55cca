"""
LinguaSync Logging Module - Structured Application Logging.

Structured logging for the registry and detection layers, built on
structlog with a rich console handler for development and JSON output
for everything else.

Example:
    >>> from linguasync.core.logging import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Registry ready", registry="DEFAULT", languages=55)
    >>>
    >>> # Bind persistent context
    >>> session_logger = logger.bind(session="req-456")
    >>> session_logger.debug("Estimation finished", top="en")
"""

from .logger import bind_registry, get_logger, setup_logging

__all__ = [
    "bind_registry",
    "get_logger",
    "setup_logging",
]
