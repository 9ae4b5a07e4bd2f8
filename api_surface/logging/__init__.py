"""Logging infrastructure for API Surface.

@public

Key components:
    get_surface_logger: Factory function for creating library loggers
    setup_logging: Initialize logging configuration from YAML
    LoggingConfig: Configuration class for logging settings

Example:
    >>> from api_surface.logging import get_surface_logger
    >>>
    >>> logger = get_surface_logger(__name__)
    >>> logger.info("Extraction started")

Note:
    Always use get_surface_logger() so that logging is configured before
    the first message is emitted.
"""

from .logging_config import LoggingConfig, get_surface_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_surface_logger",
]
