"""
Logging system for the exchanger's own diagnostics.

Example:
    >>> from loki_client.core.logging import ExchangerLogger, LoggingConfig
    >>>
    >>> config = LoggingConfig.create(level="DEBUG", format="json")
    >>> logger = ExchangerLogger(config)
    >>> logger.debug("Push completed", status_code=204)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import ExchangerLogger
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "ExchangerLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "ExtraFieldsFilter",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
