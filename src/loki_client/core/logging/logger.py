"""
Logger used by the exchanger for its own diagnostics.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig, LogLevel
from .formatters import get_formatter
from .filters import ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class ExchangerLogger:
    """
    Thin wrapper around a stdlib logger configured from LoggingConfig.

    Keyword fields passed to the log methods become LogRecord extras and are
    masked through mask_sensitive_data first, so credentials never reach the
    handlers.

    Example:
        >>> logger = ExchangerLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.debug("Push completed", status_code=204, streams=3)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "loki_client"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = self._get_level(self.config.level)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Remove existing handlers (if reinitializing)
        self._logger.handlers.clear()

        filters = []
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(
                create_console_handler(level=level, formatter=formatter, filters=filters)
            )

        if self.config.enable_file and self.config.file_path:
            self._logger.addHandler(
                create_file_handler(
                    file_path=self.config.file_path,
                    level=level,
                    formatter=formatter,
                    max_bytes=self.config.max_bytes,
                    backup_count=self.config.backup_count,
                    filters=filters
                )
            )

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, level.value)

    def is_enabled_for(self, level: int) -> bool:
        return not self._closed and self._logger.isEnabledFor(level)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(message, extra=mask_sensitive_data(kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, extra=mask_sensitive_data(kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(message, extra=mask_sensitive_data(kwargs))

    def close(self) -> None:
        """
        Flush and close all handlers.

        Idempotent - safe to call multiple times.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
