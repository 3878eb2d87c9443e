"""
Log filters for adding static context to exchanger logs.
"""

import logging
from typing import Dict, Any


class ExtraFieldsFilter(logging.Filter):
    """
    Filter that adds extra static fields to all log records.

    Useful for adding environment, service name, Loki tenant hints, etc.

    Example:
        >>> filter = ExtraFieldsFilter({"service": "shipper", "environment": "prod"})
        >>> handler.addFilter(filter)
        >>> logger.info("Started")  # Will include service, environment
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        """
        Initialize filter with extra fields.

        Args:
            extra_fields: Dictionary of fields to add to every log
        """
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        """Add extra fields to record."""
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
