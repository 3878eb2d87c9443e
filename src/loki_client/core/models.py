"""
Domain model: log entries and streams as the caller builds them.

The wire representation lives in dto.py; transform.py converts between them.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Mapping, Optional, Sequence, Union

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Timestamp = Union[int, datetime]
LogLine = Union[bytes, str]


class Level(IntEnum):
    """Severity of a log entry / stream."""
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    PANIC = 5

    def __str__(self) -> str:
        return self.name


def level_name(value: int) -> str:
    """
    Имя уровня для произвольного int.

    Examples:
        >>> level_name(2)
        'WARN'
        >>> level_name(42)
        'unknown'
    """
    try:
        return Level(value).name
    except ValueError:
        return "unknown"


def to_unix_nano(value: Timestamp) -> int:
    """
    Exact nanoseconds since the Unix epoch.

    Integers are taken as nanoseconds already. Datetimes are converted without
    going through float, so no precision is lost; naive datetimes are
    interpreted as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _EPOCH
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return micros * 1_000
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"timestamp must be int nanoseconds or datetime, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class LogEntry:
    """
    One log line.

    Attributes:
        timestamp: Nanoseconds since epoch (int) or a datetime
        log_line: Raw payload; bytes are decoded as UTF-8 on the wire
        level: Severity
        labels: Entry-specific labels (may be empty)
    """
    timestamp: Timestamp
    log_line: LogLine
    level: Level = Level.INFO
    labels: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        log_line: LogLine,
        timestamp: Optional[Timestamp] = None,
        level: Level = Level.INFO,
        labels: Optional[Mapping[str, str]] = None,
    ) -> "LogEntry":
        """Build an entry, stamping it with time.time_ns() when no timestamp is given."""
        return cls(
            timestamp=time.time_ns() if timestamp is None else timestamp,
            log_line=log_line,
            level=level,
            labels=dict(labels) if labels else {},
        )

    @property
    def unix_nano(self) -> int:
        return to_unix_nano(self.timestamp)


@dataclass
class LogStream:
    """
    Entries sharing one set of identifying labels.

    `level` is informational only and is not sent to Loki. `entries` may
    contain None, which is skipped on transformation.
    """
    labels: Mapping[str, str] = field(default_factory=dict)
    entries: Sequence[Optional[LogEntry]] = field(default_factory=list)
    level: Level = Level.INFO


@dataclass(frozen=True)
class PongResponse:
    """Result of a readiness probe."""
    is_ready: bool
