"""
LogStream -> PushRequestDTO conversion.
"""

from typing import Optional, Sequence

from .dto import PushRequestDTO, StreamDTO, ValuePair
from .labels import copy_labels
from .models import LogEntry, LogStream


def _decode_line(line) -> str:
    # Invalid UTF-8 ends up as U+FFFD, the same thing a JSON encoder would emit
    if isinstance(line, (bytes, bytearray, memoryview)):
        return bytes(line).decode("utf-8", errors="replace")
    return line


def entry_to_value(entry: LogEntry) -> ValuePair:
    """(nanosecond timestamp as decimal string, log line)."""
    return (str(entry.unix_nano), _decode_line(entry.log_line))


def transform_log_streams(
    streams: Optional[Sequence[Optional[LogStream]]]
) -> Optional[PushRequestDTO]:
    """
    Build the push DTO for a batch of streams.

    Returns None when `streams` itself is None, which callers use as a
    "nothing to send" signal; an empty sequence gives an empty request.
    Absent streams, absent entries and streams left without any entry are
    dropped. Stream and entry order is preserved as given, no sorting.
    """
    if streams is None:
        return None

    push_request = PushRequestDTO()

    for stream in streams:
        if stream is None or not stream.entries:
            continue

        values = [entry_to_value(entry) for entry in stream.entries if entry is not None]
        if not values:
            continue

        push_request.streams.append(
            StreamDTO(stream=copy_labels(stream.labels), values=values)
        )

    return push_request
