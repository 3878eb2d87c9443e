"""
Wire DTOs of the Loki v1 push API.

    {
        "streams": [
            {
                "stream": {"label": "value"},
                "values": [
                    ["<unix epoch in nanoseconds>", "<log line>"],
                    ["<unix epoch in nanoseconds>", "<log line>"]
                ]
            }
        ]
    }

See https://grafana.com/docs/loki/latest/reference/loki-http-api/#ingest-logs
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

ValuePair = Tuple[str, str]


@dataclass
class StreamDTO:
    stream: Dict[str, str]
    values: List[ValuePair] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stream": self.stream,
            "values": [[ts, line] for ts, line in self.values],
        }


@dataclass
class PushRequestDTO:
    streams: List[StreamDTO] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"streams": [s.to_dict() for s in self.streams]}

    @property
    def values_count(self) -> int:
        return sum(len(s.values) for s in self.streams)
