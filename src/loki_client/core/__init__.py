"""Core Loki client модули."""

from .config import (
    DEFAULT_REQUEST_TIMEOUT,
    TimeoutConfig,
    ConnectionPoolConfig,
    BasicAuthCredentials,
    ExchangerConfig,
)
from .exceptions import (
    LokiClientException,
    SerializationError,
    RequestConstructionError,
    ConfigurationError,
    TransportError,
    TimeoutError,
    ConnectionError,
    UnexpectedStatusError,
    classify_requests_exception,
)
from .labels import (
    LOG_LEVEL_FORCED_LABEL,
    copy_labels,
    copy_and_merge_labels,
    with_level_label,
)
from .models import Level, LogEntry, LogStream, PongResponse, level_name, to_unix_nano
from .dto import PushRequestDTO, StreamDTO
from .transform import transform_log_streams
from .codec import encode_push_body, decode_push_body
from .deadline import DeadlineAwareAdapter, RequestDeadline
from .exchanger import (
    StreamsExchanger,
    BasicAuthExchanger,
    JSONv1Exchanger,
    new_json_v1_exchanger,
    is_success_http_code,
)

__all__ = [
    # Config
    "DEFAULT_REQUEST_TIMEOUT",
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "BasicAuthCredentials",
    "ExchangerConfig",
    # Exceptions
    "LokiClientException",
    "SerializationError",
    "RequestConstructionError",
    "ConfigurationError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "UnexpectedStatusError",
    "classify_requests_exception",
    # Deadline
    "RequestDeadline",
    "DeadlineAwareAdapter",
    # Labels
    "LOG_LEVEL_FORCED_LABEL",
    "copy_labels",
    "copy_and_merge_labels",
    "with_level_label",
    # Models
    "Level",
    "LogEntry",
    "LogStream",
    "PongResponse",
    "level_name",
    "to_unix_nano",
    # Wire
    "PushRequestDTO",
    "StreamDTO",
    "transform_log_streams",
    "encode_push_body",
    "decode_push_body",
    # Exchanger
    "StreamsExchanger",
    "BasicAuthExchanger",
    "JSONv1Exchanger",
    "new_json_v1_exchanger",
    "is_success_http_code",
]
