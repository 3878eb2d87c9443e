"""Loki push client - converts log streams to the Loki v1 push API and ships them."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.config import (
    DEFAULT_REQUEST_TIMEOUT,
    ExchangerConfig,
    TimeoutConfig,
    ConnectionPoolConfig,
    BasicAuthCredentials,
)
from .core.exceptions import (
    LokiClientException,
    SerializationError,
    RequestConstructionError,
    ConfigurationError,
    TransportError,
    TimeoutError,
    ConnectionError,
    UnexpectedStatusError,
)
from .core.models import Level, LogEntry, LogStream, PongResponse
from .core.labels import copy_labels, copy_and_merge_labels, with_level_label
from .core.exchanger import (
    StreamsExchanger,
    BasicAuthExchanger,
    JSONv1Exchanger,
    new_json_v1_exchanger,
)
from .core.env_config import load_from_env
from .core.logging import LoggingConfig

# Users can configure logging themselves using logging.getLogger('loki_client')
logging.getLogger('loki_client').addHandler(logging.NullHandler())

try:
    __version__ = version("loki-push-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__author__ = "Loki Push Client Contributors"
__license__ = "MIT"

__all__ = [
    # Exchanger
    "StreamsExchanger",
    "BasicAuthExchanger",
    "JSONv1Exchanger",
    "new_json_v1_exchanger",

    # Model
    "Level",
    "LogEntry",
    "LogStream",
    "PongResponse",
    "copy_labels",
    "copy_and_merge_labels",
    "with_level_label",

    # Config
    "DEFAULT_REQUEST_TIMEOUT",
    "ExchangerConfig",
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "BasicAuthCredentials",
    "LoggingConfig",
    "load_from_env",

    # Exceptions
    "LokiClientException",
    "SerializationError",
    "RequestConstructionError",
    "ConfigurationError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "UnexpectedStatusError",

    # Version
    "__version__",
]
