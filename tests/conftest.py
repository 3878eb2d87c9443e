"""
Pytest configuration and fixtures for loki-push-client tests.
"""

import pytest
import responses as responses_lib

from loki_client.core.config import ExchangerConfig
from loki_client.core.exchanger import JSONv1Exchanger
from loki_client.core.logging.config import LoggingConfig
from loki_client.core.models import Level, LogEntry, LogStream


@pytest.fixture
def base_url():
    """Loki address for testing."""
    return "http://loki.example.com:3100"


@pytest.fixture
def push_url(base_url):
    return f"{base_url}/loki/api/v1/push"


@pytest.fixture
def ready_url(base_url):
    return f"{base_url}/ready"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def exchanger(base_url):
    """Plain JSON exchanger, no compression, no auth."""
    exchanger = JSONv1Exchanger(ExchangerConfig(address=base_url))
    yield exchanger
    exchanger.close()


@pytest.fixture
def gzip_exchanger(base_url):
    """Exchanger with gzip-compressed push bodies."""
    exchanger = JSONv1Exchanger(ExchangerConfig(address=base_url, use_gzip=True))
    yield exchanger
    exchanger.close()


@pytest.fixture
def sample_streams():
    """Two streams, the second with an entry-level gap."""
    return [
        LogStream(
            labels={"app": "api", "env": "prod"},
            entries=[
                LogEntry(timestamp=1_700_000_000_000_000_001, log_line=b"GET /users 200"),
                LogEntry(timestamp=1_700_000_000_000_000_002, log_line=b"GET /orders 500", level=Level.ERROR),
            ],
        ),
        LogStream(
            labels={"app": "worker"},
            entries=[None, LogEntry(timestamp=5, log_line="job done")],
        ),
    ]


@pytest.fixture
def expected_push_body():
    """Wire body matching sample_streams."""
    return {
        "streams": [
            {
                "stream": {"app": "api", "env": "prod"},
                "values": [
                    ["1700000000000000001", "GET /users 200"],
                    ["1700000000000000002", "GET /orders 500"],
                ],
            },
            {
                "stream": {"app": "worker"},
                "values": [["5", "job done"]],
            },
        ]
    }


@pytest.fixture
def logging_config():
    """DEBUG logging to console only."""
    return LoggingConfig.create(level="DEBUG", enable_console=True, enable_file=False)
