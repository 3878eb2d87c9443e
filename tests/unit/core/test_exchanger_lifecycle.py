"""
Tests for exchanger contracts, sessions and concurrency.
"""

import threading
from unittest.mock import MagicMock

import pytest
import requests
import responses

from loki_client.core.config import ExchangerConfig
from loki_client.core.exchanger import (
    BasicAuthExchanger,
    JSONv1Exchanger,
    StreamsExchanger,
    is_success_http_code,
    new_json_v1_exchanger,
)
from loki_client.core.models import LogEntry, LogStream, PongResponse


class TestSuccessRange:
    """is_success_http_code boundaries."""

    @pytest.mark.parametrize("code,expected", [
        (199, False), (200, True), (250, True), (299, True), (300, False), (500, False),
    ])
    def test_boundaries(self, code, expected):
        assert is_success_http_code(code) is expected


class TestContracts:
    """Interfaces."""

    def test_json_exchanger_implements_both(self, exchanger):
        assert isinstance(exchanger, StreamsExchanger)
        assert isinstance(exchanger, BasicAuthExchanger)

    def test_interfaces_are_abstract(self):
        with pytest.raises(TypeError):
            StreamsExchanger()

    def test_alternative_implementation(self):
        class RecordingExchanger(StreamsExchanger):
            def __init__(self):
                self.pushed = []

            def push(self, streams):
                self.pushed.append(streams)

            def ping(self):
                return PongResponse(is_ready=True)

        with RecordingExchanger() as exchanger:
            exchanger.push([])
            assert exchanger.ping().is_ready
            assert exchanger.pushed == [[]]

    def test_factory(self, base_url):
        exchanger = new_json_v1_exchanger(base_url, push_timeout=3.0, username="u", password="p")

        assert isinstance(exchanger, JSONv1Exchanger)
        assert exchanger.config.use_gzip is False
        assert exchanger.config.timeout.push == 3.0
        assert exchanger.credentials.username == "u"
        exchanger.close()


class TestSessions:
    """Transport ownership."""

    def test_custom_session_factory(self, base_url):
        response = requests.Response()
        response.status_code = 204
        response._content = b""
        response._content_consumed = True
        session = MagicMock(spec=requests.Session)
        session.send.return_value = response

        exchanger = JSONv1Exchanger(ExchangerConfig(address=base_url), session_factory=lambda: session)
        exchanger.push([LogStream(entries=[LogEntry(timestamp=1, log_line=b"x")])])

        prepared = session.send.call_args[0][0]
        assert prepared.method == "POST"
        assert prepared.url == f"{base_url}/loki/api/v1/push"
        assert session.send.call_args[1]["timeout"] is None

        exchanger.close()
        session.close.assert_called_once()

    def test_sessions_are_thread_local(self, base_url):
        created = []

        def factory():
            session = requests.Session()
            created.append(session)
            return session

        exchanger = JSONv1Exchanger(ExchangerConfig(address=base_url), session_factory=factory)
        main_session = exchanger._session_manager.get_session()

        other = []
        thread = threading.Thread(target=lambda: other.append(exchanger._session_manager.get_session()))
        thread.start()
        thread.join()

        assert exchanger._session_manager.get_session() is main_session
        assert other[0] is not main_session
        assert len(created) == 2

        exchanger.close()
        assert exchanger._session_manager.get_active_sessions_count() == 0

    def test_close_is_idempotent(self, base_url):
        exchanger = JSONv1Exchanger(ExchangerConfig(address=base_url))
        exchanger.close()
        exchanger.close()

    def test_default_session_uses_pool_config(self, base_url):
        config = ExchangerConfig.create(address=base_url, pool_maxsize=3, verify_ssl=False)
        exchanger = JSONv1Exchanger(config)

        session = exchanger._session_manager.get_session()
        adapter = session.get_adapter(base_url)

        assert adapter._pool_maxsize == 3
        assert adapter.max_retries.total == 0
        assert session.verify is False
        exchanger.close()


class TestConcurrency:
    """Concurrent pushes and credential changes."""

    @responses.activate
    def test_concurrent_pushes(self, exchanger, push_url):
        responses.add(responses.POST, push_url, status=204)
        errors = []

        def worker(n):
            try:
                for i in range(5):
                    exchanger.push([LogStream(
                        labels={"worker": str(n)},
                        entries=[LogEntry(timestamp=i, log_line=f"line {i}")],
                    )])
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(responses.calls) == 40

    @responses.activate
    def test_credentials_change_between_pushes(self, exchanger, push_url):
        responses.add(responses.POST, push_url, status=204)
        stream = [LogStream(entries=[LogEntry(timestamp=1, log_line=b"x")])]

        def set_auth():
            exchanger.set_basic_auth("other", "pair")

        exchanger.push(stream)
        thread = threading.Thread(target=set_auth)
        thread.start()
        thread.join()
        exchanger.push(stream)

        assert "Authorization" not in responses.calls[0].request.headers
        assert responses.calls[1].request.headers["Authorization"].startswith("Basic ")
