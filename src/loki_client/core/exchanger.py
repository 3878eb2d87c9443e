# src/loki_client/core/exchanger.py
"""
Exchangers: objects that own the HTTP transport and talk to Loki.

JSONv1Exchanger sends every push directly (no batching, no queue) as JSON to
the v1 push API:
    https://grafana.com/docs/loki/latest/reference/loki-http-api/#ingest-logs
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Sequence
import threading
import time
from urllib.parse import urlparse

import requests

from .codec import encode_push_body
from .config import BasicAuthCredentials, ExchangerConfig
from .deadline import DeadlineAwareAdapter, RequestDeadline
from .dto import PushRequestDTO
from .exceptions import (
    RequestConstructionError,
    TimeoutError,
    TransportError,
    UnexpectedStatusError,
    classify_requests_exception,
)
from .logging import ExchangerLogger
from .models import LogStream, PongResponse
from .session_manager import ThreadSafeSessionManager
from .transform import transform_log_streams
from ..utils.sanitizer import mask_headers, mask_url


def is_success_http_code(code: int) -> bool:
    return 199 < code < 300


class StreamsExchanger(ABC):
    """
    Контракт exchanger'а: отправка батча стримов и readiness probe.

    Альтернативные протоколы (например protobuf push) реализуют этот же
    интерфейс, вызывающий код не меняется.
    """

    @abstractmethod
    def push(self, streams: Optional[Sequence[Optional[LogStream]]]) -> None:
        """Отправить стримы; при неудаче бросает LokiClientException."""

    @abstractmethod
    def ping(self) -> PongResponse:
        """Readiness probe; бросает TransportError если ответ не получен."""

    def close(self) -> None:
        """Освободить транспорт."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class BasicAuthExchanger(ABC):
    """Exchanger, принимающий HTTP Basic credentials."""

    @abstractmethod
    def set_basic_auth(self, username: str, password: str) -> None:
        """Сохранить credentials для последующих push."""


class JSONv1Exchanger(StreamsExchanger, BasicAuthExchanger):
    """
    Direct-send exchanger for the Loki v1 JSON push API.

    Features:
        - optional gzip body (Content-Encoding: gzip)
        - optional HTTP Basic auth on push
        - bounded ping, push bounded only if TimeoutConfig.push is set
        - thread-local sessions: concurrent push/ping on one instance is safe

    Example:
        >>> config = ExchangerConfig.create(address="http://localhost:3100", use_gzip=True)
        >>> with JSONv1Exchanger(config) as exchanger:
        ...     exchanger.push([LogStream(labels={"app": "api"}, entries=[LogEntry.create(b"hello")])])
        ...     exchanger.ping().is_ready
    """

    def __init__(
        self,
        config: ExchangerConfig,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        """
        Args:
            config: ExchangerConfig instance
            session_factory: Builds the per-thread transport; defaults to a
                pooled requests.Session configured from `config`
        """
        self._config = config
        self._credentials: Optional[BasicAuthCredentials] = config.credentials
        self._credentials_lock = threading.Lock()

        self._logger: Optional[ExchangerLogger] = None
        if config.logging:
            # Имя логгера по адресу Loki
            self._logger = ExchangerLogger(config=config.logging, name=self._logger_name(config.address))

        self._session_manager = ThreadSafeSessionManager(
            session_factory=session_factory or self._create_session
        )

    @staticmethod
    def _logger_name(address: str) -> str:
        """loki_client.<host:port>, userinfo отбрасывается."""
        parsed = urlparse(address)
        domain = parsed.netloc.rsplit('@', 1)[-1] if parsed.netloc else (address.split('/')[0] or "unknown")
        return f"loki_client.{domain}"

    def _create_session(self) -> requests.Session:
        """Create configured session."""
        session = requests.Session()

        adapter = DeadlineAwareAdapter(
            pool_connections=self._config.pool.pool_connections,
            pool_maxsize=self._config.pool.pool_maxsize,
            pool_block=self._config.pool.pool_block,
            max_retries=0  # ретраи - забота вызывающего
        )
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        session.verify = self._config.verify_ssl

        return session

    # ==================== Свойства ====================

    @property
    def config(self) -> ExchangerConfig:
        return self._config

    @property
    def credentials(self) -> Optional[BasicAuthCredentials]:
        with self._credentials_lock:
            return self._credentials

    # ==================== Публичный API ====================

    def set_basic_auth(self, username: str, password: str) -> None:
        """
        Store credentials for subsequent pushes. Overwrites the previous pair;
        an empty username or password disables auth. Ping never sends them.
        """
        credentials = BasicAuthCredentials.from_pair(username, password)
        with self._credentials_lock:
            self._credentials = credentials

    def push(self, streams: Optional[Sequence[Optional[LogStream]]]) -> None:
        """
        Transform, encode and POST streams to <address>/loki/api/v1/push.

        Raises:
            SerializationError: body could not be encoded
            RequestConstructionError: request could not be built from the address
            TransportError: the call itself failed
            UnexpectedStatusError: Loki answered outside 200-299
        """
        dto = transform_log_streams(streams)
        if dto is None:
            if self._config.skip_absent_push:
                self._debug("Push skipped, nothing to send")
                return
            dto = PushRequestDTO()

        body = encode_push_body(dto, use_gzip=self._config.use_gzip)

        url = self._config.push_url
        headers = self._base_headers()
        headers['Content-Type'] = 'application/json'
        if self._config.use_gzip:
            headers['Content-Encoding'] = 'gzip'

        # Одна копия на запрос, set_basic_auth может прийти из другого потока
        credentials = self.credentials
        request = self._prepare_request(
            'POST', url,
            headers=headers,
            data=body,
            auth=credentials.as_tuple() if credentials else None,
        )

        self._debug(
            "Push request prepared",
            url=mask_url(url),
            streams=len(dto.streams),
            values=dto.values_count,
            body_bytes=len(body),
            gzip=self._config.use_gzip,
            headers=mask_headers(request.headers),
        )

        start = time.monotonic()
        with self._send(request, url, timeout=self._config.timeout.push) as response:
            if not is_success_http_code(response.status_code):
                raise UnexpectedStatusError(response.status_code, response.text, mask_url(url))

            self._debug(
                "Push completed",
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )

    def ping(self) -> PongResponse:
        """
        GET <address>/ready within TimeoutConfig.ping.

        Any 2xx means ready; any other status is a valid "not ready" answer,
        not an error. The body is never read. The limit is a wall-clock
        deadline for connect plus response headers: when it passes, the
        connection is shut down and TimeoutError is raised.

        Raises:
            RequestConstructionError: request could not be built from the address
            TimeoutError: no complete response headers within the deadline
            TransportError: no response (connection failure)
        """
        url = self._config.ready_url
        timeout = self._config.timeout.ping
        request = self._prepare_request('GET', url, headers=self._base_headers())

        start = time.monotonic()
        deadline = RequestDeadline(timeout)
        with deadline:
            try:
                response = self._send(request, url, timeout=timeout, stream=True)
            except TransportError as e:
                if deadline.expired:
                    raise self._deadline_error(url, timeout) from e
                raise

        with response:
            # После shutdown сокета заголовки могут оказаться обрезанными
            if deadline.expired:
                raise self._deadline_error(url, timeout)
            pong = PongResponse(is_ready=is_success_http_code(response.status_code))

        self._debug(
            "Pong received",
            url=mask_url(url),
            status_code=response.status_code,
            ready=pong.is_ready,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )
        return pong

    def close(self) -> None:
        """
        Закрывает все сессии (из всех потоков) и логгер.

        Повторный вызов безопасен.
        """
        self._session_manager.close_all()
        if self._logger is not None:
            self._logger.close()

    # ==================== Внутренние методы ====================

    def _base_headers(self) -> Dict[str, str]:
        return {'User-Agent': self._config.user_agent}

    def _prepare_request(self, method: str, url: str, **kwargs) -> requests.PreparedRequest:
        try:
            return requests.Request(method, url, **kwargs).prepare()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise RequestConstructionError(f"failed to create request: {e}", mask_url(url)) from e

    def _send(
        self,
        request: requests.PreparedRequest,
        url: str,
        timeout: Optional[float],
        stream: bool = False,
    ) -> requests.Response:
        session = self._session_manager.get_session()
        try:
            return session.send(request, timeout=timeout, stream=stream)
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, mask_url(url), timeout) from e

    @staticmethod
    def _deadline_error(url: str, timeout: float) -> TimeoutError:
        return TimeoutError("Ping deadline exceeded", mask_url(url), timeout)

    def _debug(self, message: str, **fields) -> None:
        if self._logger is not None:
            self._logger.debug(message, **fields)


def new_json_v1_exchanger(
    loki_address: str,
    use_gzip_compression: bool = False,
    **kwargs
) -> JSONv1Exchanger:
    """
    Exchanger with direct send logic (neither batch nor queue) for the Loki
    v1 JSON API.

    Args:
        loki_address: Base address, e.g. "http://localhost:3100"
        use_gzip_compression: gzip the push body
        **kwargs: Any other ExchangerConfig.create() parameter
    """
    config = ExchangerConfig.create(
        address=loki_address,
        use_gzip=use_gzip_compression,
        **kwargs
    )
    return JSONv1Exchanger(config)
