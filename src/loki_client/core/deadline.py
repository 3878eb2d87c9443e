# src/loki_client/core/deadline.py
"""
Wall-clock deadline for a single blocking request.

requests applies a float timeout to the connect step and to every socket
read separately, so a server that dribbles its headers never trips it.
RequestDeadline arms a daemon timer; when it fires, every connection the
request touched on the calling thread is shut down, which unblocks the
pending read. The caller then checks `expired` and reports a timeout.

Only sessions mounted with DeadlineAwareAdapter can be cut off.
"""
import socket
import threading
from typing import Any, Optional, Set

from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection, HTTPSConnection
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool

_active = threading.local()


def _abort_connection(conn: Any) -> None:
    sock = getattr(conn, 'sock', None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        # already closed by the other side
        pass


class RequestDeadline:
    """
    Deadline scoped to the calling thread.

    Example:
        >>> with RequestDeadline(5.0) as deadline:
        ...     response = session.send(request, timeout=5.0)
        >>> deadline.expired
        False
    """

    def __init__(self, seconds: float):
        self.seconds = seconds
        self._expired = False
        self._connections: Set[Any] = set()
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    @property
    def expired(self) -> bool:
        with self._lock:
            return self._expired

    def watch(self, conn: Any) -> None:
        """Track a connection; one joining after expiry is cut off at once."""
        with self._lock:
            if not self._expired:
                self._connections.add(conn)
                return
        _abort_connection(conn)

    def start(self) -> None:
        self._timer = threading.Timer(self.seconds, self._expire)
        self._timer.daemon = True
        self._timer.start()
        _active.deadline = self

    def cancel(self) -> None:
        """Disarm the timer; `expired` is final afterwards."""
        if getattr(_active, 'deadline', None) is self:
            _active.deadline = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer.join()

    def _expire(self) -> None:
        with self._lock:
            self._expired = True
            connections = list(self._connections)
            self._connections.clear()

        for conn in connections:
            _abort_connection(conn)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cancel()
        return False


def current_deadline() -> Optional[RequestDeadline]:
    return getattr(_active, 'deadline', None)


# ==================== urllib3 hooks ====================

class _WatchedConnectionMixin:
    """Registers the connection with the calling thread's deadline."""

    def connect(self):
        deadline = current_deadline()
        if deadline is not None:
            deadline.watch(self)
        super().connect()  # type: ignore[misc]
        # the timer may have fired before the socket existed
        if deadline is not None and deadline.expired:
            _abort_connection(self)

    def request(self, *args, **kwargs):
        deadline = current_deadline()
        if deadline is not None:
            deadline.watch(self)
        return super().request(*args, **kwargs)  # type: ignore[misc]


class WatchedHTTPConnection(_WatchedConnectionMixin, HTTPConnection):
    pass


class WatchedHTTPSConnection(_WatchedConnectionMixin, HTTPSConnection):
    pass


class WatchedHTTPConnectionPool(HTTPConnectionPool):
    ConnectionCls = WatchedHTTPConnection


class WatchedHTTPSConnectionPool(HTTPSConnectionPool):
    ConnectionCls = WatchedHTTPSConnection


WATCHED_POOL_CLASSES = {
    'http': WatchedHTTPConnectionPool,
    'https': WatchedHTTPSConnectionPool,
}


class DeadlineAwareAdapter(HTTPAdapter):
    """HTTPAdapter whose connections can be cut off by RequestDeadline."""

    def init_poolmanager(self, *args, **kwargs):
        super().init_poolmanager(*args, **kwargs)
        self.poolmanager.pool_classes_by_scheme = dict(WATCHED_POOL_CLASSES)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        manager = super().proxy_manager_for(proxy, **proxy_kwargs)
        if not proxy.lower().startswith('socks'):
            manager.pool_classes_by_scheme = dict(WATCHED_POOL_CLASSES)
        return manager
