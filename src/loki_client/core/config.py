"""
Система конфигурации для Loki exchanger.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .logging import LoggingConfig

# Таймаут отправки батча; тот же лимит используется для ping
DEFAULT_REQUEST_TIMEOUT: float = 5.0

DEFAULT_USER_AGENT = "loki-push-client"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов.

    Args:
        ping: Лимит на весь readiness запрос (сек)
        push: Лимит на push запрос (сек). None - без явного лимита,
              ожидание ограничено только поведением транспорта.

    Examples:
        >>> TimeoutConfig()                    # ping=5.0, push без лимита
        >>> TimeoutConfig(ping=1.0, push=30.0)
    """
    ping: float = DEFAULT_REQUEST_TIMEOUT
    push: Optional[float] = None

    def __post_init__(self):
        """Валидация."""
        if self.ping <= 0:
            raise ValueError("ping timeout must be positive")
        if self.push is not None and self.push <= 0:
            raise ValueError("push timeout must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONNECTION POOL CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ConnectionPoolConfig:
    """
    Конфигурация connection pool.

    Args:
        pool_connections: Количество connection pools для кеширования
        pool_maxsize: Максимум соединений в пуле
        pool_block: Блокировать при достижении лимита
    """
    pool_connections: int = 10
    pool_maxsize: int = 10
    pool_block: bool = False

    def __post_init__(self):
        """Валидация."""
        if self.pool_connections <= 0:
            raise ValueError("pool_connections must be positive")
        if self.pool_maxsize <= 0:
            raise ValueError("pool_maxsize must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CREDENTIALS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class BasicAuthCredentials:
    """
    HTTP Basic credentials. Существуют только парой: оба поля непустые.

    Отсутствие аутентификации - это None на уровне ExchangerConfig,
    а не пустые строки.

    Examples:
        >>> BasicAuthCredentials("promtail", "s3cret")
        >>> BasicAuthCredentials.from_pair("", "s3cret") is None
        True
    """
    username: str
    password: str = field(repr=False)

    def __post_init__(self):
        """Валидация."""
        if not self.username or not self.password:
            raise ValueError("username and password must both be non-empty")

    @classmethod
    def from_pair(
        cls,
        username: Optional[str],
        password: Optional[str]
    ) -> Optional["BasicAuthCredentials"]:
        """Пустой username или password отключает аутентификацию целиком."""
        if not username or not password:
            return None
        return cls(username, password)

    def as_tuple(self):
        """Вернуть как (username, password) для requests."""
        return (self.username, self.password)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ExchangerConfig:
    """
    Главная конфигурация exchanger'а.

    Args:
        address: Базовый адрес Loki (например http://loki:3100)
        use_gzip: Сжимать тело push запроса gzip
        credentials: Basic auth для push (None - без аутентификации)
        timeout: Таймауты ping/push
        pool: Параметры connection pool
        verify_ssl: Проверять SSL сертификаты
        skip_absent_push: push(None) не делает сетевой вызов вообще;
                          False - отправить {"streams": []}
        user_agent: Значение User-Agent заголовка
        logging: Конфигурация логирования (None - логирование выключено)

    Examples:
        >>> ExchangerConfig(address="http://localhost:3100")
        >>> ExchangerConfig.create(
        ...     address="https://logs.example.com",
        ...     use_gzip=True,
        ...     username="tenant",
        ...     password="secret",
        ...     push_timeout=30.0,
        ... )
    """
    address: str
    use_gzip: bool = False
    credentials: Optional[BasicAuthCredentials] = None
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    pool: ConnectionPoolConfig = field(default_factory=ConnectionPoolConfig)
    verify_ssl: bool = True
    skip_absent_push: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    logging: Optional["LoggingConfig"] = None

    def __post_init__(self):
        """Нормализация адреса: без завершающего слеша."""
        if self.address is None:
            raise ValueError("address is required")
        object.__setattr__(self, 'address', self.address.rstrip('/'))

    @property
    def push_url(self) -> str:
        return f"{self.address}/loki/api/v1/push"

    @property
    def ready_url(self) -> str:
        return f"{self.address}/ready"

    @classmethod
    def create(
        cls,
        address: str,
        use_gzip: bool = False,
        username: Optional[str] = None,
        password: Optional[str] = None,
        ping_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        push_timeout: Optional[float] = None,
        pool_connections: int = 10,
        pool_maxsize: int = 10,
        pool_block: bool = False,
        verify_ssl: bool = True,
        skip_absent_push: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        logging: Optional["LoggingConfig"] = None,
    ) -> "ExchangerConfig":
        """
        Создать конфиг из плоских параметров.

        Returns:
            ExchangerConfig instance
        """
        return cls(
            address=address,
            use_gzip=use_gzip,
            credentials=BasicAuthCredentials.from_pair(username, password),
            timeout=TimeoutConfig(ping=ping_timeout, push=push_timeout),
            pool=ConnectionPoolConfig(
                pool_connections=pool_connections,
                pool_maxsize=pool_maxsize,
                pool_block=pool_block,
            ),
            verify_ssl=verify_ssl,
            skip_absent_push=skip_absent_push,
            user_agent=user_agent,
            logging=logging,
        )

    def with_credentials(
        self,
        username: Optional[str],
        password: Optional[str]
    ) -> "ExchangerConfig":
        """Новый конфиг с заменёнными credentials (immutable update)."""
        return replace(self, credentials=BasicAuthCredentials.from_pair(username, password))
