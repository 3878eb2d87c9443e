"""
Pydantic settings for environment configuration.
"""

from typing import Optional, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT


class ExchangerSettings(BaseSettings):
    """
    Exchanger configuration from environment variables.

    Reads from:
    1. Environment variables (LOKI_CLIENT_*)
    2. .env file
    3. Defaults

    Example .env file:
        LOKI_CLIENT_ADDRESS=http://loki:3100
        LOKI_CLIENT_USE_GZIP=true
        LOKI_CLIENT_USERNAME=tenant-1
        LOKI_CLIENT_PASSWORD=secret
        LOKI_CLIENT_PING_TIMEOUT=2.0
        LOKI_CLIENT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix='LOKI_CLIENT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    address: str = Field(default="http://localhost:3100", description="Loki base address")
    use_gzip: bool = Field(default=False)

    # Credentials (both or neither)
    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None, repr=False)

    # Timeouts
    ping_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    push_timeout: Optional[float] = Field(default=None, gt=0)

    # Connection pool
    pool_connections: int = Field(default=10, ge=1)
    pool_maxsize: int = Field(default=10, ge=1)

    verify_ssl: bool = Field(default=True)
    skip_absent_push: bool = Field(default=True)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)

    # Logging (disabled unless LOKI_CLIENT_LOG_ENABLED=true)
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_file_path: Optional[str] = None

    @field_validator('address')
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Адрес должен быть http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("address must start with http:// or https://")
        return v.rstrip('/')

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def normalize_log_format(cls, v):
        return v.lower() if isinstance(v, str) else v
