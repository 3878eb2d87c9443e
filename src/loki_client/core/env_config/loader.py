"""
Configuration loader from environment variables and .env files.
"""

from typing import Optional

from pydantic import ValidationError

from ..config import ExchangerConfig
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from .validator import ExchangerSettings


def load_from_env(env_file: Optional[str] = None, **overrides) -> ExchangerConfig:
    """
    Load ExchangerConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters
    2. Environment variables (LOKI_CLIENT_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Custom .env file path
        **overrides: Explicit overrides, named like ExchangerSettings fields

    Returns:
        ExchangerConfig instance

    Raises:
        ConfigurationError: settings failed validation

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(address="http://loki.internal:3100", use_gzip=True)
    """
    try:
        # init kwargs beat env vars and the .env file in pydantic-settings
        settings = ExchangerSettings(_env_file=env_file or ".env", **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid exchanger settings: {e}") from e

    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_file=settings.log_file_path is not None,
            file_path=settings.log_file_path,
        )

    return ExchangerConfig.create(
        address=settings.address,
        use_gzip=settings.use_gzip,
        username=settings.username,
        password=settings.password,
        ping_timeout=settings.ping_timeout,
        push_timeout=settings.push_timeout,
        pool_connections=settings.pool_connections,
        pool_maxsize=settings.pool_maxsize,
        verify_ssl=settings.verify_ssl,
        skip_absent_push=settings.skip_absent_push,
        user_agent=settings.user_agent,
        logging=logging_config,
    )
