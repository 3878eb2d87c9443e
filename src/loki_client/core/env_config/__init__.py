"""
Environment configuration for the exchanger.

Example:
    >>> from loki_client.core.env_config import load_from_env
    >>>
    >>> config = load_from_env()                       # .env + LOKI_CLIENT_*
    >>> config = load_from_env(env_file="loki.env")
    >>> config = load_from_env(address="http://loki:3100", use_gzip=True)
"""

from .loader import load_from_env
from .validator import ExchangerSettings

__all__ = [
    "load_from_env",
    "ExchangerSettings",
]
