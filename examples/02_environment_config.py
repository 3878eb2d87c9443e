"""
Exchanger built from LOKI_CLIENT_* environment variables / .env file.

    LOKI_CLIENT_ADDRESS=https://logs.example.com
    LOKI_CLIENT_USE_GZIP=true
    LOKI_CLIENT_USERNAME=tenant
    LOKI_CLIENT_PASSWORD=secret
    LOKI_CLIENT_PUSH_TIMEOUT=30
    LOKI_CLIENT_LOG_ENABLED=true
    LOKI_CLIENT_LOG_LEVEL=DEBUG
"""

from loki_client import JSONv1Exchanger, LogEntry, LogStream, load_from_env


def main():
    config = load_from_env()
    print(f"Address: {config.address}, gzip: {config.use_gzip}, auth: {config.credentials is not None}")

    with JSONv1Exchanger(config) as exchanger:
        exchanger.push([LogStream(labels={"job": "env-example"}, entries=[LogEntry.create(b"hello")])])


if __name__ == "__main__":
    main()
