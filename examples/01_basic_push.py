"""
Basic push / ping against a local Loki.

    docker run -p 3100:3100 grafana/loki
    python examples/01_basic_push.py
"""

from datetime import datetime, timezone

from loki_client import (
    Level,
    LogEntry,
    LogStream,
    LokiClientException,
    UnexpectedStatusError,
    new_json_v1_exchanger,
    with_level_label,
)


def main():
    with new_json_v1_exchanger("http://localhost:3100", use_gzip_compression=True) as exchanger:
        pong = exchanger.ping()
        print(f"Loki ready: {pong.is_ready}")
        if not pong.is_ready:
            return

        # Optional; an empty pair keeps auth off
        exchanger.set_basic_auth("", "")

        streams = [
            LogStream(
                labels=with_level_label({"app": "example", "host": "laptop"}, Level.INFO),
                entries=[
                    LogEntry.create(b"service started"),
                    LogEntry.create("listening on :8080", timestamp=datetime.now(timezone.utc)),
                ],
            ),
            LogStream(
                labels=with_level_label({"app": "example", "host": "laptop"}, Level.ERROR),
                level=Level.ERROR,
                entries=[LogEntry.create(b"database unreachable", level=Level.ERROR)],
            ),
        ]

        try:
            exchanger.push(streams)
            print("Pushed 2 streams")
        except UnexpectedStatusError as e:
            print(f"Loki rejected the push: {e.status_code} {e.body}")
        except LokiClientException as e:
            print(f"Push failed (retryable={e.retryable}): {e}")


if __name__ == "__main__":
    main()
