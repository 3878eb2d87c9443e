"""
Push body encoding: JSON, optionally gzip-compressed.
"""

import gzip
import io
import json
from typing import Any, Dict, Union

from .dto import PushRequestDTO
from .exceptions import SerializationError


def _dumps(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")


def encode_push_body(dto: PushRequestDTO, use_gzip: bool = False) -> bytes:
    """
    Serialize the DTO into the request body.

    With use_gzip the JSON goes through a GzipFile opened in a `with` block,
    so the gzip trailer is written even if encoding fails half way.

    Raises:
        SerializationError: JSON encoding or gzip finalization failed
    """
    try:
        if not use_gzip:
            return _dumps(dto.to_dict())

        buf = io.BytesIO()
        with gzip.GzipFile(fileobj=buf, mode="wb") as gz:
            gz.write(_dumps(dto.to_dict()))
        return buf.getvalue()
    except (TypeError, ValueError, OSError) as e:
        raise SerializationError(f"failed to encode streams message: {e}") from e


def decode_push_body(body: Union[bytes, bytearray], gzipped: bool = False) -> Dict[str, Any]:
    """Inverse of encode_push_body, handy for diagnostics of captured requests."""
    data = gzip.decompress(bytes(body)) if gzipped else bytes(body)
    return json.loads(data.decode("utf-8"))
