"""
Tests for push body encoding.
"""

import gzip
import json
import math

import pytest

from loki_client.core.codec import decode_push_body, encode_push_body
from loki_client.core.dto import PushRequestDTO, StreamDTO
from loki_client.core.exceptions import SerializationError


@pytest.fixture
def dto():
    return PushRequestDTO(streams=[
        StreamDTO(stream={"app": "api"}, values=[("1", "привет <b>"), ("2", "tab\tnewline\n")]),
    ])


class TestEncodePushBody:
    """Test encode_push_body."""

    def test_plain_json(self, dto):
        body = encode_push_body(dto)
        assert json.loads(body.decode("utf-8")) == dto.to_dict()

    def test_plain_json_is_utf8_not_escaped(self, dto):
        body = encode_push_body(dto)
        assert "привет".encode("utf-8") in body

    def test_gzip_body_decompresses_to_json(self, dto):
        body = encode_push_body(dto, use_gzip=True)

        assert body[:2] == b"\x1f\x8b"
        assert json.loads(gzip.decompress(body)) == dto.to_dict()

    def test_empty_request(self):
        assert json.loads(encode_push_body(PushRequestDTO())) == {"streams": []}
        assert decode_push_body(encode_push_body(PushRequestDTO(), use_gzip=True), gzipped=True) == {"streams": []}

    def test_decode_helper(self, dto):
        assert decode_push_body(encode_push_body(dto)) == dto.to_dict()

    def test_non_serializable_label_raises(self):
        bad = PushRequestDTO(streams=[StreamDTO(stream={"app": object()}, values=[("1", "x")])])

        with pytest.raises(SerializationError) as exc_info:
            encode_push_body(bad)

        assert "failed to encode streams message" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_nan_rejected(self):
        bad = PushRequestDTO(streams=[StreamDTO(stream={"v": math.nan}, values=[])])
        with pytest.raises(SerializationError):
            encode_push_body(bad)

    def test_lone_surrogate_rejected_with_gzip(self):
        bad = PushRequestDTO(streams=[StreamDTO(stream={}, values=[("1", "\ud800")])])
        with pytest.raises(SerializationError):
            encode_push_body(bad, use_gzip=True)

    def test_serialization_error_is_fatal(self):
        bad = PushRequestDTO(streams=[StreamDTO(stream={"app": object()}, values=[])])
        with pytest.raises(SerializationError) as exc_info:
            encode_push_body(bad, use_gzip=True)
        assert exc_info.value.fatal is True
        assert exc_info.value.retryable is False
