"""Tests for the record codec."""

from __future__ import annotations

import gzip

from tapedeck.codec.record import decode_record, encode_record, sync_content_length
from tapedeck.models.tape import TapeRecord, TapeRequest, TapeResponse


def _make_record(
    request_body: bytes = b"",
    response_body: bytes = b"hello",
    response_headers: dict | None = None,
) -> TapeRecord:
    """Build a TapeRecord with realistic field values."""
    return TapeRecord(
        request=TapeRequest(
            method="POST",
            path="/api/items?page=2",
            headers={"content-type": "application/json", "accept": ["a", "b"]},
            body=request_body,
        ),
        response=TapeResponse(
            status=201,
            headers=response_headers or {"content-type": "text/plain"},
            body=response_body,
        ),
    )


class TestEncodeRecord:
    """Tests for encode_record."""

    def test_structural_fields_pass_through(self):
        """Method, path, status and headers are copied unchanged."""
        persisted = encode_record(_make_record(request_body=b'{"x": 1}'))
        assert persisted.request.method == "POST"
        assert persisted.request.path == "/api/items?page=2"
        assert persisted.request.headers == {
            "content-type": "application/json",
            "accept": ["a", "b"],
        }
        assert persisted.response.status == 201
        assert persisted.response.headers == {"content-type": "text/plain"}

    def test_bodies_encoded(self):
        """Both bodies go through the body codec."""
        persisted = encode_record(_make_record(request_body=b'{"x": 1}'))
        assert persisted.request.body.encoding == "utf8"
        assert persisted.request.body.data == '{"x": 1}'
        assert persisted.response.body.data == "hello"

    def test_each_body_judged_by_its_own_headers(self):
        """A gzip response does not make the request body gzip."""
        record = _make_record(
            request_body=b"plain request",
            response_body=gzip.compress(b"zipped response"),
            response_headers={"content-encoding": "gzip"},
        )
        persisted = encode_record(record)
        assert persisted.request.body.compression is None
        assert persisted.response.body.compression == "gzip"
        assert persisted.response.body.data == "zipped response"


class TestDecodeRecord:
    """Tests for decode_record."""

    def test_round_trip(self):
        """Decoding an encoded record restores the original."""
        original = _make_record(request_body=b"\x00\xffbinary", response_body=b"ok")
        decoded = decode_record(encode_record(original))
        assert decoded == original

    def test_gzip_body_recompressed(self):
        """A gzip response comes back compressed with the same content."""
        record = _make_record(
            response_body=gzip.compress(b"zipped"),
            response_headers={"content-encoding": "gzip"},
        )
        decoded = decode_record(encode_record(record))
        assert gzip.decompress(decoded.response.body) == b"zipped"
        assert decoded.response.headers == {"content-encoding": "gzip"}


class TestSyncContentLength:
    """Tests for sync_content_length."""

    def test_updates_single_value(self):
        """A stale content-length is replaced with the body size."""
        headers = {"content-length": "999", "content-type": "text/plain"}
        synced = sync_content_length(headers, b"12345")
        assert synced == {"content-length": "5", "content-type": "text/plain"}

    def test_does_not_mutate_input(self):
        """The original headers are left untouched."""
        headers = {"content-length": "999"}
        sync_content_length(headers, b"1")
        assert headers == {"content-length": "999"}

    def test_missing_header_not_added(self):
        """No content-length is added when absent."""
        assert sync_content_length({"a": "b"}, b"123") == {"a": "b"}

    def test_list_value_left_alone(self):
        """A list-valued content-length is not rewritten."""
        headers = {"content-length": ["1", "2"]}
        assert sync_content_length(headers, b"123") == headers
