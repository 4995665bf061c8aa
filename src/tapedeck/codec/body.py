"""Body codec: raw HTTP body bytes <-> PersistedBuffer.

Encoding prefers a readable utf8 form so tapes diff well, and falls
back to base64 of the original wire bytes whenever the text form could
not rebuild those bytes exactly. The decision runs through four gates:

    content-encoding -> decompress -> utf8 decode -> YAML round-trip

Each gate returns a value or None; the first None selects base64.
Encoding never raises.

Known limitation: a utf8 body stored with compression "br" or "gzip"
is re-compressed on decode, and the result need not match the bytes
originally captured (compressor settings differ). A content-length
header stored alongside such a body may therefore be stale; see
tapedeck.codec.record.sync_content_length.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import logging
import zlib

import brotli

from tapedeck.codec.document import survives_round_trip
from tapedeck.errors import RecompressionFailure, TapeFormatError, UnsupportedEncoding
from tapedeck.models.tape import CompressionAlgorithm, Headers, PersistedBuffer

logger = logging.getLogger(__name__)

UTF8 = "utf8"
BASE64 = "base64"


def content_encoding(headers: Headers) -> str | None:
    """Return the content-encoding header if it holds a single string.

    A list-valued header is treated as absent.
    """
    value = headers.get("content-encoding")
    if isinstance(value, str):
        return value
    return None


def decompress(
    body: bytes, encoding: str | None
) -> tuple[bytes, CompressionAlgorithm] | None:
    """Undo the content-encoding transform, if it is one we support.

    Returns:
        (decompressed bytes, compression applied), or None when the
        body does not decompress with the declared algorithm.
    """
    if encoding == "br":
        try:
            return brotli.decompress(body), "br"
        except brotli.error:
            return None
    if encoding == "gzip":
        try:
            return gzip.decompress(body), "gzip"
        except (OSError, EOFError, zlib.error):
            return None
    return body, "none"


def as_utf8(data: bytes) -> str | None:
    """Strict UTF-8 decode, None if the bytes are not valid UTF-8."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def encode_body(body: bytes, headers: Headers) -> PersistedBuffer:
    """Encode a message body for storage.

    Args:
        body: Raw body bytes exactly as transmitted.
        headers: Headers of the same message; only content-encoding is read.

    Returns:
        A utf8 PersistedBuffer when the (decompressed) body is text that
        survives YAML unchanged, otherwise a base64 PersistedBuffer of
        the original bytes.
    """
    declared = content_encoding(headers)
    decompressed = decompress(body, declared)
    if decompressed is None:
        logger.debug("Body declared %s but did not decompress; storing base64", declared)
        return _as_base64(body)

    data, compression = decompressed
    text = as_utf8(data)
    if text is None:
        logger.debug("Body is not valid UTF-8; storing base64")
        return _as_base64(body)

    if not survives_round_trip(text, data):
        logger.debug("Body text does not survive YAML round-trip; storing base64")
        return _as_base64(body)

    # "none" is implied by an absent field; tapes only mark real transforms.
    return PersistedBuffer(
        encoding=UTF8,
        data=text,
        compression=None if compression == "none" else compression,
    )


def _as_base64(body: bytes) -> PersistedBuffer:
    return PersistedBuffer(
        encoding=BASE64,
        data=base64.b64encode(body).decode("ascii"),
    )


def decode_body(persisted: PersistedBuffer) -> bytes:
    """Rebuild wire bytes from a PersistedBuffer.

    Raises:
        UnsupportedEncoding: If encoding is neither utf8 nor base64.
        RecompressionFailure: If re-applying br/gzip compression fails.
        TapeFormatError: If base64 data is malformed.
    """
    if persisted.encoding == BASE64:
        try:
            return base64.b64decode(persisted.data)
        except binascii.Error as exc:
            raise TapeFormatError(f"Malformed base64 body data: {exc}") from exc
    if persisted.encoding == UTF8:
        return recompress(persisted.data.encode("utf-8"), persisted.compression)
    raise UnsupportedEncoding(persisted.encoding)


def recompress(data: bytes, compression: CompressionAlgorithm | None) -> bytes:
    """Re-apply the compression recorded for a utf8 body."""
    if compression == "br":
        try:
            return brotli.compress(data)
        except brotli.error as exc:
            raise RecompressionFailure("br", str(exc)) from exc
    if compression == "gzip":
        try:
            # Fixed mtime keeps the output stable across loads.
            return gzip.compress(data, mtime=0)
        except (OSError, zlib.error) as exc:
            raise RecompressionFailure("gzip", str(exc)) from exc
    return data
