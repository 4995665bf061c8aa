"""Record codec: TapeRecord <-> PersistedTapeRecord.

Pure structural mapping. Each body is judged against its own
message's headers, so a compressed response does not affect how the
request body is stored.
"""

from __future__ import annotations

from tapedeck.codec.body import decode_body, encode_body
from tapedeck.models.tape import (
    Headers,
    PersistedRequest,
    PersistedResponse,
    PersistedTapeRecord,
    TapeRecord,
    TapeRequest,
    TapeResponse,
)


def encode_record(record: TapeRecord) -> PersistedTapeRecord:
    """Convert an in-memory record to its storable shape."""
    request = record.request
    response = record.response
    return PersistedTapeRecord(
        request=PersistedRequest(
            method=request.method,
            path=request.path,
            headers=request.headers,
            body=encode_body(request.body, request.headers),
        ),
        response=PersistedResponse(
            status=response.status,
            headers=response.headers,
            body=encode_body(response.body, response.headers),
        ),
    )


def decode_record(persisted: PersistedTapeRecord) -> TapeRecord:
    """Convert a stored record back to wire bytes.

    Raises:
        UnsupportedEncoding: If either body has an unknown encoding.
        RecompressionFailure: If either body cannot be re-compressed.
    """
    request = persisted.request
    response = persisted.response
    return TapeRecord(
        request=TapeRequest(
            method=request.method,
            path=request.path,
            headers=request.headers,
            body=decode_body(request.body),
        ),
        response=TapeResponse(
            status=response.status,
            headers=response.headers,
            body=decode_body(response.body),
        ),
    )


def sync_content_length(headers: Headers, body: bytes) -> Headers:
    """Return a copy of headers whose content-length matches body.

    Re-compressed bodies can differ in size from what was captured, so
    callers replaying a message should use this rather than the stored
    header. Only a single-string content-length is rewritten; a missing
    or list-valued header is left as it is.
    """
    synced = dict(headers)
    if isinstance(synced.get("content-length"), str):
        synced["content-length"] = str(len(body))
    return synced
