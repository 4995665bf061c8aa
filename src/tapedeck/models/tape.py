"""Pydantic models for tape records, in memory and on disk.

TapeRecord holds exact wire bytes. PersistedTapeRecord is the shape
written to the YAML tape file, with each body replaced by a
PersistedBuffer describing how to rebuild those bytes.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field


def _scalar_to_str(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_header_value(value: Any) -> Any:
    """Turn unquoted YAML numbers and booleans in hand-edited tapes into strings."""
    if isinstance(value, list):
        return [_scalar_to_str(item) for item in value]
    return _scalar_to_str(value)


# Header values are either a single string or a list of strings
# (repeated headers such as set-cookie). Keys are lower-cased names.
HeaderValue = Annotated[str | list[str], BeforeValidator(_coerce_header_value)]
Headers = dict[str, HeaderValue]

CompressionAlgorithm = Literal["br", "gzip", "none"]

# Top-level key of every tape file.
TAPE_DOCUMENT_KEY = "http_interactions"


class TapeRequest(BaseModel):
    """A recorded HTTP request with its raw body bytes."""

    method: str
    path: str
    headers: Headers = Field(default_factory=dict)
    body: bytes = b""


class TapeResponse(BaseModel):
    """A recorded HTTP response with its raw body bytes."""

    status: int
    headers: Headers = Field(default_factory=dict)
    body: bytes = b""


class TapeRecord(BaseModel):
    """One recorded request/response pair, bodies as transmitted on the wire."""

    request: TapeRequest
    response: TapeResponse


class PersistedBuffer(BaseModel):
    """Storable form of a message body.

    encoding is typed as a plain string so that hand-edited tapes with
    an unknown encoding load far enough to be rejected by the body codec.
    compression is only set on the utf8 branch.
    """

    model_config = {"extra": "forbid"}

    encoding: str
    data: str
    compression: CompressionAlgorithm | None = None


class PersistedRequest(BaseModel):
    model_config = {"extra": "forbid"}

    method: str
    path: str
    headers: Headers = Field(default_factory=dict)
    body: PersistedBuffer


class PersistedResponse(BaseModel):
    model_config = {"extra": "forbid"}

    status: int
    headers: Headers = Field(default_factory=dict)
    body: PersistedBuffer


class PersistedTapeRecord(BaseModel):
    """A tape record as it appears inside a tape file."""

    model_config = {"extra": "forbid"}

    request: PersistedRequest
    response: PersistedResponse


class TapeDocument(BaseModel):
    """The whole tape file: one key holding the ordered interactions."""

    model_config = {"extra": "forbid"}

    http_interactions: list[PersistedTapeRecord] = Field(default_factory=list)
