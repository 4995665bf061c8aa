"""Codecs that turn tape records into YAML-safe structures and back."""

from tapedeck.codec.body import decode_body, encode_body
from tapedeck.codec.record import decode_record, encode_record, sync_content_length

__all__ = [
    "decode_body",
    "decode_record",
    "encode_body",
    "encode_record",
    "sync_content_length",
]
