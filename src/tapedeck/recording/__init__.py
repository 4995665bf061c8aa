"""Recording helpers applied to tape records before persistence."""

from tapedeck.recording.redaction import REDACTED_PLACEHOLDER, redact_request_headers

__all__ = [
    "REDACTED_PLACEHOLDER",
    "redact_request_headers",
]
