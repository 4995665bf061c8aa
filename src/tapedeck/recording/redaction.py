"""Request-header redaction applied before tapes are written.

Redaction is irreversible: the placeholder is what gets persisted.
"""

from __future__ import annotations

from collections.abc import Iterable

from tapedeck.models.tape import TapeRecord

REDACTED_PLACEHOLDER = "XXXX"


def redact_request_headers(record: TapeRecord, names: Iterable[str]) -> TapeRecord:
    """Replace sensitive request header values with REDACTED_PLACEHOLDER.

    Header keys are stored lower-cased, so names are matched lower-cased.
    Only headers holding a truthy value (a non-empty string or a non-empty
    list) are replaced. Response headers are never touched.

    The record's request headers are mutated in place and the same
    record is returned for chaining. Callers that need the original
    values afterwards must copy the record first.

    Args:
        record: The record to redact.
        names: Header names to redact.

    Returns:
        The same record, redacted.
    """
    headers = record.request.headers
    for name in names:
        key = name.lower()
        if headers.get(key):
            headers[key] = REDACTED_PLACEHOLDER
    return record
