"""Tests for request-header redaction."""

from tapedeck.models.tape import TapeRecord, TapeRequest, TapeResponse
from tapedeck.recording.redaction import REDACTED_PLACEHOLDER, redact_request_headers


def _make_record(request_headers: dict, response_headers: dict | None = None) -> TapeRecord:
    return TapeRecord(
        request=TapeRequest(method="GET", path="/", headers=request_headers),
        response=TapeResponse(status=200, headers=response_headers or {}),
    )


def test_redacts_named_header():
    """A listed request header is replaced by the placeholder."""
    record = _make_record({"authorization": "secret", "accept": "*/*"})
    redact_request_headers(record, ["authorization"])
    assert record.request.headers == {
        "authorization": REDACTED_PLACEHOLDER,
        "accept": "*/*",
    }


def test_response_headers_untouched():
    """Response headers keep their values even when names match."""
    record = _make_record(
        {"authorization": "secret"},
        response_headers={"authorization": "resp-secret", "set-cookie": ["a", "b"]},
    )
    redact_request_headers(record, ["authorization", "set-cookie"])
    assert record.response.headers == {
        "authorization": "resp-secret",
        "set-cookie": ["a", "b"],
    }


def test_returns_same_record():
    """Redaction mutates in place and returns the same object."""
    record = _make_record({"authorization": "secret"})
    assert redact_request_headers(record, ["authorization"]) is record


def test_names_matched_case_insensitively():
    """Configured names are lower-cased to match stored keys."""
    record = _make_record({"authorization": "secret"})
    redact_request_headers(record, ["Authorization"])
    assert record.request.headers["authorization"] == REDACTED_PLACEHOLDER


def test_list_value_replaced_with_placeholder():
    """A multi-valued header collapses to the single placeholder."""
    record = _make_record({"cookie": ["a=1", "b=2"]})
    redact_request_headers(record, ["cookie"])
    assert record.request.headers["cookie"] == REDACTED_PLACEHOLDER


def test_empty_and_missing_values_not_redacted():
    """Falsy values are kept and absent headers are not added."""
    record = _make_record({"authorization": "", "cookie": []})
    redact_request_headers(record, ["authorization", "cookie", "x-api-key"])
    assert record.request.headers == {"authorization": "", "cookie": []}
