"""Tape file validation combining line-tracked YAML with Pydantic.

Two stages: parse the YAML with line tracking, then validate against
TapeDocument. Errors from both stages are enriched with source
positions and collected for batch reporting.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tapedeck.errors import TapeFormatError
from tapedeck.loader.yaml_parser import parse_yaml_with_lines
from tapedeck.models.tape import (
    PersistedBuffer,
    PersistedRequest,
    PersistedResponse,
    TapeDocument,
)

# Every field name a tape may contain, used for typo suggestions.
KNOWN_FIELDS: list[str] = sorted(
    set(TapeDocument.model_fields)
    | set(PersistedRequest.model_fields)
    | set(PersistedResponse.model_fields)
    | set(PersistedBuffer.model_fields)
    | {"request", "response"}
)


@dataclass
class ValidationErrorDetail:
    """A single validation error with source position and context.

    Attributes:
        field: Dotted path to the offending field.
        message: Human-readable error description.
        type: Pydantic error type string (e.g. 'missing', 'extra_forbidden').
        line: 1-indexed line number in the tape file, or None if unknown.
        col: 1-indexed column number in the tape file, or None if unknown.
        suggestion: 'Did you mean X?' suggestion for typos, or None.
        input_value: The invalid input value, if available.
    """

    field: str
    message: str
    type: str
    line: int | None = None
    col: int | None = None
    suggestion: str | None = None
    input_value: Any = field(default=None)


def _loc_to_field_path(loc: tuple[str | int, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _find_line_for_field(
    field_path: str,
    line_map: dict[str, tuple[int, int]],
) -> tuple[int | None, int | None]:
    """Look up a field path, falling back to progressively shorter prefixes."""
    parts = field_path.split(".")
    while parts:
        prefix = ".".join(parts)
        if prefix in line_map:
            return line_map[prefix]
        parts.pop()
    return None, None


def _get_suggestion(field_name: str) -> str | None:
    matches = difflib.get_close_matches(field_name, KNOWN_FIELDS, n=1, cutoff=0.6)
    if matches:
        return f"Did you mean '{matches[0]}'?"
    return None


def validate_tape_data(
    raw_data: dict[str, Any],
    line_map: dict[str, tuple[int, int]],
) -> tuple[TapeDocument | None, list[ValidationErrorDetail]]:
    """Validate parsed YAML data against the TapeDocument model.

    Returns:
        Tuple of (TapeDocument, []) on success, or (None, errors) on failure.
    """
    try:
        return TapeDocument.model_validate(raw_data), []
    except ValidationError as e:
        errors: list[ValidationErrorDetail] = []
        for err in e.errors():
            loc = err.get("loc", ())
            field_path = _loc_to_field_path(loc)
            error_type = err.get("type", "unknown")
            line, col = _find_line_for_field(field_path, line_map)

            suggestion = None
            if error_type == "extra_forbidden" and loc:
                suggestion = _get_suggestion(str(loc[-1]))

            errors.append(
                ValidationErrorDetail(
                    field=field_path,
                    message=err.get("msg", "Validation error"),
                    type=error_type,
                    line=line,
                    col=col,
                    suggestion=suggestion,
                    input_value=err.get("input"),
                )
            )
        return None, errors


def validate_tape_string(
    source: str,
    filename: str = "<string>",
) -> tuple[TapeDocument | None, list[ValidationErrorDetail]]:
    """Validate a tape document from a YAML string.

    Returns:
        Tuple of (TapeDocument, []) on success, or (None, errors) on failure.
    """
    try:
        raw_data, line_map = parse_yaml_with_lines(source, filename=filename)
    except TapeFormatError as e:
        return None, [
            ValidationErrorDetail(
                field="<yaml>",
                message=e.message,
                type="yaml_syntax_error",
                line=e.line,
                col=e.column,
            )
        ]

    if raw_data is None:
        return None, [
            ValidationErrorDetail(
                field="<yaml>",
                message="Tape is empty or its root is not a mapping",
                type="empty_file",
            )
        ]

    return validate_tape_data(raw_data, line_map)


def validate_tape_file(
    filepath: Path,
) -> tuple[TapeDocument | None, list[ValidationErrorDetail]]:
    """Validate a tape file on disk.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    try:
        source = filepath.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        return None, [
            ValidationErrorDetail(
                field="<yaml>",
                message=f"Tape is not valid UTF-8: {e}",
                type="yaml_syntax_error",
            )
        ]
    return validate_tape_string(source, filename=str(filepath))


def load_tape_document(source: str, filename: str = "<string>") -> TapeDocument:
    """Parse and validate a tape document, raising on the first problem.

    Raises:
        TapeFormatError: If the YAML is malformed or does not match the
            tape schema. Position information comes from the first error.
    """
    document, errors = validate_tape_string(source, filename=filename)
    if document is not None:
        return document
    first = errors[0]
    message = first.message
    if first.field != "<yaml>":
        message = f"{first.field}: {message}"
    raise TapeFormatError(
        message=message,
        line=first.line,
        column=first.col,
        filename=filename,
    )
