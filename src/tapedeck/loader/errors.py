"""Error formatter with dual-mode output (rich human and CI concise).

Human mode prints Rust/Elm-style annotated errors with the offending
tape line; CI mode prints one ``file:line:col -- field: message`` line
per error.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from tapedeck.models.tape import TAPE_DOCUMENT_KEY

if TYPE_CHECKING:
    from tapedeck.loader.validator import ValidationErrorDetail


# Map Pydantic error types to error codes
ERROR_CODES: dict[str, str] = {
    "extra_forbidden": "E001",
    "missing": "E002",
    "value_error": "E003",
    "string_type": "E004",
    "int_type": "E004",
    "int_parsing": "E004",
    "list_type": "E004",
    "dict_type": "E004",
    "model_type": "E004",
    "literal_error": "E005",
    "yaml_syntax_error": "E006",
    "empty_file": "E007",
}

ERROR_DESCRIPTIONS: dict[str, str] = {
    "E001": "unknown field",
    "E002": "required field missing",
    "E003": "invalid value",
    "E004": "type mismatch",
    "E005": "invalid literal",
    "E006": "YAML syntax error",
    "E007": "empty tape",
}


def interaction_context(field_path: str) -> str | None:
    """Describe where in the tape a field path points, e.g. 'interaction 2, response > body'.

    Interactions are numbered from 1 as a reader counts them in the file.
    Returns None for paths outside the interaction list.
    """
    parts = field_path.split(".")
    if len(parts) < 2 or parts[0] != TAPE_DOCUMENT_KEY or not parts[1].isdigit():
        return None
    context = f"interaction {int(parts[1]) + 1}"
    # The last part is the offending key itself and is already shown
    enclosing = parts[2:-1]
    if enclosing:
        context += ", " + " > ".join(enclosing)
    return context


class ErrorFormatter:
    """Formats tape validation errors for human or CI consumption.

    Args:
        ci_mode: If True, use CI-friendly concise output. If None,
            auto-detect from the CI environment variable.
    """

    def __init__(self, ci_mode: bool | None = None) -> None:
        if ci_mode is None:
            self.ci_mode = os.environ.get("CI", "").lower() in ("true", "1", "yes")
        else:
            self.ci_mode = ci_mode

    def _get_error_code(self, error_type: str) -> str:
        if error_type in ERROR_CODES:
            return ERROR_CODES[error_type]
        # Union members report e.g. 'string_type' under a longer path
        for key, code in ERROR_CODES.items():
            if key in error_type:
                return code
        return "E999"

    def format_error(
        self,
        error: ValidationErrorDetail,
        source_lines: list[str],
        filename: str,
    ) -> str:
        """Format a single error for display."""
        if self.ci_mode:
            return self._format_ci(error, filename)
        return self._format_rich(error, source_lines, filename)

    def _format_ci(self, error: ValidationErrorDetail, filename: str) -> str:
        line = error.line if error.line is not None else 0
        col = error.col if error.col is not None else 0
        suggestion_suffix = f" ({error.suggestion})" if error.suggestion else ""
        return f"{filename}:{line}:{col} -- {error.field}: {error.message}{suggestion_suffix}"

    def _format_rich(
        self,
        error: ValidationErrorDetail,
        source_lines: list[str],
        filename: str,
    ) -> str:
        """Format error in annotated style.

        Produces output like:
            error[E001]: unknown field
              --> tapes/login.yml:9:7
               |
             9 |       encodng: utf8
               |       ^^^^^^^ Extra inputs are not permitted
               |
               = note: interaction 1, request > body
               = help: Did you mean 'encoding'?
        """
        error_code = self._get_error_code(error.type)
        description = ERROR_DESCRIPTIONS.get(error_code, "validation error")

        lines = [f"error[{error_code}]: {description}"]

        line_idx = error.line - 1 if error.line is not None else -1
        if 0 <= line_idx < len(source_lines):
            col = error.col if error.col is not None else 1
            lines.append(f"  --> {filename}:{error.line}:{col}")
            lines.append("   |")
            src_line = source_lines[line_idx].rstrip()
            line_num_str = str(error.line)
            padding = " " * len(line_num_str)
            lines.append(f" {line_num_str} | {src_line}")

            field_name = error.field.split(".")[-1]
            field_start = src_line.find(field_name)
            if field_start >= 0:
                arrows = "^" * len(field_name)
                lines.append(f" {padding} | {' ' * field_start}{arrows} {error.message}")
            else:
                lines.append(f" {padding} | {error.message}")
            lines.append("   |")
        else:
            lines.append(f"  --> {filename}")
            lines.append("   |")
            lines.append(f"   | {error.field}: {error.message}")
            lines.append("   |")

        context = interaction_context(error.field)
        if context:
            lines.append(f"   = note: {context}")
        if error.suggestion:
            lines.append(f"   = help: {error.suggestion}")

        return "\n".join(lines)

    def format_all(
        self,
        errors: list[ValidationErrorDetail],
        source: str,
        filename: str,
    ) -> str:
        """Format all errors, separated by blank lines."""
        source_lines = source.splitlines()
        return "\n\n".join(
            self.format_error(error, source_lines, filename) for error in errors
        )
