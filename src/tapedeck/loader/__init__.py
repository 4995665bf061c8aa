"""tapedeck YAML loader - line-tracked parsing, validation, and error reporting."""

from tapedeck.loader.validator import (
    ValidationErrorDetail,
    load_tape_document,
    validate_tape_file,
    validate_tape_string,
)
from tapedeck.loader.yaml_parser import parse_yaml_file, parse_yaml_with_lines

__all__ = [
    "ValidationErrorDetail",
    "load_tape_document",
    "parse_yaml_file",
    "parse_yaml_with_lines",
    "validate_tape_file",
    "validate_tape_string",
]
