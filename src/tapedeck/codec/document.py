"""YAML structured-document serializer shared by tape files and the body round-trip check.

Tape files and the utf8 round-trip check must use the same dumper
settings, otherwise a body judged safe by the check could still be
altered when written inside a real tape.
"""

from __future__ import annotations

from typing import Any

import yaml

DUMP_OPTIONS: dict[str, Any] = {
    "allow_unicode": True,
    "default_flow_style": False,
    "sort_keys": False,
}


def dump_document(data: Any) -> str:
    """Serialize data (nested dicts/lists/strings) to YAML text."""
    return yaml.safe_dump(data, **DUMP_OPTIONS)


def load_document(source: str) -> Any:
    """Parse YAML text with the safe loader."""
    return yaml.safe_load(source)


def survives_round_trip(text: str, original: bytes) -> bool:
    """Check that text written as YAML and read back encodes to original.

    YAML emitters may normalise line endings, escape control characters,
    or drop trailing whitespace. Returns False on any such change or if
    the emitter or parser rejects the text.
    """
    try:
        recreated = load_document(dump_document(text))
    except yaml.YAMLError:
        return False
    if not isinstance(recreated, str):
        return False
    return recreated.encode("utf-8") == original
