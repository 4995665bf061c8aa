"""Flat string-to-string map persisted as a JSON object.

Used by capture tooling for small lookup tables kept next to tapes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tapedeck.errors import IOFailure

logger = logging.getLogger(__name__)


def store_data_map(data: dict[str, str], path: Path) -> None:
    """Write data to path as JSON, replacing any previous content.

    Raises:
        IOFailure: If the file cannot be written.
    """
    content = json.dumps(data, indent=2, ensure_ascii=False)
    tmp_path = path.with_name(f"{path.name}.tmp")
    try:
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        logger.error("Failed to write data map to %s: %s", path, exc)
        raise IOFailure(path, str(exc)) from exc
    logger.debug("Saved data map with %d keys to %s", len(data), path)


def load_data_map(path: Path) -> dict[str, str]:
    """Load the map at path, creating it as an empty object if absent.

    Raises:
        IOFailure: If the file cannot be created or read.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    try:
        if not path.exists():
            path.write_text("{}", encoding="utf-8")
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise IOFailure(path, str(exc)) from exc
    return json.loads(content)
