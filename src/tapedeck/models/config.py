"""Project configuration model for tapedeck.

Captures tapedeck.yaml fields with sensible defaults for the tape
directory, the request headers to redact, and the file extension.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

CONFIG_FILENAME = "tapedeck.yaml"


class TapeConfig(BaseModel):
    """Project-level configuration loaded from tapedeck.yaml."""

    model_config = {"extra": "forbid"}

    tape_dir: str = "tapes"
    redact_headers: list[str] = Field(
        default_factory=lambda: ["authorization", "cookie"]
    )
    extension: Literal["yml", "yaml"] = "yml"


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) looking for tapedeck.yaml or tapes/.

    Args:
        start: Starting path (file or directory). Defaults to cwd.

    Returns:
        Path to the directory containing tapedeck.yaml or tapes/,
        or cwd if neither is found.
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists() or (current / "tapes").is_dir():
            return current
        current = current.parent
    return Path.cwd()


def load_config(project_root: Path | None = None) -> TapeConfig:
    """Load TapeConfig from tapedeck.yaml. Returns defaults if not found.

    Args:
        project_root: Path to the project root directory. If None,
            uses find_project_root() to locate it.

    Returns:
        Validated TapeConfig instance.
    """
    if project_root is None:
        project_root = find_project_root()
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        return TapeConfig()
    import yaml

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return TapeConfig()
    return TapeConfig.model_validate(raw)
