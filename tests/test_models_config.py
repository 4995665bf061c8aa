"""Tests for tapedeck.models.config - TapeConfig, find_project_root, load_config."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tapedeck.models.config import TapeConfig, find_project_root, load_config


class TestTapeConfig:
    """Test TapeConfig model."""

    def test_defaults(self):
        """TapeConfig has sensible defaults."""
        config = TapeConfig()
        assert config.tape_dir == "tapes"
        assert config.redact_headers == ["authorization", "cookie"]
        assert config.extension == "yml"

    def test_rejects_unknown_keys(self):
        """TapeConfig rejects unknown keys."""
        with pytest.raises(ValidationError, match="extra_forbidden"):
            TapeConfig.model_validate({"tape_directory": "x"})

    def test_rejects_unknown_extension(self):
        """Only yml and yaml extensions are allowed."""
        with pytest.raises(ValidationError):
            TapeConfig(extension="json")


class TestLoadConfig:
    """Test load_config and find_project_root."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        """No tapedeck.yaml means default configuration."""
        assert load_config(tmp_path) == TapeConfig()

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        """An empty tapedeck.yaml means default configuration."""
        (tmp_path / "tapedeck.yaml").write_text("", encoding="utf-8")
        assert load_config(tmp_path) == TapeConfig()

    def test_reads_values(self, tmp_path: Path):
        """Values from tapedeck.yaml override defaults."""
        (tmp_path / "tapedeck.yaml").write_text(
            "tape_dir: fixtures/tapes\nredact_headers: [x-api-key]\n",
            encoding="utf-8",
        )
        config = load_config(tmp_path)
        assert config.tape_dir == "fixtures/tapes"
        assert config.redact_headers == ["x-api-key"]
        assert config.extension == "yml"

    def test_find_project_root_walks_up(self, tmp_path: Path):
        """find_project_root finds tapedeck.yaml in a parent directory."""
        (tmp_path / "tapedeck.yaml").write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_root(nested) == tmp_path.resolve()
