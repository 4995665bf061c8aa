"""Tests for YAML parser with line tracking."""

import pytest

from tapedeck.errors import TapeFormatError
from tapedeck.loader.yaml_parser import parse_yaml_with_lines

TAPE_SOURCE = (
    "http_interactions:\n"
    "- request:\n"
    "    method: GET\n"
    "    path: /x\n"
    "    headers: {}\n"
    "    body:\n"
    "      encoding: utf8\n"
    "      data: ''\n"
    "  response:\n"
    "    status: 200\n"
    "    headers: {}\n"
    "    body:\n"
    "      encoding: base64\n"
    "      data: AAEC\n"
)


class TestParseYamlWithLines:
    """Tests for parse_yaml_with_lines function."""

    def test_returns_data_and_line_map(self):
        """Parsed data matches a plain safe_load."""
        data, line_map = parse_yaml_with_lines(TAPE_SOURCE)
        assert data["http_interactions"][0]["response"]["body"]["data"] == "AAEC"
        assert line_map["http_interactions"] == (1, 1)

    def test_line_map_tracks_list_items(self):
        """Keys under list items are tracked with index segments."""
        _, line_map = parse_yaml_with_lines(TAPE_SOURCE)
        assert line_map["http_interactions.0.request.method"][0] == 3
        assert line_map["http_interactions.0.request.body.encoding"][0] == 7
        assert line_map["http_interactions.0.response.body.encoding"][0] == 13

    def test_syntax_error_raises_tape_format_error(self):
        """YAML syntax errors raise TapeFormatError with position info."""
        with pytest.raises(TapeFormatError) as exc_info:
            parse_yaml_with_lines("http_interactions: [unclosed\n", filename="t.yml")
        err = exc_info.value
        assert err.line is not None
        assert err.column is not None
        assert err.filename == "t.yml"

    def test_empty_input(self):
        """Empty input returns (None, {})."""
        assert parse_yaml_with_lines("") == (None, {})

    def test_non_mapping_root(self):
        """A root that is not a mapping returns (None, {})."""
        assert parse_yaml_with_lines("- a\n- b\n") == (None, {})
