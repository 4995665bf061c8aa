"""YAML parser with line tracking for tape file error reporting.

Provides a PyYAML safe loader that records the source position of
every key, so a schema problem deep inside a tape (say the encoding
of the third response body) can be reported by line number.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from tapedeck.errors import TapeFormatError


class LineTrackingLoader(yaml.SafeLoader):
    """YAML SafeLoader subclass that captures line numbers for all keys.

    Builds a line_map dict mapping dotted key paths (list items by
    index, e.g. ``http_interactions.2.response.body``) to 1-indexed
    (line, column) tuples.
    """

    def __init__(self, stream: str) -> None:
        super().__init__(stream)
        self.line_map: dict[str, tuple[int, int]] = {}
        self._prefix_stack: list[str] = []

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        """Override to capture line numbers for every key in the mapping."""
        self.flatten_mapping(node)
        pairs = []
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=deep)

            if isinstance(key, str) and key_node.start_mark is not None:
                full_key = ".".join([*self._prefix_stack, key])
                self.line_map[full_key] = (
                    key_node.start_mark.line + 1,
                    key_node.start_mark.column + 1,
                )

            # Nested containers need the key on the stack while they build
            if isinstance(key, str) and isinstance(
                value_node, (yaml.MappingNode, yaml.SequenceNode)
            ):
                self._prefix_stack.append(key)
                value = self.construct_object(value_node, deep=deep)
                self._prefix_stack.pop()
            else:
                value = self.construct_object(value_node, deep=deep)

            pairs.append((key, value))

        return dict(pairs)

    def construct_sequence(self, node: yaml.SequenceNode, deep: bool = False) -> list[Any]:
        """Override to track list item indices in the key path."""
        result = []
        for idx, child_node in enumerate(node.value):
            if isinstance(child_node, yaml.MappingNode):
                self._prefix_stack.append(str(idx))
                item = self.construct_mapping(child_node, deep=deep)
                self._prefix_stack.pop()
                result.append(item)
            else:
                result.append(self.construct_object(child_node, deep=deep))
        return result

    def construct_yaml_map(self, node: yaml.MappingNode) -> Any:
        data = self.construct_mapping(node, deep=True)
        yield data

    def construct_yaml_seq(self, node: yaml.SequenceNode) -> Any:
        data = self.construct_sequence(node, deep=True)
        yield data


LineTrackingLoader.add_constructor(
    "tag:yaml.org,2002:map",
    LineTrackingLoader.construct_yaml_map,
)

LineTrackingLoader.add_constructor(
    "tag:yaml.org,2002:seq",
    LineTrackingLoader.construct_yaml_seq,
)


def parse_yaml_with_lines(
    source: str,
    filename: str = "<string>",
) -> tuple[dict | None, dict[str, tuple[int, int]]]:
    """Parse a YAML string and return (data, line_map).

    Args:
        source: YAML content as a string.
        filename: Filename for error messages.

    Returns:
        A tuple of (parsed_data, line_map). Returns (None, {}) for
        empty input or a document whose root is not a mapping.

    Raises:
        TapeFormatError: If the YAML contains syntax errors.
    """
    try:
        loader = LineTrackingLoader(source)
        try:
            data = loader.get_single_data()
        finally:
            loader.dispose()
    except yaml.YAMLError as e:
        line = None
        column = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
            column = mark.column + 1
        raise TapeFormatError(
            message=str(e),
            line=line,
            column=column,
            filename=filename,
        ) from e

    if data is None or not isinstance(data, dict):
        return None, {}

    return data, loader.line_map


def parse_yaml_file(filepath: Path) -> tuple[dict | None, dict[str, tuple[int, int]]]:
    """Parse a YAML file and return (data, line_map).

    Raises:
        TapeFormatError: If the file contains YAML syntax errors.
        FileNotFoundError: If the file does not exist.
    """
    content = filepath.read_text(encoding="utf-8")
    return parse_yaml_with_lines(content, filename=str(filepath))
