"""Tests for the flat JSON data map helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tapedeck.errors import IOFailure
from tapedeck.storage.data_map import load_data_map, store_data_map


def test_load_creates_empty_map(tmp_path: Path) -> None:
    """A missing file is created as {} and loaded as an empty dict."""
    path = tmp_path / "map.json"
    assert load_data_map(path) == {}
    assert json.loads(path.read_text(encoding="utf-8")) == {}


def test_store_then_load(tmp_path: Path) -> None:
    """Stored keys and values are loaded back unchanged."""
    path = tmp_path / "map.json"
    data = {"request-1": "tape-a", "ключ": "значение"}
    store_data_map(data, path)
    assert load_data_map(path) == data
    assert list(tmp_path.glob("*.tmp")) == []


def test_store_overwrites(tmp_path: Path) -> None:
    """A second store replaces the previous content."""
    path = tmp_path / "map.json"
    store_data_map({"a": "1"}, path)
    store_data_map({"b": "2"}, path)
    assert load_data_map(path) == {"b": "2"}


def test_store_failure_raises_io_failure(tmp_path: Path) -> None:
    """Writing into a missing directory raises IOFailure."""
    with pytest.raises(IOFailure):
        store_data_map({"a": "1"}, tmp_path / "missing" / "map.json")
