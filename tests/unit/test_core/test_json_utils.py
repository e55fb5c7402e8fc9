#!/usr/bin/env python3
"""Tests for JSON report helpers."""

import json
from enum import Enum
from pathlib import Path

import pytest

from sourcing.core.json_utils import format_json, read_json, to_jsonable, write_json
from sourcing.core.money import Money


class Color(Enum):
    PINK = "粉色"


class TestJsonUtils:
    """Test JSON serialization helpers."""

    def test_write_and_read(self, tmp_path):
        """Test that nested output directories are created and text stays readable."""
        path = tmp_path / "nested" / "report.json"
        write_json(path, {"option": "粉色; 130cm", "cost": Money.from_fen(4599)})

        raw = path.read_text(encoding="utf-8")
        assert "粉色; 130cm" in raw
        assert read_json(path) == {"option": "粉色; 130cm", "cost": "¥45.99"}

    def test_to_jsonable(self):
        """Test conversions for report value types."""
        assert to_jsonable(Color.PINK) == "粉色"
        assert to_jsonable(Path("a/b")) == str(Path("a/b"))
        assert to_jsonable(Money.from_fen(5)) == "¥0.05"

    def test_to_jsonable_rejects_unknown(self):
        with pytest.raises(TypeError):
            to_jsonable(object())

    def test_format_json_sort_keys(self):
        text = format_json({"b": 1, "a": 2}, sort_keys=True)
        assert text.index('"a"') < text.index('"b"')
        assert json.loads(text) == {"a": 2, "b": 1}
