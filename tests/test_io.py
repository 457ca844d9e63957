"""Tests for loading chart specifications from files."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from chartdag._io import load_chart_spec


def test_load_json(tmp_path: Path) -> None:
    path = tmp_path / "chart.json"
    path.write_text(json.dumps({"width": 200, "height": 100, "data": [{"name": "t", "values": [{"a": 1}]}]}))

    spec = load_chart_spec(path)

    assert spec.width == 200
    assert spec.height == 100
    assert spec.data[0].rows == [{"a": 1}]


def test_load_toml(tmp_path: Path) -> None:
    path = tmp_path / "chart.toml"
    path.write_text(
        """
width = 300
height = 150

[[data]]
name = "sales"
rows = [{ cat = "a", amount = 4 }]

[[scales]]
name = "x"
type = "band"
domain = { data = "sales", field = "cat" }
range = "width"

[[marks]]
type = "rect"
from = { data = "sales" }

[marks.encode.x]
scale = "x"
field = "cat"
""",
    )

    spec = load_chart_spec(path)

    assert spec.width == 300
    assert spec.scales[0].type == "band"
    assert spec.marks[0].from_.data == "sales"
    assert spec.marks[0].encode["x"].field == "cat"


def test_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "chart.yaml"
    path.write_text("width: 1\n")
    with pytest.raises(ValueError, match="Unsupported"):
        load_chart_spec(path)


def test_invalid_content(tmp_path: Path) -> None:
    path = tmp_path / "chart.json"
    path.write_text(json.dumps({"width": "wide"}))
    with pytest.raises(ValidationError):
        load_chart_spec(path)
