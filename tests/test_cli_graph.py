"""Tests for graph query functions and CLI commands."""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from chartdag._cli.graph_query import describe_param, get_downstream, get_node_detail, list_nodes
from chartdag._cli.main import app
from chartdag._ir import ChartGraph, Node, NodeKind, build_chart_graph

runner = CliRunner()

SPEC: dict[str, Any] = {
    "width": 200,
    "height": 100,
    "data": [{"name": "table", "rows": [{"value": 0}, {"value": 1}]}],
    "scales": [
        {"name": "x", "type": "linear", "domain": {"data": "table", "field": "value"}, "range": "width"},
    ],
    "marks": [
        {
            "type": "circle",
            "from": {"data": "table"},
            "encode": {"cx": {"scale": "x", "field": "value"}, "cy": {"value": 50}, "r": {"value": 3}},
        },
    ],
}


@pytest.fixture
def graph() -> ChartGraph:
    return build_chart_graph(SPEC)


@pytest.fixture
def spec_file(tmp_path: Path) -> Path:
    path = tmp_path / "chart.json"
    path.write_text(json.dumps(SPEC))
    return path


class TestListNodes:
    def test_all_nodes_in_evaluation_order(self, graph: ChartGraph) -> None:
        infos = list_nodes(graph)
        assert len(infos) == len(graph)
        assert infos[-1].id == "render"
        assert infos[-1].dependency_count == 3

    def test_filter_by_kind(self, graph: ChartGraph) -> None:
        infos = list_nodes(graph, kinds=[NodeKind.SCALE, NodeKind.DATA])
        assert [i.id for i in infos] == ["data:table", "scale:x"]


class TestNodeDetail:
    def test_scale_detail(self, graph: ChartGraph) -> None:
        detail = get_node_detail(graph, "scale:x")
        assert detail.kind == NodeKind.SCALE
        assert detail.params["type"] == "'linear'"
        assert detail.params["range"] == "[0, <width>]"
        assert detail.direct_dependencies == ["domain:x:max", "width"]
        assert detail.direct_dependents == ["mark[0].cx"]

    def test_data_rows_summarized(self, graph: ChartGraph) -> None:
        detail = get_node_detail(graph, "data:table")
        assert detail.params["rows"] == "<2 rows>"

    def test_unknown_node(self, graph: ChartGraph) -> None:
        with pytest.raises(KeyError):
            get_node_detail(graph, "scale:nope")


def test_describe_param_nested() -> None:
    a = Node("a", NodeKind.OPERATOR)
    frozen = Node("n", NodeKind.MARK, {"attributes": [{"name": "x", "value": a}]}).params["attributes"]
    assert describe_param(frozen) == "[{name: 'x', value: <a>}]"


def test_get_downstream(graph: ChartGraph) -> None:
    assert [i.id for i in get_downstream(graph, "width")] == ["width", "scale:x", "mark[0].cx", "mark[0]", "render"]


class TestCommands:
    def test_nodes(self, spec_file: Path) -> None:
        result = runner.invoke(app, ["nodes", str(spec_file)])
        assert result.exit_code == 0, result.output
        assert "scale:x" in result.stdout
        assert "Total: 10 nodes" in result.stdout

    def test_show(self, spec_file: Path) -> None:
        result = runner.invoke(app, ["show", "scale:x", str(spec_file)])
        assert result.exit_code == 0, result.output
        assert "domain:x:max" in result.stdout

    def test_show_unknown_node(self, spec_file: Path) -> None:
        result = runner.invoke(app, ["show", "nope", str(spec_file)])
        assert result.exit_code == 1

    def test_downstream(self, spec_file: Path) -> None:
        result = runner.invoke(app, ["downstream", "height", str(spec_file)])
        assert result.exit_code == 0, result.output
        assert "render" in result.stdout
        assert "Total: 2 nodes" in result.stdout

    def test_render_to_file(self, spec_file: Path, tmp_path: Path) -> None:
        output = tmp_path / "out" / "chart.svg"
        result = runner.invoke(app, ["render", str(spec_file), "-o", str(output)])
        assert result.exit_code == 0, result.output
        svg = output.read_text()
        assert svg.count("<circle") == 2
        assert 'cx="200"' in svg

    def test_render_reports_spec_errors(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"height": 10}))
        result = runner.invoke(app, ["render", str(path)])
        assert result.exit_code == 1
