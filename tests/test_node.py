"""Tests for the node model and dependency extraction."""

from types import MappingProxyType

import pytest

from chartdag._ir import Node, NodeKind, freeze_param, iter_node_refs


def _leaf(name: str) -> Node:
    return Node(name, NodeKind.OPERATOR, {"value": 1})


class TestDependencies:
    """Tests for Node.dependencies()."""

    def test_no_params(self) -> None:
        node = Node("n", NodeKind.OPERATOR)
        assert node.dependencies() == []

    def test_scalars_only(self) -> None:
        node = Node("n", NodeKind.OPERATOR, {"value": 3, "name": "x"})
        assert node.dependencies() == []

    def test_direct_reference(self) -> None:
        a = _leaf("a")
        node = Node("n", NodeKind.MARK, {"data": a})
        assert node.dependencies() == [a]

    def test_inside_list(self) -> None:
        a, b = _leaf("a"), _leaf("b")
        node = Node("n", NodeKind.SCALE, {"range": [b, 0, a]})
        assert node.dependencies() == [b, a]

    def test_inside_nested_bag_in_list(self) -> None:
        a, b = _leaf("a"), _leaf("b")
        node = Node(
            "n",
            NodeKind.MARK,
            {"attributes": [{"name": "x", "value": a}, {"name": "y", "value": b}]},
        )
        assert node.dependencies() == [a, b]

    def test_first_discovery_order_across_params(self) -> None:
        a, b, c = _leaf("a"), _leaf("b"), _leaf("c")
        node = Node("n", NodeKind.RENDER, {"marks": [c], "width": a, "height": b})
        assert node.dependencies() == [c, a, b]

    def test_duplicate_reference_listed_once(self) -> None:
        a, b = _leaf("a"), _leaf("b")
        node = Node("n", NodeKind.DATA_MANIPULATION, {"data": a, "scale": b, "again": [a]})
        assert node.dependencies() == [a, b]

    def test_does_not_descend_into_referenced_nodes(self) -> None:
        a = _leaf("a")
        b = Node("b", NodeKind.OPERATOR, {"dep": a})
        node = Node("n", NodeKind.OPERATOR, {"dep": b})
        assert node.dependencies() == [b]

    def test_idempotent(self) -> None:
        a, b = _leaf("a"), _leaf("b")
        node = Node("n", NodeKind.MARK, {"attributes": [{"value": a}], "data": b})
        first = node.dependencies()
        second = node.dependencies()
        assert len(first) == len(second)
        assert all(x is y for x, y in zip(first, second, strict=True))


class TestImmutability:
    """Tests that parameter bags cannot change after construction."""

    def test_node_is_frozen(self) -> None:
        node = _leaf("a")
        with pytest.raises(AttributeError):
            node.kind = NodeKind.DATA  # type: ignore[misc]

    def test_params_are_read_only(self) -> None:
        node = _leaf("a")
        with pytest.raises(TypeError):
            node.params["value"] = 2  # type: ignore[index]

    def test_source_mutation_does_not_leak(self) -> None:
        a = _leaf("a")
        source = {"range": [a, 0]}
        node = Node("n", NodeKind.SCALE, source)
        source["range"].append(_leaf("b"))
        source["extra"] = _leaf("c")
        assert node.dependencies() == [a]
        assert "extra" not in node.params

    def test_freeze_param(self) -> None:
        a = _leaf("a")
        frozen = freeze_param({"xs": [1, [2, a]], "m": {"k": "v"}})
        assert isinstance(frozen, MappingProxyType)
        assert frozen["xs"] == (1, (2, a))
        assert isinstance(frozen["m"], MappingProxyType)


class TestIdentity:
    """Tests for identity-based equality."""

    def test_structurally_equal_nodes_are_distinct(self) -> None:
        a1 = Node("a", NodeKind.OPERATOR, {"value": 1})
        a2 = Node("a", NodeKind.OPERATOR, {"value": 1})
        assert a1 != a2
        assert len({a1, a2}) == 2

    def test_hashable(self) -> None:
        a = _leaf("a")
        assert {a: 1}[a] == 1


def test_iter_node_refs_yields_repeats() -> None:
    a = _leaf("a")
    assert list(iter_node_refs((a, {"x": a}))) == [a, a]


def test_param_default() -> None:
    node = _leaf("a")
    assert node.param("value") == 1
    assert node.param("missing") is None
    assert node.param("missing", 5) == 5
