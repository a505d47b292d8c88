import dataclasses
import os
import sys
from enum import Enum

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import numpy as np
import pytest

from core.graph.dist_cache import DistCache
from core.graph.hashing import json_hash, repr_hash, resolve_hash_strategy
from core.graph.lazy import LazyGraph, unit_cost
from core.errors import SearchBudgetExceeded
from core.search_node import SearchNode
from strategies.open_policy.fifo_priority import FifoPriorityOpen
from strategies.open_policy.lifo_priority import LifoPriorityOpen


@dataclasses.dataclass(frozen=True)
class Point:
    x: int
    y: int


class Color(Enum):
    red = "red"


# ------------------------------------------------------------
# Значения по умолчанию
# ------------------------------------------------------------
def test_defaults_applied():
    graph = LazyGraph(get_neighbours=lambda p: [p + 1])

    assert graph.hash_data is json_hash
    assert graph.get_neighbour_cost is unit_cost
    assert graph.cost_between(0, 1) == 1
    assert graph.hash_of({"b": 1, "a": 2}) == '{"a":2,"b":1}'


def test_hash_strategy_by_name():
    graph = LazyGraph(get_neighbours=lambda p: [], hash_data="repr")
    assert graph.hash_data is repr_hash
    assert graph.hash_of((1, 2)) == "(1, 2)"


def test_unknown_hash_strategy():
    with pytest.raises(ValueError, match="md5"):
        LazyGraph(get_neighbours=lambda p: [], hash_data="md5")


def test_graph_is_immutable():
    graph = LazyGraph(get_neighbours=lambda p: [])
    with pytest.raises(dataclasses.FrozenInstanceError):
        graph.hash_data = repr_hash


def test_graph_reused_across_queries():
    graph = LazyGraph(get_neighbours=lambda p: [p + 1, p - 1])

    first = graph.find_path(start_node=0, is_end=lambda p: p == 3)
    second = graph.find_path(start_node=0, is_end=lambda p: p == -2)

    assert first.get_data_path() == [0, 1, 2, 3]
    assert second.get_data_path() == [0, -1, -2]


# ------------------------------------------------------------
# Адаптеры
# ------------------------------------------------------------
class ChainAdapter:
    """Адаптер только с get_neighbours, остальное по умолчанию."""

    def get_neighbours(self, data):
        return [data + 1] if data < 4 else []


class WeightedAdapter(ChainAdapter):
    def hash_data(self, data):
        return f"n{data}"

    def get_neighbour_cost(self, data1, data2):
        return 3


def test_from_adapter_with_defaults():
    graph = LazyGraph.from_adapter(ChainAdapter())
    result = graph.find_path(start_node=0, is_end=lambda p: p == 4)

    assert graph.hash_data is json_hash
    assert result.total_cost == 4


def test_from_adapter_with_own_functions():
    graph = LazyGraph.from_adapter(WeightedAdapter())
    result = graph.find_path(start_node=0, is_end=lambda p: p == 4)

    assert graph.hash_of(2) == "n2"
    assert result.total_cost == 12
    assert [node.hash for node in result.get_path()] == ["n0", "n1", "n2", "n3", "n4"]


# ------------------------------------------------------------
# Хеширование
# ------------------------------------------------------------
def test_json_hash_is_canonical():
    assert json_hash({"a": 1, "b": [1, 2]}) == json_hash({"b": [1, 2], "a": 1})
    assert json_hash((1, 2)) == json_hash([1, 2])
    assert json_hash({3, 1, 2}) == json_hash({2, 3, 1}) == "[1,2,3]"


def test_json_hash_supports_structured_values():
    assert json_hash(Point(1, 2)) == '{"x":1,"y":2}'
    assert json_hash(np.array([[1, 0], [0, 1]])) == "[[1,0],[0,1]]"
    assert json_hash(np.int64(7)) == "7"
    assert json_hash(Color.red) == '"red"'


def test_json_hash_rejects_unknown_objects():
    with pytest.raises(TypeError):
        json_hash(object())


def test_json_hash_sets_of_tuples():
    walls = frozenset({(2, 2), (1, 1), (0, 3)})
    assert json_hash(walls) == "[[0,3],[1,1],[2,2]]"
    assert json_hash(walls) == json_hash({(0, 3), (2, 2), (1, 1)})
    assert json_hash(frozenset({"b", "a"})) == '["a","b"]'


def test_json_hash_dicts_with_non_string_keys():
    board = {(0, 0): "head", (0, 1): "tail"}
    assert json_hash(board) == '[[[0,0],"head"],[[0,1],"tail"]]'
    assert json_hash(board) == json_hash({(0, 1): "tail", (0, 0): "head"})
    # смешанные ключи не ломают сортировку
    assert json_hash({1: "a", "b": 2}) == json_hash({"b": 2, 1: "a"})
    # int-ключ и его строковая запись дают разные вершины
    assert json_hash({1: "x"}) != json_hash({"1": "x"})


@dataclasses.dataclass(frozen=True)
class BoardState:
    head: Point
    walls: frozenset
    trail: tuple


def test_json_hash_composite_state():
    a = BoardState(
        head=Point(0, 0),
        walls=frozenset({(1, 1), (2, 2)}),
        trail=([0, 1], [0, 2]),
    )
    b = BoardState(
        head=Point(0, 0),
        walls=frozenset({(2, 2), (1, 1)}),
        trail=((0, 1), (0, 2)),
    )
    assert json_hash(a) == json_hash(b)
    assert json_hash(a) == '{"head":{"x":0,"y":0},"trail":[[0,1],[0,2]],"walls":[[1,1],[2,2]]}'


def test_default_hash_searches_states_with_sets():
    start = {"head": [0, 0], "walls": frozenset({(1, 1), (2, 2)})}

    def neighbours(state):
        r, c = state["head"]
        moves = [[r + 1, c], [r, c + 1]]
        return [
            {"head": m, "walls": state["walls"]}
            for m in moves
            if tuple(m) not in state["walls"] and max(m) <= 2
        ]

    graph = LazyGraph(get_neighbours=neighbours)
    result = graph.find_path(start_node=start, is_end=lambda s: s["head"] == [2, 1])

    assert not result.is_fail()
    assert result.total_cost == 3


def test_default_hash_searches_tuple_keyed_boards():
    graph = LazyGraph(get_neighbours=lambda board: [{(k[0] + 1, k[1]): v for k, v in board.items()}])
    result = graph.find_path(start_node={(0, 0): "head"}, is_end=lambda b: (2, 0) in b)
    assert result.total_cost == 2


def test_resolve_hash_strategy_passes_callables():
    fn = lambda d: "x"  # noqa: E731
    assert resolve_hash_strategy(fn) is fn
    assert resolve_hash_strategy(None) is json_hash


# ------------------------------------------------------------
# Open-политики
# ------------------------------------------------------------
def _node(name, g, h=0):
    return SearchNode(data=name, hash=name, g=g, h=h)


def test_fifo_open_orders_by_f_then_insertion():
    open_list = FifoPriorityOpen()
    for node in [_node("late", 2), _node("first", 1), _node("second", 0, 1), _node("third", 1)]:
        open_list.push(node)

    assert len(open_list) == 4
    assert open_list.peek().data == "first"
    assert [open_list.pop().data for _ in range(4)] == ["first", "second", "third", "late"]
    assert open_list.empty()


def test_lifo_open_orders_by_f_then_reverse_insertion():
    open_list = LifoPriorityOpen()
    for node in [_node("late", 2), _node("first", 1), _node("second", 0, 1), _node("third", 1)]:
        open_list.push(node)

    assert [open_list.pop().data for _ in range(4)] == ["third", "second", "first", "late"]


# ------------------------------------------------------------
# SearchNode
# ------------------------------------------------------------
def test_search_node_path_and_depth():
    root = _node("s", 0)
    mid = SearchNode(data="m", hash="m", g=1, h=2, parent=root)
    leaf = SearchNode(data="t", hash="t", g=2, h=0, parent=mid)

    assert mid.f == 3
    assert root.is_root() and not leaf.is_root()
    assert [n.data for n in leaf.reconstruct_path()] == ["s", "m", "t"]
    assert leaf.depth() == 2


# ------------------------------------------------------------
# DistCache
# ------------------------------------------------------------
def test_dist_cache_on_finite_graph():
    graph = LazyGraph(get_neighbours=lambda p: [q for q in (p + 1, p - 1) if 0 <= q <= 5])
    cache = DistCache(graph)

    assert cache.dist(0, 5) == 5
    assert cache.dist(0, 9) == -1
    assert graph.hash_of(0) in cache.cache


def test_dist_cache_vertex_budget():
    graph = LazyGraph(get_neighbours=lambda p: [p + 1])
    with pytest.raises(SearchBudgetExceeded):
        DistCache(graph, max_vertices=50).dist(0, 10)
