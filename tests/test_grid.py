import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import numpy as np
import pytest

from core.graph.grid import GridGraph, hash_position, wrapped_manhattan
from utils.grid_loader import (
    find_markers,
    grid_to_layout,
    layout_to_grid,
    load_grid_map,
    write_octile_map,
)


MAZE = [
    "S..@....",
    ".@.@.@@.",
    ".@...@..",
    ".@@@.@..",
    "......@G",
]


def test_neighbours_without_wrap():
    graph = GridGraph.empty(3, 3)
    assert graph.get_neighbours((0, 0)) == [(1, 0), (0, 1)]
    assert len(graph.get_neighbours((1, 1))) == 4


def test_neighbours_with_wrap():
    graph = GridGraph.empty(3, 4, wrap=True)
    assert graph.get_neighbours((0, 0)) == [(1, 0), (0, 1), (2, 0), (0, 3)]


def test_blocked_cells_are_not_neighbours():
    grid = np.zeros((3, 3), dtype=bool)
    grid[1, 0] = True
    graph = GridGraph(grid)

    assert graph.is_blocked((1, 0))
    assert graph.get_neighbours((0, 0)) == [(0, 1)]
    assert len(graph.free_cells()) == 8


def test_grid_must_be_2d():
    with pytest.raises(ValueError):
        GridGraph(np.zeros((2, 2, 2), dtype=bool))


def test_contains():
    graph = GridGraph.empty(3, 4)
    assert graph.contains((0, 0))
    assert graph.contains((2, 3))
    assert not graph.contains((3, 0))
    assert not graph.contains((0, -1))


def test_position_hash_and_heuristics():
    assert hash_position((3, 7)) == "3-7"
    assert wrapped_manhattan((0, 0), (4, 4), 5, 5) == 2
    assert GridGraph.empty(5, 5).heuristic_to((4, 4))((0, 0)) == 8
    assert GridGraph.empty(5, 5, wrap=True).heuristic_to((4, 4))((0, 0)) == 2


def test_layout_conversion():
    grid = layout_to_grid(MAZE)
    assert grid.shape == (5, 8)
    assert grid[0, 3] and not grid[0, 0]
    assert grid_to_layout(layout_to_grid([".@", "#."])) == [".@", "@."]
    assert find_markers(MAZE, "S") == [(0, 0)]
    assert find_markers(MAZE, "G") == [(4, 7)]

    with pytest.raises(ValueError):
        layout_to_grid([])
    with pytest.raises(ValueError):
        layout_to_grid(["..", "..."])


def test_load_json_map_and_solve(tmp_path):
    path = tmp_path / "maze.json"
    path.write_text(json.dumps({"layout": MAZE}))

    grid_map = load_grid_map(path)
    graph = grid_map.graph
    start, goal = find_markers(grid_map.layout, "S")[0], find_markers(grid_map.layout, "G")[0]

    result = graph.lazy_graph().find_path(
        start_node=start,
        is_end=lambda p: p == goal,
        estimate_cost=graph.heuristic_to(goal),
    )
    assert not result.is_fail()
    assert result.total_cost == 15
    assert all(not graph.is_blocked(p) for p in result.get_data_path())


def test_load_octile_map(tmp_path):
    grid = layout_to_grid(MAZE)
    path = write_octile_map(tmp_path / "maze.map", grid)

    grid_map = load_grid_map(path, wrap=True)
    assert grid_map.graph.wrap
    assert np.array_equal(grid_map.graph.grid, grid)
    assert len(grid_map.free_cells) == int((~grid).sum())


def test_load_octile_map_rejects_garbage(tmp_path):
    path = tmp_path / "bad.map"
    path.write_text("type octile\nheight 1\nwidth 1\n")
    with pytest.raises(ValueError):
        load_grid_map(path)


def test_load_json_without_layout(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"wrap": True}))
    with pytest.raises(ValueError):
        load_grid_map(path)
