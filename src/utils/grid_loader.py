from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

import numpy as np

from core.graph.grid import GridGraph


BLOCKED_CHARS = {"@", "#", "T"}
# заголовок формата octile (.map из MovingAI)
OCTILE_HEADER_KEYS = {"type", "height", "width"}


def layout_to_grid(layout: Sequence[str]) -> np.ndarray:
    """
    Convert a text layout into boolean numpy grid.

    Characters interpreted as:
        '@', '#' or 'T'  – blocked
        everything else ('.', 'S', 'G', etc.) – walkable
    """
    if not layout:
        raise ValueError("Layout is empty")
    width = len(layout[0])
    for row in layout:
        if len(row) != width:
            raise ValueError("Layout rows have inconsistent widths")

    grid = np.zeros((len(layout), width), dtype=bool)
    for r, row in enumerate(layout):
        for c, ch in enumerate(row):
            grid[r, c] = ch in BLOCKED_CHARS
    return grid


def grid_to_layout(grid: np.ndarray) -> List[str]:
    """Inverse of layout_to_grid: '@' for blocked, '.' for free."""
    charset = {True: "@", False: "."}
    return ["".join(charset[bool(cell)] for cell in grid[r, :]) for r in range(grid.shape[0])]


def find_markers(layout: Sequence[str], marker: str) -> List[Tuple[int, int]]:
    """All (row, col) positions of a marker character ('S', 'G', ...)."""
    return [
        (r, c)
        for r, row in enumerate(layout)
        for c, ch in enumerate(row)
        if ch == marker
    ]


@dataclass
class GridMap:
    graph: GridGraph
    layout: List[str]
    free_cells: List[Tuple[int, int]]


def _read_octile(text: str) -> List[str]:
    lines = text.splitlines()
    layout: List[str] = []
    in_map = False
    for line in lines:
        if in_map:
            if line.strip():
                layout.append(line.rstrip("\n"))
            continue
        key = line.split(" ", 1)[0].strip()
        if key == "map":
            in_map = True
        elif key and key not in OCTILE_HEADER_KEYS:
            raise ValueError(f"Unexpected header line in map file: {line!r}")
    if not in_map:
        raise ValueError("Map file has no 'map' section")
    return layout


def load_grid_map(path: str | Path, wrap: bool = False) -> GridMap:
    """
    Load a grid map from JSON ({"layout": [...], "wrap": bool}) or
    from a MovingAI octile .map file.
    """
    path = Path(path)
    text = path.read_text()
    if path.suffix == ".json":
        data = json.loads(text)
        layout = data.get("layout")
        if not layout or not isinstance(layout, list):
            raise ValueError(f"JSON {path} does not contain 'layout' list")
        wrap = bool(data.get("wrap", wrap))
    else:
        layout = _read_octile(text)

    grid = layout_to_grid(layout)
    graph = GridGraph(grid, wrap=wrap)
    return GridMap(graph=graph, layout=list(layout), free_cells=graph.free_cells())


def write_octile_map(path: str | Path, grid: np.ndarray) -> Path:
    """Write grid as a MovingAI octile .map file."""
    path = Path(path)
    rows = grid_to_layout(grid)
    with open(path, "w", encoding="utf-8") as f:
        f.write("type octile\n")
        f.write(f"height {grid.shape[0]}\n")
        f.write(f"width {grid.shape[1]}\n")
        f.write("map\n")
        for row in rows:
            f.write(row + "\n")
    return path
