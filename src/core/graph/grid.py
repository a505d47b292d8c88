import numpy as np
from numpy.typing import NDArray
from typing import List, Tuple

from core.graph.base import GraphAdapter
from core.graph.lazy import LazyGraph

Position = Tuple[int, int]

# порядок обхода соседей фиксирован, от него зависит tie-break
DIRS = [(1, 0), (0, 1), (-1, 0), (0, -1)]


def hash_position(p: Position) -> str:
    return f"{p[0]}-{p[1]}"


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def wrapped_manhattan(a: Position, b: Position, height: int, width: int) -> int:
    """
    Манхэттенское расстояние на торе: по каждой оси берём
    кратчайший из двух путей (прямой или через край).
    Допустимая эвристика для 4-связной тороидальной сетки.
    """
    dr = abs(a[0] - b[0])
    dc = abs(a[1] - b[1])
    return min(dr, height - dr) + min(dc, width - dc)


class GridGraph(GraphAdapter[Position]):
    def __init__(self, grid: NDArray[np.bool_], wrap: bool = False):
        """
        Сетка в виде матрицы bool, где:
        grid[r, c] == True → препятствие (стена)
        grid[r, c] == False → свободная клетка

        wrap=True склеивает противоположные края (тор).
        Вершины: кортежи (row, col).
        """
        if grid.ndim != 2:
            raise ValueError(f"Ожидается 2D-сетка, получено ndim={grid.ndim}")
        self.grid = grid.astype(np.bool_)
        self.H, self.W = grid.shape
        self.wrap = wrap

    @classmethod
    def empty(cls, height: int, width: int, wrap: bool = False) -> "GridGraph":
        return cls(np.zeros((height, width), dtype=bool), wrap=wrap)

    def _step(self, p: Position, dr: int, dc: int):
        r, c = p[0] + dr, p[1] + dc
        if self.wrap:
            return r % self.H, c % self.W
        if 0 <= r < self.H and 0 <= c < self.W:
            return r, c
        return None

    # ------------------------------------------------------------
    # GraphAdapter
    # ------------------------------------------------------------
    def get_neighbours(self, p: Position) -> List[Position]:
        result = []
        for dr, dc in DIRS:
            q = self._step(p, dr, dc)
            if q is not None and not self.grid[q] and q != p:
                result.append(q)
        return result

    def hash_data(self, p: Position) -> str:
        return hash_position(p)

    def get_neighbour_cost(self, p: Position, q: Position) -> float:
        return 1

    def lazy_graph(self) -> LazyGraph[Position]:
        return LazyGraph.from_adapter(self)

    # ------------------------------------------------------------
    # Утилиты
    # ------------------------------------------------------------
    def contains(self, p: Position) -> bool:
        r, c = p
        return 0 <= r < self.H and 0 <= c < self.W

    def is_blocked(self, p: Position) -> bool:
        return bool(self.grid[p])

    def free_cells(self) -> List[Position]:
        return [(int(r), int(c)) for r, c in np.argwhere(~self.grid)]

    def heuristic_to(self, goal: Position):
        """Допустимая эвристика до goal с учётом wrap."""
        if self.wrap:
            return lambda p: wrapped_manhattan(p, goal, self.H, self.W)
        return lambda p: manhattan(p, goal)
