
from __future__ import annotations
import heapq
from itertools import count
from typing import List, Tuple

from core.search_node import SearchNode
from .base import OpenPolicy


class FifoPriorityOpen(OpenPolicy):
    """
    Open-список как двоичная куча по f.
    При равном f раньше выходит узел, добавленный раньше (FIFO).

    Это поведение по умолчанию: порядок вставки делает путь
    однозначно определённым для одинаковых входов.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, SearchNode]] = []
        self._counter = count()

    def push(self, node: SearchNode) -> None:
        heapq.heappush(self._heap, (node.f, next(self._counter), node))

    def pop(self) -> SearchNode:
        return heapq.heappop(self._heap)[2]

    def peek(self) -> SearchNode:
        return self._heap[0][2]

    def empty(self) -> bool:
        return len(self._heap) == 0

    def __len__(self) -> int:
        return len(self._heap)
