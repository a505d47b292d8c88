
from __future__ import annotations
import heapq
from itertools import count
from typing import List, Tuple

from core.search_node import SearchNode
from .base import OpenPolicy


class LifoPriorityOpen(OpenPolicy):
    """
    Open-список как куча по f, при равном f работает как стек (LIFO).

    Среди равных f первым раскрывается самый свежий узел, то есть
    поиск ныряет вглубь. Тоже детерминирован.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, SearchNode]] = []
        self._counter = count()

    def push(self, node: SearchNode) -> None:
        # отрицательный счётчик: последний добавленный меньше
        heapq.heappush(self._heap, (node.f, -next(self._counter), node))

    def pop(self) -> SearchNode:
        return heapq.heappop(self._heap)[2]

    def peek(self) -> SearchNode:
        return self._heap[0][2]

    def empty(self) -> bool:
        return len(self._heap) == 0

    def __len__(self) -> int:
        return len(self._heap)
