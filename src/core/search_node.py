from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(eq=False)
class SearchNode(Generic[T]):
    """
    Узел поиска A*.

    Содержит:
        data   : T
            Данные состояния (непрозрачны для движка).

        hash   : str
            Идентичность вершины, посчитанная hash_data.

        g      : float
            Накопленная стоимость от старта.

        h      : float
            Эвристическая оценка оставшейся стоимости.

        parent : SearchNode | None
            Узел, из которого пришли (None у старта).

    Узлы создаются заново на каждый запрос и живут только внутри него.
    """

    data: T
    hash: str
    g: float
    h: float
    parent: Optional["SearchNode[T]"] = None

    @property
    def f(self) -> float:
        """Приоритет в Open: f = g + h."""
        return self.g + self.h

    def is_root(self) -> bool:
        return self.parent is None

    def reconstruct_path(self) -> List["SearchNode[T]"]:
        """
        Восстановить путь узлов от старта до этого узла
        (по обратным ссылкам parent).
        """
        path = []
        node: Optional[SearchNode[T]] = self
        while node is not None:
            path.append(node)
            node = node.parent
        return list(reversed(path))

    def depth(self) -> int:
        """Число рёбер от старта."""
        d = 0
        node = self.parent
        while node is not None:
            d += 1
            node = node.parent
        return d

    def __repr__(self):
        return f"SearchNode(hash={self.hash!r}, g={self.g}, h={self.h})"
