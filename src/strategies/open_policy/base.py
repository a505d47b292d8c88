
from __future__ import annotations
from typing import Protocol

from core.search_node import SearchNode


class OpenPolicy(Protocol):
    """
    Интерфейс Open-списка узлов A*.

    OpenPolicy определяет:
      - как добавлять узлы (push)
      - как извлекать узел с минимальным f (pop / peek)
      - как разрешаются равные f (tie-break)

    Экземпляр принадлежит одному запросу: AStar требует пустой Open
    на входе и ни с кем его не делит.
    """

    def push(self, node: SearchNode) -> None:
        """Добавить узел."""
        ...

    def pop(self) -> SearchNode:
        """Удалить и вернуть узел с минимальным f."""
        ...

    def peek(self) -> SearchNode:
        """Посмотреть на следующий узел, НЕ удаляя."""
        ...

    def empty(self) -> bool:
        """True если Open-список пуст."""
        ...

    def __len__(self) -> int:
        ...
