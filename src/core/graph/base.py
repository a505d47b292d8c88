from typing import Protocol, List, TypeVar

T = TypeVar("T")


class GraphAdapter(Protocol[T]):
    """
    Интерфейс доменного адаптера для LazyGraph.

    Обязателен только get_neighbours. hash_data и get_neighbour_cost
    необязательны: если адаптер их не определяет, LazyGraph.from_adapter
    подставит значения по умолчанию (JSON-хеш и стоимость 1).
    """

    def get_neighbours(self, data: T) -> List[T]:
        """Все значения, достижимые из data за один шаг."""
        ...

    def hash_data(self, data: T) -> str:
        """Каноническая строковая идентичность вершины."""
        ...

    def get_neighbour_cost(self, data1: T, data2: T) -> float:
        """Стоимость ребра data1 -> data2 (неотрицательная)."""
        ...
