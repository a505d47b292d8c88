from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

from core.astar import AStar, zero_heuristic
from core.graph.base import GraphAdapter
from core.graph.hashing import HashFn, resolve_hash_strategy
from core.result import SearchResult
from strategies.open_policy.base import OpenPolicy
from strategies.open_policy.fifo_priority import FifoPriorityOpen

T = TypeVar("T")

DEFAULT_NEIGHBOUR_COST = 1


def unit_cost(data1: Any, data2: Any) -> float:
    """Стоимость ребра по умолчанию."""
    return DEFAULT_NEIGHBOUR_COST


@dataclass(frozen=True)
class LazyGraph(Generic[T]):
    """
    Ленивый граф: вершины не хранятся, соседи запрашиваются
    только у тех узлов, которые A* действительно раскрывает.

    Параметры:
        get_neighbours     : T -> list[T]           - обязательный
        hash_data          : T -> str | имя стратегии - по умолчанию "json"
        get_neighbour_cost : (T, T) -> float        - по умолчанию 1

    Экземпляр неизменяем после создания, поэтому один граф можно
    переиспользовать для любого числа запросов find_path().

    Пример:
        graph = LazyGraph(get_neighbours=lambda p: [p + 1, p - 1])
        result = graph.find_path(start_node=0, is_end=lambda p: p == 3)
    """

    get_neighbours: Callable[[T], List[T]]
    hash_data: Union[str, HashFn, None] = None
    get_neighbour_cost: Callable[[T, T], float] = unit_cost

    def __post_init__(self):
        assert callable(self.get_neighbours), "get_neighbours обязателен"
        # frozen dataclass: подменяем имя стратегии на саму функцию
        object.__setattr__(self, "hash_data", resolve_hash_strategy(self.hash_data))
        if self.get_neighbour_cost is None:
            object.__setattr__(self, "get_neighbour_cost", unit_cost)

    @classmethod
    def from_adapter(cls, adapter: GraphAdapter[T]) -> "LazyGraph[T]":
        """
        Собрать граф из доменного адаптера. Методы, которых
        у адаптера нет, заменяются значениями по умолчанию.
        """
        return cls(
            get_neighbours=adapter.get_neighbours,
            hash_data=getattr(adapter, "hash_data", None),
            get_neighbour_cost=getattr(adapter, "get_neighbour_cost", unit_cost),
        )

    # ------------------------------------------------------------
    # Доступ к функциям графа
    # ------------------------------------------------------------
    def neighbours_of(self, data: T) -> List[T]:
        return list(self.get_neighbours(data))

    def hash_of(self, data: T) -> str:
        return self.hash_data(data)

    def cost_between(self, data1: T, data2: T) -> float:
        return self.get_neighbour_cost(data1, data2)

    # ------------------------------------------------------------
    # Поиск
    # ------------------------------------------------------------
    def find_path(
        self,
        start_node: T,
        is_end: Callable[[T], bool],
        estimate_cost: Optional[Callable[[T], float]] = None,
        max_costs: Optional[float] = None,
        max_expansions: Optional[int] = None,
        open_policy: Optional[OpenPolicy] = None,
    ) -> SearchResult[T]:
        """
        Найти путь от start_node до любого состояния, где is_end(data) == True.

        estimate_cost должна не переоценивать оставшуюся стоимость,
        иначе путь будет найден, но не обязательно кратчайший.
        max_costs задаёт потолок g: как только у лучшего кандидата g > max_costs,
        поиск возвращает неудачу.

        Исключения из функций вызывающей стороны пробрасываются как есть.
        """
        search = self.search(
            start_node=start_node,
            is_end=is_end,
            estimate_cost=estimate_cost,
            max_costs=max_costs,
            max_expansions=max_expansions,
            open_policy=open_policy,
        )
        return search.run()

    def search(
        self,
        start_node: T,
        is_end: Callable[[T], bool],
        estimate_cost: Optional[Callable[[T], float]] = None,
        max_costs: Optional[float] = None,
        max_expansions: Optional[int] = None,
        open_policy: Optional[OpenPolicy] = None,
    ) -> AStar[T]:
        """Подготовить AStar-запрос, не запуская его (нужно для get_metrics())."""
        return AStar(
            get_neighbours=self.get_neighbours,
            hash_data=self.hash_data,
            get_neighbour_cost=self.get_neighbour_cost,
            start_node=start_node,
            is_end=is_end,
            estimate_cost=estimate_cost or zero_heuristic,
            max_costs=max_costs,
            max_expansions=max_expansions,
            open_policy=open_policy if open_policy is not None else FifoPriorityOpen(),
        )
