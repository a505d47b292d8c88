from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
import logging
import time

from core.errors import NegativeEdgeCostError
from core.result import FailureReason, SearchResult, SearchStats
from core.search_node import SearchNode

from strategies.open_policy.base import OpenPolicy
from strategies.open_policy.fifo_priority import FifoPriorityOpen

logger = logging.getLogger(__name__)

T = TypeVar("T")


def zero_heuristic(data: Any) -> float:
    """h = 0: A* вырождается в поиск по равной стоимости (Dijkstra)."""
    return 0


@dataclass
class AStar(Generic[T]):
    """
    A* по ленивому графу с потолком стоимости.

    Параметры графа:
        get_neighbours     : T -> list[T]       - соседи за один шаг
        hash_data          : T -> str           - идентичность вершины
        get_neighbour_cost : (T, T) -> float    - стоимость ребра (>= 0)

    Параметры запроса:
        start_node         : T                  - стартовое состояние
        is_end             : T -> bool          - предикат цели
        estimate_cost      : T -> float         - эвристика до ближайшей цели
        max_costs          : float | None       - потолок g, после которого поиск сдаётся
        max_expansions     : int | None         - лимит раскрытий
        open_policy        : OpenPolicy         - Open (по умолчанию FIFO среди равных f)

    Главный метод:
        run() -> SearchResult[T]

    Один экземпляр = один запрос. Open/Closed/BestCost создаются
    здесь и нигде больше не разделяются.
    """

    get_neighbours: Callable[[T], List[T]]
    hash_data: Callable[[T], str]
    get_neighbour_cost: Callable[[T, T], float]
    start_node: T
    is_end: Callable[[T], bool]
    estimate_cost: Callable[[T], float] = zero_heuristic
    max_costs: Optional[float] = None
    max_expansions: Optional[int] = None
    open_policy: OpenPolicy = field(default_factory=FifoPriorityOpen)

    def __post_init__(self):
        if self.max_costs is not None and self.max_costs < 0:
            raise ValueError(f"max_costs должен быть >= 0, получено {self.max_costs}")
        if self.max_expansions is not None and self.max_expansions < 0:
            raise ValueError(f"max_expansions должен быть >= 0, получено {self.max_expansions}")
        assert self.open_policy.empty(), "open_policy должен быть пустым в начале поиска"

        self.stats = SearchStats()
        self._finished = False

        # хеши уже раскрытых вершин (Closed)
        self._closed: set[str] = set()
        # лучшая известная g для каждого хеша
        self._best_cost: Dict[str, float] = {}

        start_hash = self.hash_data(self.start_node)
        self._start_hash = start_hash
        root = SearchNode(
            data=self.start_node,
            hash=start_hash,
            g=0,
            h=self.estimate_cost(self.start_node),
            parent=None,
        )
        self._best_cost[start_hash] = 0
        self.open_policy.push(root)
        self.stats.generated = 1
        self.stats.max_open_size = 1

    # ------------------------------------------------------------
    # Публичный интерфейс
    # ------------------------------------------------------------
    def run(self) -> SearchResult[T]:
        """
        Запустить A*. Выполняется синхронно до конца:
        успех, пустой Open или выход за потолок стоимости.
        """
        assert not self._finished, "AStar.run() можно вызвать только один раз"
        self._finished = True

        logger.debug(
            "A*: старт %r, max_costs=%s, max_expansions=%s",
            self._start_hash, self.max_costs, self.max_expansions,
        )
        started = time.perf_counter()
        try:
            result = self._search()
        finally:
            self.stats.elapsed = time.perf_counter() - started

        if result.is_fail():
            logger.debug("A*: неудача (%s), %s", result.failure.value, self.stats.as_dict())
        else:
            logger.debug("A*: путь стоимости %s найден, %s", result.total_cost, self.stats.as_dict())
        return result

    def get_metrics(self) -> Dict[str, Any]:
        """Вернуть собранную статистику запроса."""
        return self.stats.as_dict()

    # ------------------------------------------------------------
    # Внутреннее
    # ------------------------------------------------------------
    def _search(self) -> SearchResult[T]:
        open_policy = self.open_policy

        while not open_policy.empty():
            node = open_policy.pop()

            # ленивое удаление: в куче могли остаться устаревшие копии
            if node.hash in self._closed or node.g > self._best_cost[node.hash]:
                self.stats.skipped_stale += 1
                continue

            # проверка потолка ДО раскрытия, ограничивает общий объём работы
            if self.max_costs is not None and node.g > self.max_costs:
                return SearchResult.fail(FailureReason.COST_CEILING, self.stats)

            if self.is_end(node.data):
                return SearchResult.success(node, self.stats)

            if self.max_expansions is not None and self.stats.expanded >= self.max_expansions:
                return SearchResult.fail(FailureReason.EXPANSION_LIMIT, self.stats)

            self._closed.add(node.hash)
            self.stats.expanded += 1
            self._expand(node)

        return SearchResult.fail(FailureReason.NO_PATH, self.stats)

    def _expand(self, node: SearchNode[T]) -> None:
        for neighbour in self.get_neighbours(node.data):
            neighbour_hash = self.hash_data(neighbour)
            if neighbour_hash in self._closed:
                continue

            cost = self.get_neighbour_cost(node.data, neighbour)
            if cost < 0:
                raise NegativeEdgeCostError(cost, node.hash, neighbour_hash)
            g = node.g + cost

            known = self._best_cost.get(neighbour_hash)
            if known is not None and g >= known:
                # уже известен маршрут не хуже
                continue
            if known is not None:
                self.stats.reopened += 1

            self._best_cost[neighbour_hash] = g
            child = SearchNode(
                data=neighbour,
                hash=neighbour_hash,
                g=g,
                h=self.estimate_cost(neighbour),
                parent=node,
            )
            self.open_policy.push(child)
            self.stats.generated += 1
            if len(self.open_policy) > self.stats.max_open_size:
                self.stats.max_open_size = len(self.open_policy)


def a_star(
    get_neighbours: Callable[[T], List[T]],
    hash_data: Callable[[T], str],
    get_neighbour_cost: Callable[[T, T], float],
    start_node: T,
    is_end: Callable[[T], bool],
    estimate_cost: Optional[Callable[[T], float]] = None,
    max_costs: Optional[float] = None,
    max_expansions: Optional[int] = None,
    open_policy: Optional[OpenPolicy] = None,
) -> SearchResult[T]:
    """Функциональная обёртка: собрать AStar и выполнить его."""
    search = AStar(
        get_neighbours=get_neighbours,
        hash_data=hash_data,
        get_neighbour_cost=get_neighbour_cost,
        start_node=start_node,
        is_end=is_end,
        estimate_cost=estimate_cost or zero_heuristic,
        max_costs=max_costs,
        max_expansions=max_expansions,
        open_policy=open_policy if open_policy is not None else FifoPriorityOpen(),
    )
    return search.run()
