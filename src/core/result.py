from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from .errors import PathNotFoundError
from .search_node import SearchNode

T = TypeVar("T")


class FailureReason(Enum):
    """Почему поиск завершился неудачей."""

    NO_PATH = "no_path"                  # Open опустел, цель недостижима
    COST_CEILING = "cost_ceiling"        # g лучшего кандидата превысил max_costs
    EXPANSION_LIMIT = "expansion_limit"  # исчерпан лимит раскрытий


@dataclass
class SearchStats:
    """Статистика одного запроса."""

    expanded: int = 0
    generated: int = 0
    reopened: int = 0
    skipped_stale: int = 0
    max_open_size: int = 0
    elapsed: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """
    Итог поиска: либо Success(путь), либо Failure(причина).

    Использование:
        result = graph.find_path(...)
        if result.is_fail():
            ...  # fallback вызывающей стороны
        else:
            first_step = result.get_path()[1].data
    """

    goal: Optional[SearchNode[T]] = None
    failure: Optional[FailureReason] = None
    stats: SearchStats = field(default_factory=SearchStats)

    def __post_init__(self):
        assert (self.goal is None) != (self.failure is None), \
            "результат должен быть либо успехом, либо неудачей"

    @classmethod
    def success(cls, goal: SearchNode[T], stats: Optional[SearchStats] = None) -> "SearchResult[T]":
        return cls(goal=goal, stats=stats or SearchStats())

    @classmethod
    def fail(cls, reason: FailureReason, stats: Optional[SearchStats] = None) -> "SearchResult[T]":
        return cls(failure=reason, stats=stats or SearchStats())

    def is_fail(self) -> bool:
        return self.goal is None

    def __bool__(self) -> bool:
        return not self.is_fail()

    def get_path(self) -> List[SearchNode[T]]:
        """
        Путь узлов от старта до цели включительно.
        У неуспешного результата бросает PathNotFoundError.
        """
        if self.goal is None:
            raise PathNotFoundError(self.failure)
        return self.goal.reconstruct_path()

    def get_data_path(self) -> List[T]:
        return [node.data for node in self.get_path()]

    def next_data(self) -> T:
        """
        Данные первого шага пути (второй элемент).
        Если старт сам является целью, то данные старта.
        """
        path = self.get_path()
        return path[1].data if len(path) > 1 else path[0].data

    @property
    def total_cost(self) -> float:
        if self.goal is None:
            raise PathNotFoundError(self.failure)
        return self.goal.g

    def __repr__(self):
        if self.goal is None:
            return f"SearchResult(fail={self.failure.value}, expanded={self.stats.expanded})"
        return f"SearchResult(cost={self.goal.g}, length={self.goal.depth() + 1})"
