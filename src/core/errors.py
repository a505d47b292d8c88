from __future__ import annotations


class SearchError(Exception):
    """Базовое исключение поискового движка."""


class PathNotFoundError(SearchError, LookupError):
    """
    Запрошен путь у неуспешного результата поиска.

    Это ошибка использования API, а не состояние поиска:
    перед get_path() нужно проверить result.is_fail().
    """

    def __init__(self, reason=None):
        self.reason = reason
        msg = "путь не найден"
        if reason is not None:
            msg = f"путь не найден ({reason.value})"
        super().__init__(msg)


class NegativeEdgeCostError(SearchError, ValueError):
    """get_neighbour_cost вернул отрицательную стоимость ребра."""

    def __init__(self, cost: float, source_hash: str, target_hash: str):
        self.cost = cost
        self.source_hash = source_hash
        self.target_hash = target_hash
        super().__init__(
            f"отрицательная стоимость ребра {source_hash!r} -> {target_hash!r}: {cost}"
        )


class SearchBudgetExceeded(SearchError, RuntimeError):
    """Исчерпан лимит вершин при полном обходе (DistCache)."""
