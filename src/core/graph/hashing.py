"""
Стратегии хеширования данных узла.

Хеш: каноническая строковая идентичность вершины. Два значения с
одинаковым хешем считаются ОДНОЙ вершиной графа (hash collapsing).
Стратегия выбирается явно при создании LazyGraph: callable или имя
из HASH_STRATEGIES.
"""
from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any, Callable, Dict, Union

import numpy as np


HashFn = Callable[[Any], str]


def _canonical(value: Any) -> Any:
    """
    Привести значение к канонической JSON-структуре.

    Словари со строковыми ключами остаются словарями (json.dumps сортирует
    ключи). Словари с любыми другими ключами превращаются в отсортированный
    список пар [ключ, значение], поэтому {1: "x"} и {"1": "x"} различаются.
    Множества сортируются по каноническому виду элементов.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    if isinstance(value, dict):
        if all(isinstance(k, str) for k in value):
            return {k: _canonical(v) for k, v in value.items()}
        pairs = [[_canonical(k), _canonical(v)] for k, v in value.items()]
        return sorted(pairs, key=lambda kv: _dumps(kv[0]))
    if isinstance(value, (set, frozenset)):
        items = [_canonical(v) for v in value]
        return sorted(items, key=_dumps)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _canonical(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, Enum):
        return _canonical(value.value)
    raise TypeError(f"Не умею сериализовать {type(value).__name__} для хеша")


def _dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def json_hash(data: Any) -> str:
    """
    Хеш по умолчанию: каноническая JSON-сериализация.

    Ключи словарей сортируются, tuple и list дают одинаковый результат,
    dataclass-ы, numpy-массивы, Enum, множества и словари с нестроковыми
    ключами приводятся к JSON. Прочие объекты дают TypeError.
    """
    return _dumps(_canonical(data))


def repr_hash(data: Any) -> str:
    """Хеш через repr(). Подходит для неизменяемых значений с детерминированным repr."""
    return repr(data)


HASH_STRATEGIES: Dict[str, HashFn] = {
    "json": json_hash,
    "repr": repr_hash,
}

DEFAULT_HASH_STRATEGY = "json"


def resolve_hash_strategy(strategy: Union[str, HashFn, None]) -> HashFn:
    """Вернуть функцию хеширования по имени или сам callable."""
    if strategy is None:
        strategy = DEFAULT_HASH_STRATEGY
    if callable(strategy):
        return strategy
    try:
        return HASH_STRATEGIES[strategy]
    except KeyError:
        known = ", ".join(sorted(HASH_STRATEGIES))
        raise ValueError(f"Неизвестная стратегия хеширования {strategy!r} (есть: {known})") from None
