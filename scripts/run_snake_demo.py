#!/usr/bin/env python3
"""
Змейка на торе, управляемая A* по ленивому графу состояний.

Каждый тик: ищем кратчайший путь головы до фрукта (потолок стоимости 50,
чтобы поиск не подвешивал вызывающий цикл), делаем первый шаг пути.
Состояния сравниваются только по первым SNAKE_HASH_PARTS сегментам тела,
что схлопывает пространство состояний.

Пример:
    python3 scripts/run_snake_demo.py --ticks 500 --grid-size 18 --seed 3
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from core.graph.grid import Position, hash_position, wrapped_manhattan
from core.graph.lazy import LazyGraph
from utils.log_setup import setup_logging

logger = logging.getLogger("snake_demo")

SNAKE_HASH_PARTS = 5
MAX_SEARCH_COSTS = 50


class Direction(Enum):
    up = (-1, 0)
    down = (1, 0)
    left = (0, -1)
    right = (0, 1)


@dataclass(frozen=True)
class SnakeState:
    parts: Tuple[Position, ...]  # голова первая
    obstacles: FrozenSet[Position]
    size: int

    @property
    def head(self) -> Position:
        return self.parts[0]


def snake_neighbours(state: SnakeState) -> List[SnakeState]:
    """
    Возможные следующие положения головы. Годность для цели
    не проверяем, только стены и собственное тело.
    """
    head_r, head_c = state.head
    n = state.size
    candidates = [
        ((head_r + dr) % n, (head_c + dc) % n)
        for dr, dc in ((0, 1), (1, 0), (0, -1), (-1, 0))
    ]
    blocked = set(state.obstacles) | set(state.parts)
    tail = state.parts[:-1]
    return [
        replace(state, parts=(c,) + tail)
        for c in candidates
        if c not in blocked
    ]


def snake_hash(state: SnakeState) -> str:
    return " --- ".join(hash_position(p) for p in state.parts[:SNAKE_HASH_PARTS])


SNAKE_GRAPH: LazyGraph[SnakeState] = LazyGraph(
    get_neighbours=snake_neighbours,
    hash_data=snake_hash,
)


def direction_between(a: Position, b: Position, size: int) -> Optional[Direction]:
    for d in Direction:
        dr, dc = d.value
        if ((a[0] + dr) % size, (a[1] + dc) % size) == b:
            return d
    return None


def choose_direction(state: SnakeState, fruit: Position) -> Direction:
    result = SNAKE_GRAPH.find_path(
        start_node=state,
        is_end=lambda s: s.head == fruit,
        estimate_cost=lambda s: wrapped_manhattan(s.head, fruit, state.size, state.size),
        max_costs=MAX_SEARCH_COSTS,
    )
    if result.is_fail():
        logger.warning("путь до фрукта не найден (%s)", result.failure.value)
        return Direction.left
    step = result.next_data()
    return direction_between(state.head, step.head, state.size) or Direction.left


def place_fruit(rng: np.random.Generator, state: SnakeState) -> Optional[Position]:
    taken = set(state.parts) | set(state.obstacles)
    free = [(r, c) for r in range(state.size) for c in range(state.size) if (r, c) not in taken]
    if not free:
        return None
    return free[int(rng.integers(len(free)))]


def play(ticks: int, size: int, num_obstacles: int, seed: int) -> int:
    rng = np.random.default_rng(seed)
    center = (size // 2, size // 2)
    cells = [(r, c) for r in range(size) for c in range(size) if (r, c) != center]
    picks = rng.choice(len(cells), size=min(num_obstacles, len(cells)), replace=False)
    obstacles = frozenset(cells[int(i)] for i in picks)

    state = SnakeState(parts=(center,), obstacles=obstacles, size=size)
    fruit = place_fruit(rng, state)
    score = 0

    for tick in range(ticks):
        if fruit is None:
            break
        d = choose_direction(state, fruit)
        dr, dc = d.value
        new_head = ((state.head[0] + dr) % size, (state.head[1] + dc) % size)
        if new_head in state.obstacles or new_head in state.parts[:-1]:
            print(f"Тик {tick}: змейка врезалась, счёт {score}")
            return score
        if new_head == fruit:
            state = replace(state, parts=(new_head,) + state.parts)
            score += 1
            fruit = place_fruit(rng, state)
        else:
            state = replace(state, parts=(new_head,) + state.parts[:-1])

    print(f"Игра окончена после {ticks} тиков, счёт {score}, длина {len(state.parts)}")
    return score


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Змейка на A* по ленивому графу")
    parser.add_argument("--ticks", type=int, default=500, help="Число тиков игры")
    parser.add_argument("--grid-size", type=int, default=18, help="Сторона поля (тор)")
    parser.add_argument("--obstacles", type=int, default=10, help="Число препятствий")
    parser.add_argument("--seed", type=int, default=0, help="Сид генерации")
    parser.add_argument("--log-level", default="INFO", help="Уровень логирования")
    parser.add_argument("--log-file", default=None, help="Дублировать лог в файл")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    setup_logging(args.log_level, args.log_file)
    play(args.ticks, args.grid_size, args.obstacles, args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
