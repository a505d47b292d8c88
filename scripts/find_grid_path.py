#!/usr/bin/env python3
"""
Поиск пути на сетке из файла карты (.json или octile .map).

Старт и цель задаются маркерами 'S' и 'G' в раскладке либо
явно через --start/--goal.

Пример:
    python3 scripts/find_grid_path.py maps/maze.json --max-costs 40
    python3 scripts/find_grid_path.py maps/open.map --start 0 0 --goal 7 7 --wrap
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from utils.grid_loader import find_markers, load_grid_map
from utils.log_setup import setup_logging

logger = logging.getLogger("find_grid_path")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="A* по сетке из файла карты")
    parser.add_argument("map_path", type=Path, help="Путь до .json или .map")
    parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), help="Старт (иначе маркер S)")
    parser.add_argument("--goal", type=int, nargs=2, metavar=("ROW", "COL"), help="Цель (иначе маркер G)")
    parser.add_argument("--wrap", action="store_true", help="Склеить края (тор)")
    parser.add_argument("--max-costs", type=float, default=None, help="Потолок стоимости пути")
    parser.add_argument("--max-expansions", type=int, default=None, help="Лимит раскрытий")
    parser.add_argument("--json", action="store_true", help="Вывести результат в JSON")
    parser.add_argument("--log-level", default="WARNING", help="Уровень логирования")
    parser.add_argument("--log-file", default=None, help="Дублировать лог в файл")
    return parser.parse_args()


def _pick(explicit, layout, marker: str, what: str, graph):
    if explicit is not None:
        cell = tuple(explicit)
    else:
        found = find_markers(layout, marker)
        if len(found) != 1:
            raise SystemExit(f"{what}: ожидался ровно один маркер {marker!r}, найдено {len(found)}")
        cell = found[0]
    if not graph.contains(cell):
        raise SystemExit(f"{what}: клетка {cell} вне карты {graph.H}x{graph.W}")
    return cell


def main() -> int:
    args = parse_args()
    setup_logging(args.log_level, args.log_file)

    grid_map = load_grid_map(args.map_path, wrap=args.wrap)
    graph = grid_map.graph
    logger.info("Карта %s: %dx%d, свободных клеток %d", args.map_path, graph.H, graph.W, len(grid_map.free_cells))
    start = _pick(args.start, grid_map.layout, "S", "Старт", graph)
    goal = _pick(args.goal, grid_map.layout, "G", "Цель", graph)
    if graph.is_blocked(start) or graph.is_blocked(goal):
        print("Старт или цель стоят в стене", file=sys.stderr)
        return 2

    search = graph.lazy_graph().search(
        start_node=start,
        is_end=lambda p: p == goal,
        estimate_cost=graph.heuristic_to(goal),
        max_costs=args.max_costs,
        max_expansions=args.max_expansions,
    )
    result = search.run()

    if args.json:
        payload = {
            "success": not result.is_fail(),
            "failure": None if result.failure is None else result.failure.value,
            "path": [] if result.is_fail() else [list(p) for p in result.get_data_path()],
            "cost": None if result.is_fail() else result.total_cost,
            "stats": search.get_metrics(),
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0 if payload["success"] else 1

    if result.is_fail():
        print(f"❌ Путь не найден: {result.failure.value}")
        print(f"  Раскрыто узлов: {result.stats.expanded}")
        return 1

    print(f"✓ Путь найден! Стоимость: {result.total_cost}")
    print(f"  Путь: {result.get_data_path()}")
    print(f"  Раскрыто узлов: {result.stats.expanded}, время {result.stats.elapsed:.4f} с")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
