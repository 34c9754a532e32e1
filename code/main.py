#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging

from dungeon_analysis import check_reachability, summarize_graph
from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from grid_renderer import print_grid, render_grid


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a branching dungeon and print it as ASCII.")
    parser.add_argument("--depth", type=int, default=3, help="Rooms per branch between the fork and the boss.")
    parser.add_argument("--branches", type=int, default=3, help="Branches leaving the start room.")
    parser.add_argument("--width", type=int, default=100)
    parser.add_argument("--height", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output.")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = DungeonConfig(
        depth=args.depth,
        branch_count=args.branches,
        grid_width=args.width,
        grid_height=args.height,
        random_seed=args.seed,
        collect_metrics=args.verbose,
    )
    dungeon = DungeonGenerator(config).generate()

    print_grid(render_grid(dungeon.grid, dungeon.graph, dungeon.markers))

    summary = summarize_graph(dungeon.graph)
    reachability = check_reachability(dungeon.graph, dungeon.grid)
    kinds = ", ".join(f"{kind.name.lower()}={count}" for kind, count in summary.kind_counts.items())
    print(f"Rooms: {summary.total_rooms} ({kinds})")
    print(f"Longest start->boss path: {summary.longest_path_rooms} rooms")
    print(f"Spawns: {len(dungeon.spawns)}, markers: {len(dungeon.markers)}")
    if not reachability.fully_connected:
        print(f"Warning: rooms not reachable from start: {reachability.unreached_rooms}")
    if dungeon.metrics is not None:
        for name, metrics in dungeon.metrics.snapshot().items():
            print(f"  {name}: {metrics['total_time'] * 1000:.2f}ms")


if __name__ == "__main__":
    main()
