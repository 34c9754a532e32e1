"""DungeonGenerator orchestrates one generation pass: graph, grid, then placements."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from time import perf_counter
from typing import Callable, List, Optional, Tuple, TypeVar

from dungeon_config import DungeonConfig
from dungeon_constants import MAX_RANDOM_SEED
from dungeon_layout import DungeonLayoutBuilder
from dungeon_metrics import GenerationMetrics
from dungeon_models import Corridor, NavigationMarker, SpawnPoint
from grid_map import GridMap
from navigation_planner import NavigationAffordancePlanner
from room_graph import RoomGraph, RoomNode
from room_tree_generator import RoomTreeGenerator
from spawn_planner import SpawnPlanner

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class GeneratedDungeon:
    """Everything one generation pass produced. Graph topology and grid are frozen."""

    config: DungeonConfig
    seed: int
    graph: RoomGraph
    grid: GridMap
    corridors: Tuple[Corridor, ...]
    spawns: Tuple[SpawnPoint, ...]
    markers: Tuple[NavigationMarker, ...]
    unspecified_rooms: Tuple[RoomNode, ...]
    metrics: Optional[GenerationMetrics] = None

    @property
    def root(self) -> RoomNode:
        return self.graph.root


class DungeonGenerator:
    """Manages the overall process of generating a dungeon."""

    def __init__(self, config: DungeonConfig) -> None:
        self.config = config

    @staticmethod
    def _run_phase(
        metrics: Optional[GenerationMetrics],
        name: str,
        func: Callable[[], T],
        size: Callable[[T], int],
    ) -> T:
        if metrics is None:
            return func()
        start = perf_counter()
        result = func()
        metrics.record_phase(name, perf_counter() - start, size(result))
        return result

    def generate(self) -> GeneratedDungeon:
        """Build a brand-new graph and grid; earlier results are never touched."""
        seed = self.config.random_seed
        if seed is None:
            # Pick a seed and log it, so a run can be reproduced by setting it in DungeonConfig.
            seed = random.randint(0, MAX_RANDOM_SEED)
            logger.info("Using random seed %d", seed)
        rng = random.Random(seed)
        metrics = GenerationMetrics() if self.config.collect_metrics else None

        tree_generator = RoomTreeGenerator(self.config, rng)
        graph = self._run_phase(metrics, "tree", tree_generator.generate, len)

        builder = DungeonLayoutBuilder(self.config)
        grid = self._run_phase(
            metrics, "layout", lambda: builder.build(graph), lambda _: len(builder.corridors)
        )

        spawn_planner = SpawnPlanner()
        spawns: List[SpawnPoint] = self._run_phase(
            metrics, "spawns", lambda: spawn_planner.plan(graph), len
        )

        navigation_planner = NavigationAffordancePlanner(self.config)
        markers: List[NavigationMarker] = self._run_phase(
            metrics, "navigation", lambda: navigation_planner.plan(graph), len
        )

        logger.debug(
            "Generated dungeon with seed %d: %d rooms, %d spawns, %d markers",
            seed,
            len(graph),
            len(spawns),
            len(markers),
        )
        return GeneratedDungeon(
            config=self.config,
            seed=seed,
            graph=graph,
            grid=grid,
            corridors=tuple(builder.corridors),
            spawns=tuple(spawns),
            markers=tuple(markers),
            unspecified_rooms=tuple(spawn_planner.unspecified_rooms),
            metrics=metrics,
        )


def generate_dungeon(
    seed: Optional[int],
    depth: int,
    branch_count: int,
    grid_width: int,
    grid_height: int,
) -> Tuple[RoomNode, GridMap]:
    """Single entry point: returns the start room and the frozen tile buffer.

    Raises ConfigurationError for invalid parameters before anything is built.
    """
    config = DungeonConfig(
        depth=depth,
        branch_count=branch_count,
        grid_width=grid_width,
        grid_height=grid_height,
        random_seed=seed,
    )
    dungeon = DungeonGenerator(config).generate()
    return dungeon.root, dungeon.grid
