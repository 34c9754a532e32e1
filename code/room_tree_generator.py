"""Builds the branching room graph: a start fork, straight chains, one shared boss."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from dungeon_config import DungeonConfig, branch_offsets
from room_graph import BRANCH_ROOM_KINDS, RoomGraph, RoomKind, RoomNode

logger = logging.getLogger(__name__)


class RoomTreeGenerator:
    """Creates the abstract room topology in tree-index space.

    The start room sits at ``(0, center_y)``. Each of ``branch_count`` branches
    leaves it at ``(1, center_y + offset)`` and continues in a straight line
    until it holds ``depth`` rooms. Every branch end then links to the same
    boss room at ``(depth + 1, center_y)``.
    """

    def __init__(self, config: DungeonConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.random_seed)

    def generate(self) -> RoomGraph:
        depth = self.config.depth
        center_y = self.config.resolved_center_y
        graph = RoomGraph()

        root = graph.add_node(RoomKind.START, 0, center_y)

        # Step 1: the fork. Siblings get distinct rows so their chains never share a row.
        branches: List[RoomNode] = []
        for offset in branch_offsets(self.config.branch_count):
            child = graph.add_node(self._random_room_kind(), 1, center_y + offset)
            graph.add_edge(root, child)
            branches.append(child)

        # Step 2: grow each branch as a straight chain, one room per depth level.
        for branch in branches:
            self._grow_chain(graph, branch, level=2)

        # Step 3: every leaf converges on one boss room.
        leaves = graph.leaves()
        boss = graph.add_node(RoomKind.BOSS, self.config.boss_index_x, center_y)
        for leaf in leaves:
            graph.add_edge(leaf, boss)

        graph.freeze()
        logger.debug(
            "Generated room graph: %d rooms, %d branches, boss in-degree %d",
            len(graph),
            len(branches),
            boss.in_degree,
        )
        return graph

    def _grow_chain(self, graph: RoomGraph, tail: RoomNode, level: int) -> None:
        while level <= self.config.depth:
            child = graph.add_node(self._random_room_kind(), tail.index_x + 1, tail.index_y)
            graph.add_edge(tail, child)
            tail = child
            level += 1

    def _random_room_kind(self) -> RoomKind:
        return self.rng.choice(BRANCH_ROOM_KINDS)
