"""Derives entity spawn points from a laid-out room graph."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

from dungeon_models import SpawnKind, SpawnPoint
from room_graph import RoomGraph, RoomKind, RoomNode

logger = logging.getLogger(__name__)

# Room kind -> what to spawn at its center. None means "deliberately nothing".
# Kinds missing from this table have no rule yet and are reported, not dropped silently.
SPAWN_RULES: Dict[RoomKind, Optional[SpawnKind]] = {
    RoomKind.START: SpawnKind.PLAYER,
    RoomKind.BOSS: SpawnKind.BOSS,
    RoomKind.BATTLE: SpawnKind.ENEMY,
    RoomKind.NORMAL: None,
}


class SpawnPlanner:
    """Walks the graph once and emits ``(position, kind)`` records in visit order.

    A convergence room is reached once per incoming path but only spawns on
    the first visit; the visited set is keyed by node index, not by kind.
    Rooms whose kind has no rule end up in ``unspecified_rooms``.
    """

    def __init__(self) -> None:
        self.unspecified_rooms: List[RoomNode] = []

    def plan(self, graph: RoomGraph) -> List[SpawnPoint]:
        self.unspecified_rooms = []
        spawns: List[SpawnPoint] = []
        visited: Set[int] = set()

        for node in graph.traverse():
            if node.index in visited:
                continue
            visited.add(node.index)

            if node.kind not in SPAWN_RULES:
                logger.debug("No spawn rule for %s room %d", node.kind.name, node.index)
                self.unspecified_rooms.append(node)
                continue

            spawn_kind = SPAWN_RULES[node.kind]
            if spawn_kind is None:
                continue
            spawns.append(SpawnPoint(position=node.center, kind=spawn_kind, room_index=node.index))

        logger.debug(
            "Planned %d spawns; %d rooms without a spawn rule",
            len(spawns),
            len(self.unspecified_rooms),
        )
        return spawns
