"""Places one directional marker per graph edge so a UI can offer room choices."""

from __future__ import annotations

import logging
from typing import List

from dungeon_config import DungeonConfig
from dungeon_models import MarkerOrientation, NavigationMarker
from room_graph import RoomGraph, RoomNode

logger = logging.getLogger(__name__)


class NavigationAffordancePlanner:
    """Emits a NavigationMarker for every parent->child edge.

    At a fork (a parent with several children) the marker sits above or
    below the parent's center, pointing toward the child's side. Everywhere
    else, including the child level with a fork, it sits to the right of the
    parent's center and points right.
    """

    def __init__(self, config: DungeonConfig) -> None:
        self.config = config

    def plan(self, graph: RoomGraph) -> List[NavigationMarker]:
        markers: List[NavigationMarker] = []
        for parent, child in graph.edges():
            markers.append(self.marker_for(parent, child))
        logger.debug("Planned %d navigation markers", len(markers))
        return markers

    def marker_for(self, parent: RoomNode, child: RoomNode) -> NavigationMarker:
        origin = parent.center
        is_fork = len(parent.children) > 1
        vertical = self.config.resolved_marker_vertical_offset
        horizontal = self.config.resolved_marker_horizontal_offset

        if is_fork and child.center.y < origin.y:
            orientation = MarkerOrientation.UP
            position = origin.offset(0, -vertical)
        elif is_fork and child.center.y > origin.y:
            orientation = MarkerOrientation.DOWN
            position = origin.offset(0, vertical)
        else:
            orientation = MarkerOrientation.RIGHT
            position = origin.offset(horizontal, 0)

        return NavigationMarker(
            position=position,
            orientation=orientation,
            source_index=parent.index,
            target_index=child.index,
        )
