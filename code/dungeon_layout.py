"""Rasterizes a room graph into a GridMap: room footprints first, then corridors."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from dungeon_config import DungeonConfig
from dungeon_constants import CORRIDOR_WIDTH
from dungeon_errors import ConfigurationError
from dungeon_geometry import Rect, TilePos, span
from dungeon_models import Corridor
from grid_map import GridMap, TileKind
from room_graph import RoomGraph, RoomKind, RoomNode

logger = logging.getLogger(__name__)


def footprint_for(node: RoomNode, config: DungeonConfig) -> Rect:
    """The rectangle a room occupies in grid space, derived from its tree index."""
    return Rect(
        node.index_x * config.x_step,
        node.index_y * config.y_step,
        config.room_width,
        config.room_height,
    )


class DungeonLayoutBuilder:
    """Owns the GridMap while it is being written and hands it out frozen.

    ``build`` runs two depth-first pre-order passes over the graph. The
    footprint pass carves every room as Floor and records its center. The
    corridor pass carves one L-shaped corridor per edge. A shared boss room
    therefore gets one corridor per incoming edge; overlapping carves are
    no-ops.
    """

    def __init__(self, config: DungeonConfig) -> None:
        self.config = config
        self.corridors: List[Corridor] = []
        self.footprints: Dict[int, Rect] = {}

    def build(
        self,
        graph: Union[RoomGraph, RoomNode],
        grid_width: Optional[int] = None,
        grid_height: Optional[int] = None,
    ) -> GridMap:
        if isinstance(graph, RoomNode):
            graph = graph.graph
        width = self.config.grid_width if grid_width is None else grid_width
        height = self.config.grid_height if grid_height is None else grid_height

        self.corridors = []
        self.footprints = {}
        nodes = list(graph.iter_unique())
        footprints = [(node, self._checked_footprint(node, width, height)) for node in nodes]

        grid = GridMap(width, height, fill=TileKind.WALL)
        for node, rect in footprints:
            grid.carve_rect(rect, TileKind.FLOOR)
            node.assign_center(rect.center)
            self.footprints[node.index] = rect

        for parent, child in graph.edges():
            corridor = self.plan_corridor(parent, child)
            grid.carve_corridor(corridor.tiles)
            self.corridors.append(corridor)

        grid.freeze()
        logger.debug(
            "Laid out %d rooms and %d corridors on a %dx%d grid",
            len(self.footprints),
            len(self.corridors),
            width,
            height,
        )
        return grid

    def _checked_footprint(self, node: RoomNode, width: int, height: int) -> Rect:
        if node.has_center:
            raise ValueError(f"{node!r} has already been laid out")
        rect = footprint_for(node, self.config)
        if rect.x < 0 or rect.y < 0 or rect.max_x > width or rect.max_y > height:
            raise ConfigurationError(
                f"Footprint {rect.to_tuple()} of {node!r} does not fit a {width}x{height} grid"
            )
        return rect

    def plan_corridor(self, parent: RoomNode, child: RoomNode) -> Corridor:
        """Compute the tiles of the L-shaped corridor between two placed rooms.

        Edges leaving the start room run vertically out of the fork first and
        turn onto the child's row; every other edge runs along the parent's
        row and turns at the child's column. The second row of the horizontal
        run sits on the side the child lies toward (above: -1, otherwise +1);
        the second column of the vertical run is always to its right.
        """
        a = parent.center
        b = child.center
        row_sign = -1 if b.y < a.y else 1

        from_fork = parent.kind is RoomKind.START
        if from_fork:
            vertical_x = a.x
            horizontal_y = b.y
        else:
            vertical_x = b.x
            horizontal_y = a.y

        tiles: Dict[TilePos, None] = {}
        for y in span(a.y, b.y):
            for extra in range(CORRIDOR_WIDTH):
                tiles[TilePos(vertical_x + extra, y)] = None
        for x in span(a.x, b.x):
            for extra in range(CORRIDOR_WIDTH):
                tiles[TilePos(x, horizontal_y + extra * row_sign)] = None

        return Corridor(
            parent_index=parent.index,
            child_index=child.index,
            corner=TilePos(vertical_x, horizontal_y),
            tiles=tuple(tiles),
            anchored_on_child_row=from_fork,
        )
