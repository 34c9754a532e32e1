"""Render a GridMap (and optionally rooms and markers) as ASCII."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from dungeon_models import MarkerOrientation, NavigationMarker
from grid_map import GridMap, TileKind
from room_graph import RoomGraph, RoomKind

logger = logging.getLogger(__name__)

TILE_CHARS = {
    TileKind.EMPTY: " ",
    TileKind.FLOOR: ".",
    TileKind.CORRIDOR: ",",
    TileKind.WALL: "#",
}

ROOM_CHARS = {
    RoomKind.START: "S",
    RoomKind.NORMAL: "N",
    RoomKind.BATTLE: "B",
    RoomKind.TREASURE: "T",
    RoomKind.HEAL: "H",
    RoomKind.BOSS: "X",
}

MARKER_CHARS = {
    MarkerOrientation.UP: "^",
    MarkerOrientation.DOWN: "v",
    MarkerOrientation.RIGHT: ">",
}


def render_grid(
    grid: GridMap,
    graph: Optional[RoomGraph] = None,
    markers: Iterable[NavigationMarker] = (),
) -> List[str]:
    """Return one string per grid row."""
    canvas = [[TILE_CHARS[tile] for tile in row] for row in grid.rows()]

    for marker in markers:
        x, y = marker.position
        if not grid.in_bounds(x, y):
            logger.warning(
                "Marker %s -> %s lies outside the grid at %s",
                marker.source_index,
                marker.target_index,
                marker.position,
            )
            continue
        canvas[y][x] = MARKER_CHARS[marker.orientation]

    if graph is not None:
        for node in graph.nodes:
            if not node.has_center:
                continue
            x, y = node.center
            canvas[y][x] = ROOM_CHARS[node.kind]

    return ["".join(row) for row in canvas]


def print_grid(lines: Iterable[str], horizontal_sep: str = "") -> None:
    """Prints the ASCII grid to the console."""
    for row in lines:
        print(horizontal_sep.join(row))
