"""Value records emitted by the layout builder and the placement planners."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from dungeon_geometry import Rotation, TilePos


@dataclass(frozen=True)
class Corridor:
    """An L-shaped, two-tile-wide passage carved for one parent->child edge."""

    parent_index: int
    child_index: int
    # Where the horizontal and vertical runs meet.
    corner: TilePos
    tiles: Tuple[TilePos, ...]
    # True when the horizontal run is anchored on the child's row (fork edges).
    anchored_on_child_row: bool

    def __contains__(self, tile: TilePos) -> bool:
        return tile in self.tiles


class SpawnKind(Enum):
    PLAYER = "player"
    ENEMY = "enemy"
    BOSS = "boss"


@dataclass(frozen=True)
class SpawnPoint:
    """Grid-space location where the engine should instantiate an entity."""

    position: TilePos
    kind: SpawnKind
    room_index: int


class MarkerOrientation(Enum):
    """Facing of a navigation marker, as a counter-clockwise rotation from "up"."""

    UP = Rotation.DEG_0
    DOWN = Rotation.DEG_180
    RIGHT = Rotation.DEG_270

    @property
    def degrees(self) -> int:
        return self.value.degrees


@dataclass(frozen=True)
class NavigationMarker:
    """Directional indicator letting the player pick ``target_index`` from ``source_index``."""

    position: TilePos
    orientation: MarkerOrientation
    source_index: int
    target_index: int
