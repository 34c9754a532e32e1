"""Bounds-checked 2-D tile buffer produced by the layout builder."""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Deque, Iterable, Iterator, List, Set, Tuple

from dungeon_errors import ConfigurationError, GridFrozenError, OutOfBoundsAccess
from dungeon_geometry import Rect, TilePos

logger = logging.getLogger(__name__)


class TileKind(Enum):
    EMPTY = 0
    FLOOR = 1  # Room interior.
    CORRIDOR = 2
    WALL = 3

    @property
    def walkable(self) -> bool:
        return self in (TileKind.FLOOR, TileKind.CORRIDOR)


class GridMap:
    """A ``width x height`` grid of TileKind values stored as ``tiles[y][x]``.

    Reads outside the grid raise OutOfBoundsAccess; writes outside the grid are
    ignored. Once ``freeze()`` is called the map is a read-only snapshot and
    every write raises GridFrozenError.
    """

    __slots__ = ("_w", "_h", "_tiles", "_frozen")

    def __init__(self, width: int, height: int, fill: TileKind = TileKind.EMPTY) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"GridMap dimensions must be positive, got {width}x{height}")
        self._w = int(width)
        self._h = int(height)
        self._tiles: List[List[TileKind]] = [[fill for _ in range(self._w)] for _ in range(self._h)]
        self._frozen = False
        logger.debug("Initialized GridMap %dx%d filled with %s", self._w, self._h, fill.name)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._w and 0 <= y < self._h

    def tile_at(self, x: int, y: int) -> TileKind:
        if not self.in_bounds(x, y):
            raise OutOfBoundsAccess(x, y, self._w, self._h)
        return self._tiles[y][x]

    def is_walkable(self, x: int, y: int) -> bool:
        """True for in-bounds Floor or Corridor tiles; never raises."""
        if not self.in_bounds(x, y):
            return False
        return self._tiles[y][x].walkable

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """Yield the in-bounds 4-connected neighbors of ``(x, y)``."""
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx_, ny_ = x + dx, y + dy
            if self.in_bounds(nx_, ny_):
                yield nx_, ny_

    def count(self, kind: TileKind) -> int:
        return sum(row.count(kind) for row in self._tiles)

    def rows(self) -> Tuple[Tuple[TileKind, ...], ...]:
        """Immutable copy of the buffer, row by row."""
        return tuple(tuple(row) for row in self._tiles)

    # ------------------------------------------------------------------
    # Writes (layout builder only)
    # ------------------------------------------------------------------
    def _ensure_writable(self) -> None:
        if self._frozen:
            raise GridFrozenError("GridMap is frozen; generate a new dungeon instead of editing it")

    def fill(self, kind: TileKind) -> None:
        self._ensure_writable()
        for row in self._tiles:
            for x in range(self._w):
                row[x] = kind

    def set_tile(self, x: int, y: int, kind: TileKind) -> None:
        self._ensure_writable()
        if not self.in_bounds(x, y):
            return
        self._tiles[y][x] = kind

    def carve_rect(self, rect: Rect, kind: TileKind = TileKind.FLOOR) -> None:
        for tile in rect.tiles():
            self.set_tile(tile.x, tile.y, kind)

    def carve_corridor(self, tiles: Iterable[TilePos]) -> int:
        """Mark tiles as Corridor unless they are already walkable.

        Room floor stays Floor, so carving the same segment twice changes
        nothing. Returns the number of tiles that changed.
        """
        self._ensure_writable()
        changed = 0
        for tile in tiles:
            if not self.in_bounds(tile.x, tile.y):
                continue
            if self._tiles[tile.y][tile.x].walkable:
                continue
            self._tiles[tile.y][tile.x] = TileKind.CORRIDOR
            changed += 1
        return changed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def flood_fill(self, start: TilePos) -> Set[TilePos]:
        """Walkable tiles 4-connected to ``start`` (empty if ``start`` is not walkable)."""
        if not self.is_walkable(start.x, start.y):
            return set()
        visited: Set[TilePos] = {start}
        queue: Deque[TilePos] = deque([start])
        while queue:
            current = queue.popleft()
            for nx_, ny_ in self.neighbors(current.x, current.y):
                if not self._tiles[ny_][nx_].walkable:
                    continue
                neighbor = TilePos(nx_, ny_)
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                queue.append(neighbor)
        return visited

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridMap):
            return NotImplemented
        return self._w == other._w and self._h == other._h and self._tiles == other._tiles

    def __repr__(self) -> str:
        return f"GridMap({self._w}x{self._h}, frozen={self._frozen})"
