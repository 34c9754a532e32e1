"""Geometry helpers for tiles and rectangles on the grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class Rotation(Enum):
    """Represents counter-clockwise rotations from "up" in 90° increments."""

    DEG_0 = 0
    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270

    @property
    def degrees(self) -> int:
        return self.value


@dataclass(frozen=True, order=True)
class TilePos:
    """Integer tile coordinate."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y

    def offset(self, dx: int, dy: int) -> TilePos:
        return TilePos(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle using integer tile coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def max_x(self) -> int:
        """Right edge (exclusive)."""
        return self.x + self.width

    @property
    def max_y(self) -> int:
        """Bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def center(self) -> TilePos:
        """Center tile, rounding toward the origin for even sizes."""
        return TilePos(self.x + self.width // 2, self.y + self.height // 2)

    def tiles(self) -> Iterator[TilePos]:
        """Yield every tile covered by the rect, row by row."""
        for ty in range(self.y, self.max_y):
            for tx in range(self.x, self.max_x):
                yield TilePos(tx, ty)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Return the rect as an ``(x, y, width, height)`` tuple."""
        return self.x, self.y, self.width, self.height


def span(a: int, b: int) -> range:
    """Inclusive integer range between ``a`` and ``b`` in either order."""
    return range(min(a, b), max(a, b) + 1)
