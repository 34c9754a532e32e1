"""Exception types raised by the dungeon layout engine."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when generation parameters are invalid; generation is aborted."""


class OutOfBoundsAccess(IndexError):
    """Raised when a GridMap read falls outside ``[0, width) x [0, height)``."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Coordinates out of bounds: ({x}, {y}) for grid {width}x{height}")
        self.x = x
        self.y = y


class GridFrozenError(RuntimeError):
    """Raised when something tries to write to a published (frozen) GridMap."""
