"""Configuration container for the dungeon layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from dungeon_constants import ROOM_HEIGHT, ROOM_WIDTH, X_STEP, Y_STEP
from dungeon_errors import ConfigurationError


def branch_offsets(branch_count: int) -> List[int]:
    """Y offsets for the first-level branches, symmetric around zero.

    Odd counts include the center row; even counts skip it so the fork stays
    balanced (2 -> [-1, 1], 4 -> [-2, -1, 1, 2]).
    """
    if branch_count < 1:
        raise ConfigurationError("branch_count must be at least 1")
    half = branch_count // 2
    offsets = list(range(-half, half + 1))
    if branch_count % 2 == 0:
        offsets.remove(0)
    return offsets


@dataclass
class DungeonConfig:
    """Aggregates all tunable parameters for dungeon generation."""

    # Number of rooms in each branch chain between the fork and the boss.
    depth: int
    # Number of branches leaving the start room.
    branch_count: int
    grid_width: int = 100
    grid_height: int = 100

    random_seed: int | None = None
    collect_metrics: bool = False

    # Tree-index space -> grid space scale, and the fixed room footprint.
    x_step: int = X_STEP
    y_step: int = Y_STEP
    room_width: int = ROOM_WIDTH
    room_height: int = ROOM_HEIGHT

    # Tree-index row of the start room; derived from the grid height when None.
    center_y: Optional[int] = None
    # Distance from a room center to its navigation markers; derived from the room size when None.
    marker_vertical_offset: Optional[int] = None
    marker_horizontal_offset: Optional[int] = None

    _center_y: int = field(init=False, repr=False)
    _marker_vertical_offset: int = field(init=False, repr=False)
    _marker_horizontal_offset: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ConfigurationError(f"DungeonConfig depth must be at least 1, got {self.depth}")
        if self.branch_count < 1:
            raise ConfigurationError(
                f"DungeonConfig branch_count must be at least 1, got {self.branch_count}"
            )
        if self.grid_width <= 0 or self.grid_height <= 0:
            raise ConfigurationError("DungeonConfig grid_width and grid_height must be positive")
        if self.x_step <= 0 or self.y_step <= 0:
            raise ConfigurationError("DungeonConfig x_step and y_step must be positive")
        if self.room_width <= 0 or self.room_height <= 0:
            raise ConfigurationError("DungeonConfig room_width and room_height must be positive")

        half = self.branch_count // 2
        if self.center_y is None:
            # Center the fork row vertically in the grid, but never push a branch above row 0.
            centered = (self.grid_height - self.room_height) // (2 * self.y_step)
            center_y = max(half, centered)
        else:
            center_y = int(self.center_y)
        if center_y - half < 0:
            raise ConfigurationError(
                f"DungeonConfig center_y {center_y} is too small for {self.branch_count} branches"
            )
        self._center_y = center_y

        self._marker_vertical_offset = (
            self.room_height // 2
            if self.marker_vertical_offset is None
            else int(self.marker_vertical_offset)
        )
        self._marker_horizontal_offset = (
            self.room_width // 2
            if self.marker_horizontal_offset is None
            else int(self.marker_horizontal_offset)
        )

        # Every footprint, the boss column included, must land inside the grid.
        required_width = (self.depth + 1) * self.x_step + self.room_width
        required_height = (center_y + half) * self.y_step + self.room_height
        if required_width > self.grid_width:
            raise ConfigurationError(
                f"Grid width {self.grid_width} cannot hold depth {self.depth}; need {required_width}"
            )
        if required_height > self.grid_height:
            raise ConfigurationError(
                f"Grid height {self.grid_height} cannot hold {self.branch_count} branches; "
                f"need {required_height}"
            )

    @property
    def resolved_center_y(self) -> int:
        return self._center_y

    @property
    def resolved_marker_vertical_offset(self) -> int:
        return self._marker_vertical_offset

    @property
    def resolved_marker_horizontal_offset(self) -> int:
        return self._marker_horizontal_offset

    @property
    def boss_index_x(self) -> int:
        return self.depth + 1
