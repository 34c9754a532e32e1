import pytest

from dungeon_errors import ConfigurationError, GridFrozenError, OutOfBoundsAccess
from dungeon_geometry import Rect, TilePos
from grid_map import GridMap, TileKind


@pytest.fixture
def wall_grid() -> GridMap:
    return GridMap(10, 6, fill=TileKind.WALL)


def test_rejects_non_positive_dimensions():
    with pytest.raises(ConfigurationError):
        GridMap(0, 5)


@pytest.mark.parametrize(
    "x,y,inside",
    [
        (0, 0, True),
        (9, 0, True),
        (0, 5, True),
        (9, 5, True),
        (-1, 0, False),
        (10, 0, False),
        (0, -1, False),
        (0, 6, False),
    ],
)
def test_tile_at_and_in_bounds_agree(wall_grid, x, y, inside):
    assert wall_grid.in_bounds(x, y) is inside
    if inside:
        assert wall_grid.tile_at(x, y) is TileKind.WALL
    else:
        with pytest.raises(OutOfBoundsAccess):
            wall_grid.tile_at(x, y)


def test_out_of_bounds_access_is_an_index_error(wall_grid):
    with pytest.raises(IndexError):
        wall_grid.tile_at(100, 100)


def test_out_of_range_writes_are_ignored(wall_grid):
    wall_grid.set_tile(-1, 3, TileKind.FLOOR)
    wall_grid.set_tile(10, 3, TileKind.FLOOR)

    assert wall_grid.count(TileKind.FLOOR) == 0


def test_carve_rect_clips_at_the_edge(wall_grid):
    wall_grid.carve_rect(Rect(8, 4, 5, 5), TileKind.FLOOR)

    assert wall_grid.count(TileKind.FLOOR) == 4
    assert wall_grid.tile_at(9, 5) is TileKind.FLOOR


def test_carve_corridor_is_idempotent_and_keeps_floor(wall_grid):
    wall_grid.carve_rect(Rect(0, 0, 3, 3), TileKind.FLOOR)
    segment = [TilePos(x, 1) for x in range(0, 7)]

    changed_first = wall_grid.carve_corridor(segment)
    snapshot = wall_grid.rows()
    changed_second = wall_grid.carve_corridor(segment)

    assert changed_first == 4
    assert changed_second == 0
    assert wall_grid.rows() == snapshot
    assert wall_grid.tile_at(1, 1) is TileKind.FLOOR
    assert wall_grid.tile_at(5, 1) is TileKind.CORRIDOR


def test_walkability(wall_grid):
    wall_grid.set_tile(2, 2, TileKind.FLOOR)
    wall_grid.set_tile(3, 2, TileKind.CORRIDOR)
    wall_grid.set_tile(4, 2, TileKind.EMPTY)

    assert wall_grid.is_walkable(2, 2)
    assert wall_grid.is_walkable(3, 2)
    assert not wall_grid.is_walkable(4, 2)
    assert not wall_grid.is_walkable(5, 2)
    assert not wall_grid.is_walkable(-3, 2)


def test_flood_fill_stops_at_walls(wall_grid):
    wall_grid.carve_rect(Rect(0, 0, 2, 2), TileKind.FLOOR)
    wall_grid.carve_corridor([TilePos(2, 0), TilePos(3, 0)])
    wall_grid.carve_rect(Rect(6, 3, 2, 2), TileKind.FLOOR)

    reached = wall_grid.flood_fill(TilePos(0, 0))

    assert len(reached) == 6
    assert TilePos(3, 0) in reached
    assert TilePos(6, 3) not in reached
    assert wall_grid.flood_fill(TilePos(9, 0)) == set()


def test_frozen_grid_rejects_writes(wall_grid):
    wall_grid.freeze()

    with pytest.raises(GridFrozenError):
        wall_grid.set_tile(1, 1, TileKind.FLOOR)
    with pytest.raises(GridFrozenError):
        wall_grid.carve_corridor([TilePos(1, 1)])
    with pytest.raises(GridFrozenError):
        wall_grid.fill(TileKind.EMPTY)
    assert wall_grid.tile_at(1, 1) is TileKind.WALL


def test_neighbors_are_clipped(wall_grid):
    assert sorted(wall_grid.neighbors(0, 0)) == [(0, 1), (1, 0)]
    assert len(list(wall_grid.neighbors(4, 3))) == 4
