import logging

import pytest

from dungeon_analysis import check_reachability, summarize_graph
from dungeon_config import DungeonConfig
from dungeon_errors import ConfigurationError, GridFrozenError
from dungeon_generator import DungeonGenerator, generate_dungeon
from dungeon_models import SpawnKind
from grid_map import GridMap, TileKind
from room_graph import RoomKind, RoomNode


def test_generate_dungeon_entry_point():
    root, grid = generate_dungeon(seed=7, depth=2, branch_count=3, grid_width=100, grid_height=100)

    assert isinstance(root, RoomNode)
    assert isinstance(grid, GridMap)
    assert root.kind is RoomKind.START
    assert len(root.children) == 3
    assert grid.tile_at(*root.center) is TileKind.FLOOR
    assert check_reachability(root.graph, grid).fully_connected


@pytest.mark.parametrize(
    "depth,branch_count,width,height",
    [(0, 3, 100, 100), (2, 0, 100, 100), (2, 3, 0, 100), (6, 3, 100, 100)],
)
def test_generate_dungeon_rejects_bad_configuration(depth, branch_count, width, height):
    with pytest.raises(ConfigurationError):
        generate_dungeon(seed=1, depth=depth, branch_count=branch_count, grid_width=width, grid_height=height)


def test_scenario_depth_two_three_branches(make_dungeon):
    dungeon = make_dungeon(depth=2, branch_count=3)
    summary = summarize_graph(dungeon.graph)

    assert summary.start_in_degree == 0
    assert summary.boss_in_degrees == (3,)
    assert summary.longest_path_rooms == 4
    assert [spawn.kind for spawn in dungeon.spawns].count(SpawnKind.BOSS) == 1
    assert [spawn.kind for spawn in dungeon.spawns].count(SpawnKind.PLAYER) == 1
    assert len(dungeon.markers) == 9
    assert len(dungeon.corridors) == 9


def test_same_seed_is_deterministic(make_dungeon):
    first = make_dungeon(depth=3, branch_count=3, random_seed=42)
    second = make_dungeon(depth=3, branch_count=3, random_seed=42)

    assert first.seed == second.seed == 42
    assert first.graph.signature() == second.graph.signature()
    assert first.grid == second.grid
    assert first.spawns == second.spawns
    assert first.markers == second.markers


def test_random_seed_is_reported_and_reproducible(make_dungeon):
    unseeded = make_dungeon(random_seed=None)

    replay = make_dungeon(random_seed=unseeded.seed)

    assert replay.graph.signature() == unseeded.graph.signature()


def test_regeneration_builds_new_snapshots(dungeon_config):
    generator = DungeonGenerator(dungeon_config)

    first = generator.generate()
    before = first.grid.rows()
    second = generator.generate()

    assert second.graph is not first.graph
    assert second.grid is not first.grid
    assert first.grid.rows() == before


def test_published_results_are_read_only(make_dungeon):
    dungeon = make_dungeon()

    with pytest.raises(GridFrozenError):
        dungeon.grid.set_tile(0, 0, TileKind.FLOOR)
    with pytest.raises(ValueError):
        dungeon.graph.add_node(RoomKind.NORMAL, 5, 5)


def test_metrics_are_collected_per_phase():
    config = DungeonConfig(depth=2, branch_count=3, random_seed=3, collect_metrics=True)

    dungeon = DungeonGenerator(config).generate()

    snapshot = dungeon.metrics.snapshot()
    assert set(snapshot) == {"tree", "layout", "spawns", "navigation"}
    assert snapshot["tree"]["total_items"] == 8
    assert snapshot["layout"]["total_items"] == 9
    assert all(entry["invocations"] == 1 for entry in snapshot.values())


def test_metrics_are_off_by_default(make_dungeon):
    assert make_dungeon().metrics is None


def test_each_generation_gets_its_own_metrics():
    config = DungeonConfig(depth=2, branch_count=3, random_seed=3, collect_metrics=True)
    generator = DungeonGenerator(config)

    first = generator.generate()
    second = generator.generate()

    assert first.metrics is not second.metrics
    assert first.metrics.snapshot()["tree"]["invocations"] == 1
    assert second.metrics.snapshot()["tree"]["invocations"] == 1


def test_drawn_seed_is_logged_once(make_dungeon, caplog):
    with caplog.at_level(logging.INFO, logger="dungeon_generator"):
        dungeon = make_dungeon(random_seed=None)

    seed_lines = [record.getMessage() for record in caplog.records if "random seed" in record.getMessage()]
    assert seed_lines == [f"Using random seed {dungeon.seed}"]
