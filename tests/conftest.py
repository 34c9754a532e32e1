import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator, GeneratedDungeon
from dungeon_layout import DungeonLayoutBuilder
from room_graph import RoomGraph
from room_tree_generator import RoomTreeGenerator


@pytest.fixture
def make_config() -> Callable[..., DungeonConfig]:
    def _make_config(
        *,
        depth: int = 2,
        branch_count: int = 3,
        grid_width: int = 100,
        grid_height: int = 100,
        random_seed: int | None = 1234,
        **kwargs,
    ) -> DungeonConfig:
        return DungeonConfig(
            depth=depth,
            branch_count=branch_count,
            grid_width=grid_width,
            grid_height=grid_height,
            random_seed=random_seed,
            **kwargs,
        )

    return _make_config


@pytest.fixture
def dungeon_config(make_config) -> DungeonConfig:
    return make_config()


@pytest.fixture
def room_graph(dungeon_config: DungeonConfig) -> RoomGraph:
    return RoomTreeGenerator(dungeon_config).generate()


@pytest.fixture
def laid_out_graph(dungeon_config: DungeonConfig, room_graph: RoomGraph) -> RoomGraph:
    DungeonLayoutBuilder(dungeon_config).build(room_graph)
    return room_graph


@pytest.fixture
def make_dungeon(make_config) -> Callable[..., GeneratedDungeon]:
    def _make_dungeon(**kwargs) -> GeneratedDungeon:
        return DungeonGenerator(make_config(**kwargs)).generate()

    return _make_dungeon
