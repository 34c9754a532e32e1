"""Structural checks over a generated dungeon, used by tests and the demo script."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Tuple

import networkx as nx

from dungeon_geometry import TilePos
from grid_map import GridMap
from room_graph import RoomGraph, RoomKind


@dataclass(frozen=True)
class GraphSummary:
    total_rooms: int
    total_edges: int
    kind_counts: Dict[RoomKind, int]
    start_in_degree: int
    boss_in_degrees: Tuple[int, ...]
    # Rooms on the longest start->boss path, both ends included.
    longest_path_rooms: int
    is_acyclic: bool


@dataclass(frozen=True)
class ReachabilityReport:
    start_center: TilePos
    reachable_tiles: int
    unreached_rooms: Tuple[int, ...]

    @property
    def fully_connected(self) -> bool:
        return not self.unreached_rooms


def build_nx_graph(graph: RoomGraph) -> nx.DiGraph:
    """Copy the room graph into a networkx DiGraph with a ``kind`` attribute per node."""
    result = nx.DiGraph()
    for node in graph.nodes:
        result.add_node(node.index, kind=node.kind, index_x=node.index_x, index_y=node.index_y)
    for parent, child in graph.edges():
        result.add_edge(parent.index, child.index)
    return result


def summarize_graph(graph: RoomGraph) -> GraphSummary:
    digraph = build_nx_graph(graph)
    kind_counts: Counter[RoomKind] = Counter(node.kind for node in graph.nodes)
    is_acyclic = nx.is_directed_acyclic_graph(digraph)

    longest = 0
    if is_acyclic and digraph.number_of_nodes() > 0:
        longest = nx.dag_longest_path_length(digraph) + 1

    return GraphSummary(
        total_rooms=digraph.number_of_nodes(),
        total_edges=digraph.number_of_edges(),
        kind_counts=dict(kind_counts),
        start_in_degree=digraph.in_degree(graph.root.index),
        boss_in_degrees=tuple(
            digraph.in_degree(node.index) for node in graph.nodes_of_kind(RoomKind.BOSS)
        ),
        longest_path_rooms=longest,
        is_acyclic=is_acyclic,
    )


def check_reachability(graph: RoomGraph, grid: GridMap) -> ReachabilityReport:
    """Flood fill from the start room's center and list the room centers it misses."""
    start_center = graph.root.center
    reachable = grid.flood_fill(start_center)
    unreached = tuple(node.index for node in graph.nodes if node.center not in reachable)
    return ReachabilityReport(
        start_center=start_center,
        reachable_tiles=len(reachable),
        unreached_rooms=unreached,
    )
