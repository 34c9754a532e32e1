"""Abstract dungeon topology: an arena of room nodes joined by directed edges."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Optional, Set, Tuple

import networkx as nx

from dungeon_geometry import TilePos


class RoomKind(Enum):
    """What a room is used for during play."""
    START = "start"  # Player entry; always the graph root.
    NORMAL = "normal"
    BATTLE = "battle"
    TREASURE = "treasure"
    HEAL = "heal"
    BOSS = "boss"  # Shared sink every branch converges on.


# Kinds the generator draws from for branch rooms.
BRANCH_ROOM_KINDS: Tuple[RoomKind, ...] = (RoomKind.NORMAL, RoomKind.BATTLE, RoomKind.TREASURE)


class RoomNode:
    """One abstract room, owned by a RoomGraph.

    Nodes do not own their children; topology queries are answered by the
    graph, so a node reached through several edges has no single parent.
    """

    __slots__ = ("_graph", "index", "kind", "index_x", "index_y", "_center")

    def __init__(self, graph: RoomGraph, index: int, kind: RoomKind, index_x: int, index_y: int) -> None:
        self._graph = graph
        self.index = index
        self.kind = kind
        self.index_x = index_x
        self.index_y = index_y
        self._center: Optional[TilePos] = None

    @property
    def graph(self) -> RoomGraph:
        return self._graph

    @property
    def children(self) -> List[RoomNode]:
        return self._graph.children(self)

    @property
    def predecessors(self) -> List[RoomNode]:
        return self._graph.predecessors(self)

    @property
    def parent(self) -> Optional[RoomNode]:
        """The single predecessor, or None for the root.

        Raises ValueError on a convergence node; use ``predecessors`` there.
        """
        preds = self.predecessors
        if not preds:
            return None
        if len(preds) > 1:
            raise ValueError(
                f"{self!r} has {len(preds)} predecessors; it has no single parent"
            )
        return preds[0]

    @property
    def in_degree(self) -> int:
        return self._graph.in_degree(self)

    @property
    def has_center(self) -> bool:
        return self._center is not None

    @property
    def center(self) -> TilePos:
        """Grid-space center, available once the layout builder has placed the room."""
        if self._center is None:
            raise ValueError(f"{self!r} has not been laid out yet")
        return self._center

    def assign_center(self, center: TilePos) -> None:
        if self._center is not None:
            raise ValueError(f"{self!r} already has a center at {self._center}")
        self._center = center

    def __repr__(self) -> str:
        return f"RoomNode({self.index}, {self.kind.name}, ({self.index_x}, {self.index_y}))"


class RoomGraph:
    """Directed room graph rooted at the single START node.

    Nodes live in an arena list indexed by ``RoomNode.index``; edges are kept
    in a ``networkx.DiGraph`` whose successor order is insertion order, which
    is also the traversal order.
    """

    def __init__(self) -> None:
        self._nodes: List[RoomNode] = []
        self._edges = nx.DiGraph()
        self._frozen = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def add_node(self, kind: RoomKind, index_x: int, index_y: int) -> RoomNode:
        self._ensure_mutable()
        if kind is RoomKind.START and any(node.kind is RoomKind.START for node in self._nodes):
            raise ValueError("RoomGraph already has a START node")
        node = RoomNode(self, len(self._nodes), kind, index_x, index_y)
        self._nodes.append(node)
        self._edges.add_node(node.index)
        return node

    def add_edge(self, parent: RoomNode, child: RoomNode) -> None:
        self._ensure_mutable()
        self._check_owned(parent)
        self._check_owned(child)
        if child.kind is RoomKind.START:
            raise ValueError("The START node cannot have incoming edges")
        if parent.index == child.index:
            raise ValueError(f"Self-loop on {parent!r}")
        if self._edges.has_edge(parent.index, child.index):
            return
        if nx.has_path(self._edges, child.index, parent.index):
            raise ValueError(f"Edge {parent!r} -> {child!r} would close a cycle")
        self._edges.add_edge(parent.index, child.index)

    def freeze(self) -> None:
        """Lock the topology; only node centers may change afterward."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise ValueError("RoomGraph topology is frozen")

    def _check_owned(self, node: RoomNode) -> None:
        if node.graph is not self:
            raise ValueError(f"{node!r} belongs to a different graph")

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------
    @property
    def root(self) -> RoomNode:
        for node in self._nodes:
            if node.kind is RoomKind.START:
                return node
        raise ValueError("RoomGraph has no START node")

    @property
    def nodes(self) -> Tuple[RoomNode, ...]:
        return tuple(self._nodes)

    @property
    def digraph(self) -> nx.DiGraph:
        """Read-only view of the edge structure, keyed by node index."""
        return self._edges.copy(as_view=True)

    def node(self, index: int) -> RoomNode:
        return self._nodes[index]

    def children(self, node: RoomNode) -> List[RoomNode]:
        return [self._nodes[idx] for idx in self._edges.successors(node.index)]

    def predecessors(self, node: RoomNode) -> List[RoomNode]:
        return [self._nodes[idx] for idx in self._edges.predecessors(node.index)]

    def in_degree(self, node: RoomNode) -> int:
        return self._edges.in_degree(node.index)

    def nodes_of_kind(self, kind: RoomKind) -> List[RoomNode]:
        return [node for node in self._nodes if node.kind is kind]

    def leaves(self) -> List[RoomNode]:
        """Nodes without children, in depth-first pre-order."""
        return [node for node in self.iter_unique() if self._edges.out_degree(node.index) == 0]

    def traverse(self, start: Optional[RoomNode] = None) -> Iterator[RoomNode]:
        """Depth-first pre-order walk that follows every edge.

        A convergence node is yielded once per incoming path, the same way a
        recursive "visit self, then each child" walk would. Each call returns
        a fresh generator, so the walk can be restarted at will.
        """
        first = self.root if start is None else start
        stack: List[int] = [first.index]
        while stack:
            idx = stack.pop()
            yield self._nodes[idx]
            successors = list(self._edges.successors(idx))
            stack.extend(reversed(successors))

    def iter_unique(self, start: Optional[RoomNode] = None) -> Iterator[RoomNode]:
        """Depth-first pre-order walk yielding each reachable node exactly once."""
        first = self.root if start is None else start
        seen: Set[int] = set()
        stack: List[int] = [first.index]
        while stack:
            idx = stack.pop()
            if idx in seen:
                continue
            seen.add(idx)
            yield self._nodes[idx]
            successors = [succ for succ in self._edges.successors(idx) if succ not in seen]
            stack.extend(reversed(successors))

    def edges(self) -> Iterator[Tuple[RoomNode, RoomNode]]:
        """Every parent->child edge exactly once, in depth-first pre-order of the parents."""
        for parent in self.iter_unique():
            for child in self.children(parent):
                yield parent, child

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[RoomNode]:
        return self.iter_unique()

    def signature(self) -> Tuple[Tuple[str, int, int, Tuple[int, ...]], ...]:
        """Hashable description of the topology, handy for comparing two generations."""
        return tuple(
            (
                node.kind.value,
                node.index_x,
                node.index_y,
                tuple(self._edges.successors(node.index)),
            )
            for node in self._nodes
        )
