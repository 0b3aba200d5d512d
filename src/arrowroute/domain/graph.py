"""Visibility graph types.

The graph is stored as a flat node array plus an adjacency list keyed by
node index. Node indices are stable for the lifetime of one routing call;
index 0 is always the start node and the last index is always the end node.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from arrowroute.domain.geometry import Bounds, Point


class NodeKind(Enum):
    """Role of a node in the visibility graph.

    - START / END: The arrow endpoints
    - EXIT: Egress point from the obstacle containing the start
    - ENTRY: Ingress point into the obstacle containing the end
    - WAYPOINT: Go-around point generated near an obstacle
    """

    START = auto()
    END = auto()
    EXIT = auto()
    ENTRY = auto()
    WAYPOINT = auto()


@dataclass(frozen=True, slots=True)
class GraphNode:
    """Candidate routing point.

    Attributes:
        index: Position in the graph's node array
        position: Location of the node
        kind: Role of the node
    """

    index: int
    position: Point
    kind: NodeKind


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """Undirected edge between two mutually visible nodes.

    Attributes:
        node_a: Lower node index
        node_b: Higher node index
        weight: Euclidean distance between the nodes
    """

    node_a: int
    node_b: int
    weight: float


@dataclass
class VisibilityGraph:
    """Undirected weighted graph over candidate routing points.

    Attributes:
        nodes: Node array; a node's index equals its position in this list
        obstacles: Obstacles that edges were tested against (excluded
            start/end containers are not part of this list)
        adjacency: For each node index, (neighbor index, weight) pairs in
            insertion order
    """

    nodes: list[GraphNode]
    obstacles: list[Bounds] = field(default_factory=list)
    adjacency: list[list[tuple[int, float]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.adjacency:
            self.adjacency = [[] for _ in self.nodes]

    @property
    def start_index(self) -> int:
        return 0

    @property
    def end_index(self) -> int:
        return len(self.nodes) - 1

    def add_edge(self, a: int, b: int, weight: float) -> None:
        """Link two nodes in both directions."""
        self.adjacency[a].append((b, weight))
        self.adjacency[b].append((a, weight))

    def neighbors(self, index: int) -> list[tuple[int, float]]:
        return self.adjacency[index]

    def position(self, index: int) -> Point:
        return self.nodes[index].position

    def edges(self) -> list[GraphEdge]:
        """List every undirected edge once, lower index first."""
        return [
            GraphEdge(a, b, weight)
            for a, links in enumerate(self.adjacency)
            for b, weight in links
            if a < b
        ]

    @property
    def edge_count(self) -> int:
        return sum(len(links) for links in self.adjacency) // 2
