"""Visibility graph construction.

Builds the graph searched by the router. Nodes are, in fixed order:

    start, exit point?, entry point?, waypoints..., end

Two nodes are linked when the segment between them clears every active
obstacle at a tightened margin. An obstacle that contains the start (or end)
is the shape the arrow leaves (or enters); it is excluded from waypoint
generation and visibility tests, and the endpoint is linked unconditionally
to a single egress point on that obstacle's boundary.
"""

from collections.abc import Sequence

import structlog

from arrowroute.core.geometry import (
    EPSILON,
    distance,
    find_containing_obstacle,
    segment_intersects_any,
)
from arrowroute.core.waypoints import generate_waypoints
from arrowroute.domain import Bounds, GraphNode, NodeKind, Point, VisibilityGraph

logger = structlog.get_logger(__name__)

# Node kind pairs (lower index first) linked without a visibility test
FORCED_LINKS = frozenset(
    {
        (NodeKind.START, NodeKind.EXIT),
        (NodeKind.ENTRY, NodeKind.END),
    }
)


def find_edge_exit(point: Point, obstacle: Bounds, margin: float) -> Point:
    """Find the egress point from inside an obstacle.

    The vector from the obstacle center to the point is split into its axis
    components; the point exits through the edge on the dominant axis and is
    pushed out by margin. Ties exit vertically.

    Args:
        point: Point inside the obstacle
        obstacle: Containing obstacle
        margin: Outward offset past the edge

    Returns:
        Exit point just outside the obstacle boundary
    """
    center = obstacle.center
    dx = point.x - center.x
    dy = point.y - center.y

    if abs(dx) > abs(dy):
        if dx > 0:
            return Point(obstacle.max_x + margin, point.y)
        return Point(obstacle.min_x - margin, point.y)

    if dy > 0:
        return Point(point.x, obstacle.max_y + margin)
    return Point(point.x, obstacle.min_y - margin)


class VisibilityGraphBuilder:
    """Builds visibility graphs for one routing margin.

    Waypoints are generated at the full margin; visibility is tested at
    ``margin * clearance_factor`` so that legitimate tight routes between
    neighbouring obstacles are not pruned.
    """

    def __init__(
        self,
        margin: float,
        clearance_factor: float = 0.3,
        epsilon: float = EPSILON,
    ) -> None:
        """Initialize the builder.

        Args:
            margin: Routing margin around obstacles
            clearance_factor: Fraction of the margin used for visibility tests
            epsilon: Determinant threshold for parallel segments
        """
        self.margin = margin
        self.clearance_factor = clearance_factor
        self.epsilon = epsilon

    @property
    def visibility_margin(self) -> float:
        return self.margin * self.clearance_factor

    def build(self, start: Point, end: Point, obstacles: Sequence[Bounds]) -> VisibilityGraph:
        """Build the visibility graph for one routing call.

        Args:
            start: Arrow start point
            end: Arrow end point
            obstacles: All obstacles in the scene

        Returns:
            Graph whose ``obstacles`` holds the non-excluded obstacles
        """
        start_idx = find_containing_obstacle(start, obstacles)
        end_idx = find_containing_obstacle(end, obstacles)
        active = [
            obs for idx, obs in enumerate(obstacles) if idx != start_idx and idx != end_idx
        ]

        placed: list[tuple[Point, NodeKind]] = [(start, NodeKind.START)]
        if start_idx is not None:
            placed.append((find_edge_exit(start, obstacles[start_idx], self.margin), NodeKind.EXIT))
        if end_idx is not None:
            placed.append((find_edge_exit(end, obstacles[end_idx], self.margin), NodeKind.ENTRY))
        placed.extend((wp, NodeKind.WAYPOINT) for wp in generate_waypoints(active, self.margin))
        placed.append((end, NodeKind.END))

        nodes = [GraphNode(i, pos, kind) for i, (pos, kind) in enumerate(placed)]
        graph = VisibilityGraph(nodes=nodes, obstacles=active)

        for i in range(len(nodes)):
            for j in range(i + 1, len(nodes)):
                if self.admits(nodes[i], nodes[j], active):
                    graph.add_edge(i, j, distance(nodes[i].position, nodes[j].position))

        logger.debug(
            "Visibility graph built",
            nodes=len(nodes),
            edges=graph.edge_count,
            excluded=sum(idx is not None for idx in (start_idx, end_idx)),
        )
        return graph

    def admits(self, a: GraphNode, b: GraphNode, obstacles: Sequence[Bounds]) -> bool:
        """Decide whether an edge joins two nodes.

        Args:
            a: Node with the lower index
            b: Node with the higher index
            obstacles: Active obstacles

        Returns:
            True for forced egress links or mutually visible nodes
        """
        if (a.kind, b.kind) in FORCED_LINKS:
            return True
        return not segment_intersects_any(
            a.position, b.position, obstacles, self.visibility_margin, self.epsilon
        )
