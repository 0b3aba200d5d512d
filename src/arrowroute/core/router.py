"""Obstacle-avoiding route computation.

Chains the routing stages for one start/end pair:

1. Direct-path check (clear segment returns immediately)
2. Visibility graph construction (waypoints, egress handling)
3. NBA* search over the graph
4. Greedy simplification of the node path

A failed search falls back to the direct segment; routing never raises for
geometric input.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from arrowroute.core.geometry import EPSILON, segment_intersects_any
from arrowroute.core.search import find_node_path
from arrowroute.core.simplify import simplify_path
from arrowroute.core.visibility import VisibilityGraphBuilder
from arrowroute.domain import Bounds, Point

logger = structlog.get_logger(__name__)


@dataclass
class RouteResult:
    """Outcome of one routing call.

    Attributes:
        points: Routed points from start to end
        obstacles: Obstacles the route was checked against (containers of
            the start or end removed)
        raw_node_count: Length of the node path before simplification
        fell_back: True when the search found no path
    """

    points: list[Point]
    obstacles: list[Bounds] = field(default_factory=list)
    raw_node_count: int = 0
    fell_back: bool = False

    @property
    def is_direct(self) -> bool:
        return len(self.points) <= 2


class ObstacleRouter:
    """Routes single arrows around rectangular obstacles.

    Example:
        router = ObstacleRouter(margin=15.0)
        result = router.route(Point(0, 0), Point(100, 0), obstacles)
        points = result.points
    """

    def __init__(
        self,
        margin: float = 15.0,
        clearance_factor: float = 0.3,
        epsilon: float = EPSILON,
    ) -> None:
        """Initialize the router.

        Args:
            margin: Clearance kept around obstacles
            clearance_factor: Fraction of the margin used for visibility tests
            epsilon: Determinant threshold for parallel segments
        """
        self.margin = margin
        self.clearance_factor = clearance_factor
        self.epsilon = epsilon
        self.builder = VisibilityGraphBuilder(margin, clearance_factor, epsilon)

    def route(self, start: Point, end: Point, obstacles: Sequence[Bounds]) -> RouteResult:
        """Compute a route from start to end.

        Args:
            start: Arrow start
            end: Arrow end
            obstacles: Scene obstacles

        Returns:
            RouteResult whose points begin at start and end at end
        """
        if not segment_intersects_any(start, end, obstacles, self.margin, self.epsilon):
            return RouteResult(points=[start, end], obstacles=list(obstacles))

        graph = self.builder.build(start, end, obstacles)
        node_path = find_node_path(graph)

        if not node_path:
            logger.warning(
                "No route found, using direct segment",
                nodes=len(graph.nodes),
                edges=graph.edge_count,
            )
            return RouteResult(points=[start, end], obstacles=graph.obstacles, fell_back=True)

        raw = [graph.position(idx) for idx in node_path]
        simplified = simplify_path(
            raw, graph.obstacles, self.margin, self.clearance_factor, self.epsilon
        )
        logger.debug(
            "Route found",
            raw_points=len(raw),
            simplified_points=len(simplified),
        )
        return RouteResult(
            points=simplified,
            obstacles=graph.obstacles,
            raw_node_count=len(raw),
        )


def find_path_around_obstacles(
    start: Point, end: Point, obstacles: Sequence[Bounds], margin: float = 15.0
) -> list[Point]:
    """Route from start to end around obstacles.

    Args:
        start: Arrow start
        end: Arrow end
        obstacles: Scene obstacles
        margin: Clearance kept around obstacles

    Returns:
        Points from start to end; ``[start, end]`` when the direct segment
        is clear or no route exists
    """
    return ObstacleRouter(margin).route(start, end, obstacles).points
