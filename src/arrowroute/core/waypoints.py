"""Candidate routing points around obstacles.

Every obstacle contributes up to eight go-around points: its four corners and
four edge midpoints, each pushed outward by the routing margin. Candidates
that land inside another obstacle are unusable as routing nodes and are
dropped.
"""

from collections.abc import Sequence

from arrowroute.core.geometry import point_in_any
from arrowroute.domain import Bounds, Point


def obstacle_waypoints(obstacle: Bounds, margin: float) -> list[Point]:
    """Offset corners and edge midpoints of a single obstacle.

    Order is top-left, top-right, bottom-right, bottom-left, then the top,
    bottom, left and right edge midpoints.

    Args:
        obstacle: Obstacle bounds
        margin: Outward offset

    Returns:
        Eight candidate points
    """
    cx = (obstacle.min_x + obstacle.max_x) / 2
    cy = (obstacle.min_y + obstacle.max_y) / 2
    left = obstacle.min_x - margin
    right = obstacle.max_x + margin
    top = obstacle.min_y - margin
    bottom = obstacle.max_y + margin

    return [
        Point(left, top),
        Point(right, top),
        Point(right, bottom),
        Point(left, bottom),
        Point(cx, top),
        Point(cx, bottom),
        Point(left, cy),
        Point(right, cy),
    ]


def generate_waypoints(obstacles: Sequence[Bounds], margin: float) -> list[Point]:
    """Generate go-around points for a set of obstacles.

    A candidate is discarded when it falls inside any obstacle of the set,
    tested with half the margin.

    Args:
        obstacles: Obstacles to route around
        margin: Outward offset for candidates

    Returns:
        Usable waypoints in obstacle order
    """
    waypoints: list[Point] = []
    for obs in obstacles:
        for candidate in obstacle_waypoints(obs, margin):
            if not point_in_any(candidate, obstacles, margin * 0.5):
                waypoints.append(candidate)
    return waypoints
