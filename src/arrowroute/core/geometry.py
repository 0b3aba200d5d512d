"""Geometric primitives for obstacle-avoidance queries.

This module provides the mathematical utilities every routing stage is
built on:
- Segment/segment intersection (parametric form)
- Segment/box intersection against a margin-expanded rectangle
- Point-in-box testing
- Distance and angle helpers guarded against zero-length input

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence

from arrowroute.domain import Bounds, Point

EPSILON = 1e-4
LENGTH_EPSILON = 1e-10


def segments_intersect(
    p1: Point, p2: Point, p3: Point, p4: Point, epsilon: float = EPSILON
) -> bool:
    """Determine if segment p1-p2 crosses segment p3-p4.

    Solves the parametric equations using the determinant
    ``d = (p2 - p1) x (p4 - p3)``. Parallel or degenerate segments
    (``|d| < epsilon``) never intersect.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2
        epsilon: Determinant threshold for parallel segments

    Returns:
        True if the segments share a point, False otherwise

    Examples:
        >>> segments_intersect(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        True
        >>> segments_intersect(Point(0, 0), Point(2, 0), Point(0, 1), Point(2, 1))
        False
    """
    d = (p2.x - p1.x) * (p4.y - p3.y) - (p2.y - p1.y) * (p4.x - p3.x)
    if abs(d) < epsilon:
        return False

    t = ((p3.x - p1.x) * (p4.y - p3.y) - (p3.y - p1.y) * (p4.x - p3.x)) / d
    u = -((p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x)) / d

    return 0 <= t <= 1 and 0 <= u <= 1


def point_in_box(point: Point, box: Bounds, margin: float = 0.0) -> bool:
    """Inclusive range test against the margin-expanded box.

    Args:
        point: The point to test
        box: The obstacle bounds
        margin: Outward expansion applied to every side

    Returns:
        True if point lies inside or on the expanded box
    """
    return (
        box.min_x - margin <= point.x <= box.max_x + margin
        and box.min_y - margin <= point.y <= box.max_y + margin
    )


def segment_intersects_box(
    p1: Point, p2: Point, box: Bounds, margin: float = 10.0, epsilon: float = EPSILON
) -> bool:
    """Determine if segment p1-p2 touches the margin-expanded box.

    True when either endpoint lies inside the expanded box, or the segment
    crosses any of its four edges.

    Args:
        p1: Segment start
        p2: Segment end
        box: The obstacle bounds
        margin: Outward expansion applied to every side
        epsilon: Determinant threshold for parallel segments

    Returns:
        True if the segment intersects the expanded box
    """
    if point_in_box(p1, box, margin) or point_in_box(p2, box, margin):
        return True

    grown = box.expanded(margin)
    corners = (
        Point(grown.min_x, grown.min_y),
        Point(grown.max_x, grown.min_y),
        Point(grown.max_x, grown.max_y),
        Point(grown.min_x, grown.max_y),
    )
    for i in range(4):
        if segments_intersect(p1, p2, corners[i], corners[(i + 1) % 4], epsilon):
            return True

    return False


def segment_intersects_any(
    p1: Point,
    p2: Point,
    obstacles: Sequence[Bounds],
    margin: float = 5.0,
    epsilon: float = EPSILON,
) -> bool:
    """Determine if segment p1-p2 touches any of the obstacles."""
    return any(segment_intersects_box(p1, p2, obs, margin, epsilon) for obs in obstacles)


def point_in_any(point: Point, obstacles: Sequence[Bounds], margin: float = 0.0) -> bool:
    """Determine if point lies inside any of the obstacles."""
    return any(point_in_box(point, obs, margin) for obs in obstacles)


def find_containing_obstacle(
    point: Point, obstacles: Sequence[Bounds], margin: float = 0.0
) -> int | None:
    """Find the first obstacle containing a point.

    Args:
        point: The point to locate
        obstacles: Obstacles in caller order
        margin: Outward expansion applied to every obstacle

    Returns:
        Index of the first containing obstacle, or None
    """
    for idx, obs in enumerate(obstacles):
        if point_in_box(point, obs, margin):
            return idx
    return None


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def direction_angle(origin: Point, target: Point) -> float:
    """Angle in radians of the vector origin -> target.

    Returns 0.0 for coincident points instead of an arbitrary direction.
    """
    dx = target.x - origin.x
    dy = target.y - origin.y
    if math.hypot(dx, dy) < LENGTH_EPSILON:
        return 0.0
    return math.atan2(dy, dx)


def polar_offset(origin: Point, angle: float, length: float) -> Point:
    """Point at the given distance from origin in the direction of angle."""
    return Point(origin.x + math.cos(angle) * length, origin.y + math.sin(angle) * length)
