"""Curve generation for arrow lines.

This module provides:
- Smooth C1-continuous cubic fitting through a routed polyline
- Single-curve obstacle avoidance (one bent cubic between the endpoints)
- End tangents of cubic segments for head orientation
- Flattening and length measurement of cubic segments
"""

from collections.abc import Sequence
from typing import NamedTuple

from arrowroute.core._bezier import flatten_cubic
from arrowroute.core.geometry import (
    LENGTH_EPSILON,
    direction_angle,
    distance,
    point_in_box,
    segment_intersects_box,
)
from arrowroute.domain import Bounds, Point

# Side-probe offset floor and collision margin for single-curve avoidance
MIN_PROBE_OFFSET = 50.0
PROBE_MARGIN = 20.0
EXTRA_CLEARANCE = 30.0


class ControlPair(NamedTuple):
    """Control points of one cubic segment."""

    control1: Point
    control2: Point


def fit_smooth_curves(points: Sequence[Point], smoothness: float = 0.3) -> list[ControlPair]:
    """Convert a polyline into C1-continuous cubic Bezier segments.

    The tangent at point i is ``(points[i+1] - points[i-1]) * smoothness``,
    falling back to the point itself where a neighbour is missing. Segment i
    leaves ``points[i]`` along its tangent and enters ``points[i+1]`` against
    the next tangent. A two-point polyline yields a single straight "curve"
    with controls at 25% and 75%.

    Args:
        points: Polyline of at least two points
        smoothness: Tangent scale in [0, 1]

    Returns:
        One control pair per polyline segment (empty for fewer than 2 points)
    """
    n = len(points)
    if n < 2:
        return []

    if n == 2:
        return [ControlPair(points[0].lerp(points[1], 0.25), points[0].lerp(points[1], 0.75))]

    def tangent(i: int) -> tuple[float, float]:
        before = points[i - 1] if i > 0 else points[i]
        after = points[i + 1] if i < n - 1 else points[i]
        return ((after.x - before.x) * smoothness, (after.y - before.y) * smoothness)

    tangents = [tangent(i) for i in range(n)]
    pairs: list[ControlPair] = []
    for i in range(n - 1):
        tx1, ty1 = tangents[i]
        tx2, ty2 = tangents[i + 1]
        pairs.append(
            ControlPair(
                points[i].offset(tx1, ty1),
                points[i + 1].offset(-tx2, -ty2),
            )
        )
    return pairs


def calculate_curved_path(
    start: Point,
    end: Point,
    curvature: float,
    obstacles: Sequence[Bounds] = (),
    avoid_obstacles: bool = False,
) -> ControlPair:
    """Control points for a single curve between two endpoints.

    Without conflicting obstacles the curve bows along the perpendicular
    ``(-dy, dx)`` by ``curvature / 100 * length * 0.3``. When avoidance is on and
    the straight segment hits obstacles, both sides are probed at the 25%
    control point; the side with fewer probe collisions wins (ties keep the
    positive side), then the offset grows until it clears every conflicting
    obstacle's half-extent plus a fixed clearance.

    Args:
        start: Curve start
        end: Curve end
        curvature: Curvature percentage (0-100)
        obstacles: Scene obstacles
        avoid_obstacles: Whether to bend around conflicting obstacles

    Returns:
        Control pair for the cubic from start to end
    """
    mid = start.lerp(end, 0.5)
    dx = end.x - start.x
    dy = end.y - start.y
    length = distance(start, end)

    if length < LENGTH_EPSILON:
        perp_x, perp_y = 0.0, 0.0
    else:
        perp_x, perp_y = -dy / length, dx / length

    base_offset = (curvature / 100) * length * 0.3
    offset = base_offset

    conflicting = (
        [obs for obs in obstacles if segment_intersects_box(start, end, obs)]
        if avoid_obstacles
        else []
    )

    if conflicting:
        probe = max(base_offset, MIN_PROBE_OFFSET)
        quarter = start.lerp(end, 0.25)
        positive_probe = quarter.offset(perp_x * probe, perp_y * probe)
        negative_probe = quarter.offset(-perp_x * probe, -perp_y * probe)

        positive_hits = sum(point_in_box(positive_probe, obs, PROBE_MARGIN) for obs in conflicting)
        negative_hits = sum(point_in_box(negative_probe, obs, PROBE_MARGIN) for obs in conflicting)
        side = -1 if negative_hits < positive_hits else 1

        for obs in conflicting:
            center = obs.center
            projected = (center.x - mid.x) * perp_x + (center.y - mid.y) * perp_y
            clearance = max(obs.width, obs.height) / 2 + EXTRA_CLEARANCE
            required = abs(projected) + clearance
            if required > abs(offset):
                offset = required * side

    return ControlPair(
        start.offset(dx * 0.25 + perp_x * offset, dy * 0.25 + perp_y * offset),
        start.offset(dx * 0.75 + perp_x * offset, dy * 0.75 + perp_y * offset),
    )


def bezier_end_angle(
    p0: Point, control1: Point, control2: Point, p3: Point, at_start: bool
) -> float:
    """Tangent angle of a cubic at one of its ends.

    At t=0 the tangent runs p0 -> control1, at t=1 control2 -> p3. A control
    point coinciding with its anchor falls back to the next point along.

    Args:
        p0: Curve start
        control1: First control point
        control2: Second control point
        p3: Curve end
        at_start: True for the start tangent, False for the end tangent

    Returns:
        Angle in radians in the direction of travel
    """
    if at_start:
        for nxt in (control1, control2, p3):
            if distance(p0, nxt) >= LENGTH_EPSILON:
                return direction_angle(p0, nxt)
        return 0.0

    for prev in (control2, control1, p0):
        if distance(prev, p3) >= LENGTH_EPSILON:
            return direction_angle(prev, p3)
    return 0.0


def bezier_flatten(points: list[Point], tolerance: float = 0.5) -> list[Point]:
    """Convert a line or cubic Bezier segment to line segments.

    Args:
        points: Control points (2 for a line, 4 for a cubic)
        tolerance: Maximum distance from the true curve

    Returns:
        Points approximating the segment

    Raises:
        ValueError: If points list is not of length 2 or 4
    """
    if len(points) == 2:
        return points
    elif len(points) == 4:
        return flatten_cubic(points, tolerance)
    else:
        raise ValueError(f"Expected 2 or 4 points for a path segment, got {len(points)}")


def polyline_length(points: Sequence[Point]) -> float:
    """Total length of a polyline."""
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def curve_length(points: Sequence[Point], controls: Sequence[ControlPair]) -> float:
    """Approximate length of consecutive cubic segments through points."""
    total = 0.0
    for i, pair in enumerate(controls):
        flat = bezier_flatten([points[i], pair.control1, pair.control2, points[i + 1]])
        total += polyline_length(flat)
    return total
