"""Greedy path simplification.

The router's node path is obstacle-clear but usually over-segmented. Starting
from the first point, the simplifier jumps to the farthest later point that is
still directly visible and repeats until it reaches the end.
"""

from collections.abc import Sequence

from arrowroute.core.geometry import EPSILON, segment_intersects_any
from arrowroute.domain import Bounds, Point


def simplify_path(
    path: Sequence[Point],
    obstacles: Sequence[Bounds],
    margin: float,
    clearance_factor: float = 0.3,
    epsilon: float = EPSILON,
) -> list[Point]:
    """Remove redundant waypoints while preserving obstacle clearance.

    Never increases the point count; the first and last points are kept
    exactly.

    Args:
        path: Routed points from start to end
        obstacles: Active obstacles (excluded start/end containers omitted)
        margin: Routing margin
        clearance_factor: Fraction of the margin used for visibility tests
        epsilon: Determinant threshold for parallel segments

    Returns:
        Simplified points from start to end

    Examples:
        >>> simplify_path([Point(0, 0), Point(5, 0), Point(10, 0)], [], 15.0)
        [Point(x=0, y=0), Point(x=10, y=0)]
    """
    if len(path) <= 2:
        return list(path)

    clearance = margin * clearance_factor
    last = len(path) - 1
    simplified = [path[0]]
    current = 0

    while current < last:
        farthest = current + 1
        for candidate in range(last, current + 1, -1):
            if not segment_intersects_any(
                path[current], path[candidate], obstacles, clearance, epsilon
            ):
                farthest = candidate
                break

        simplified.append(path[farthest])
        current = farthest

    return simplified
