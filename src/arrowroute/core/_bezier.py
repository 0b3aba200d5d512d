"""Internal cubic Bezier helpers.

This is an internal module containing the cubic Bezier flattening routine used
for measuring curves. Not intended for public use.
"""

import math

from arrowroute.domain import Point


def flatten_cubic(points: list[Point], tolerance: float, depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve
        depth: Current recursion depth

    Returns:
        List of points approximating the curve
    """
    p0, p1, p2, p3 = points

    # Calculate curve midpoint (at t=0.5)
    curve_mid_x = 0.125 * (p0.x + 3 * p1.x + 3 * p2.x + p3.x)
    curve_mid_y = 0.125 * (p0.y + 3 * p1.y + 3 * p2.y + p3.y)

    # Approximate with line segment midpoint
    line_mid_x = (p0.x + p3.x) / 2
    line_mid_y = (p0.y + p3.y) / 2

    # Check flatness
    deviation = math.hypot(curve_mid_x - line_mid_x, curve_mid_y - line_mid_y)

    if deviation <= tolerance or depth >= 16:
        return [p0, p3]

    # First level
    q1 = p0.lerp(p1, 0.5)
    q2 = p1.lerp(p2, 0.5)
    q3 = p2.lerp(p3, 0.5)

    # Second level
    r1 = q1.lerp(q2, 0.5)
    r2 = q2.lerp(q3, 0.5)

    # Third level (midpoint)
    mid = r1.lerp(r2, 0.5)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right
