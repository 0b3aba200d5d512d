"""Arrowhead glyph generation.

Compiles an ArrowHeadStyle into path commands for a given tip position and
direction, and defines the per-style fill and line-clearance policies.

Angles are in radians and point towards the tip: a head at the end of a line
travelling to the right uses angle 0; a head at the start of that line uses pi.
"""

import math

from arrowroute.core.geometry import polar_offset
from arrowroute.domain import (
    ArrowHeadStyle,
    ClosePath,
    Command,
    CurveTo,
    LineTo,
    MoveTo,
    Point,
)

# Bezier control distance for a quarter circle, as a fraction of the radius
CIRCLE_KAPPA = 0.5522847498

# Half-angle of triangle and chevron wedges
WEDGE_ANGLE = math.pi / 6

FILLED_STYLES = frozenset(
    {
        ArrowHeadStyle.TRIANGLE,
        ArrowHeadStyle.DIAMOND,
        ArrowHeadStyle.CIRCLE,
    }
)

# Styles drawn exactly at the endpoint; the line runs all the way to them
FLUSH_STYLES = frozenset(
    {
        ArrowHeadStyle.NONE,
        ArrowHeadStyle.BAR,
        ArrowHeadStyle.MEASURE,
        ArrowHeadStyle.CHEVRON,
    }
)


def is_filled_head(style: ArrowHeadStyle) -> bool:
    """Check if an arrow head style should be filled.

    Examples:
        >>> is_filled_head(ArrowHeadStyle.TRIANGLE)
        True
        >>> is_filled_head(ArrowHeadStyle.CIRCLE_OPEN)
        False
    """
    return style in FILLED_STYLES


def head_clearance(style: ArrowHeadStyle, size: float) -> float:
    """Distance the line end is pulled back so it does not overlap the head.

    Args:
        style: Head style at that end
        size: Head size

    Returns:
        0 for flush styles, size/2 for circles, 0.7 * size otherwise
    """
    if style in FLUSH_STYLES:
        return 0.0
    if style in (ArrowHeadStyle.CIRCLE, ArrowHeadStyle.CIRCLE_OPEN):
        return size / 2
    return size * 0.7


def _wedge_points(tip: Point, angle: float, size: float) -> tuple[Point, Point]:
    back = angle + math.pi
    return (
        polar_offset(tip, back + WEDGE_ANGLE, size),
        polar_offset(tip, back - WEDGE_ANGLE, size),
    )


def _triangle(tip: Point, angle: float, size: float) -> list[Command]:
    p1, p2 = _wedge_points(tip, angle, size)
    return [MoveTo(tip), LineTo(p1), LineTo(p2), ClosePath()]


def _diamond(tip: Point, angle: float, size: float) -> list[Command]:
    half = size / 2
    back = polar_offset(tip, angle + math.pi, size)
    middle = polar_offset(tip, angle + math.pi, half)
    side1 = polar_offset(middle, angle + math.pi / 2, half)
    side2 = polar_offset(middle, angle - math.pi / 2, half)
    return [MoveTo(tip), LineTo(side1), LineTo(back), LineTo(side2), ClosePath()]


def _circle(tip: Point, angle: float, size: float) -> list[Command]:
    radius = size / 2
    c = polar_offset(tip, angle + math.pi, radius)
    kr = CIRCLE_KAPPA * radius

    return [
        MoveTo(Point(c.x + radius, c.y)),
        CurveTo(
            Point(c.x + radius, c.y + kr),
            Point(c.x + kr, c.y + radius),
            Point(c.x, c.y + radius),
        ),
        CurveTo(
            Point(c.x - kr, c.y + radius),
            Point(c.x - radius, c.y + kr),
            Point(c.x - radius, c.y),
        ),
        CurveTo(
            Point(c.x - radius, c.y - kr),
            Point(c.x - kr, c.y - radius),
            Point(c.x, c.y - radius),
        ),
        CurveTo(
            Point(c.x + kr, c.y - radius),
            Point(c.x + radius, c.y - kr),
            Point(c.x + radius, c.y),
        ),
        ClosePath(),
    ]


def _bar(tip: Point, angle: float, size: float) -> list[Command]:
    half = size / 2
    return [
        MoveTo(polar_offset(tip, angle + math.pi / 2, half)),
        LineTo(polar_offset(tip, angle - math.pi / 2, half)),
    ]


def _chevron(tip: Point, angle: float, size: float) -> list[Command]:
    p1, p2 = _wedge_points(tip, angle, size)
    return [MoveTo(p1), LineTo(tip), LineTo(p2)]


def generate_arrow_head(
    tip: Point, angle: float, style: ArrowHeadStyle, size: float
) -> list[Command]:
    """Generate path commands for an arrow head.

    | Style                 | Shape                                         |
    |-----------------------|-----------------------------------------------|
    | triangle(Open)        | closed wedge, 30 degrees either side of axis  |
    | diamond(Open)         | closed rhombus centred half a size behind tip |
    | circle(Open)          | four cubic arcs, diameter = size              |
    | bar / measure         | open perpendicular segment through the tip    |
    | chevron               | open "<" / ">" through the tip                |
    | none                  | no commands                                   |

    Args:
        tip: Point the head touches
        angle: Direction pointing towards the tip, in radians
        style: Head style
        size: Head size

    Returns:
        Path commands in absolute coordinates

    Raises:
        ValueError: If style is not an ArrowHeadStyle

    Examples:
        >>> cmds = generate_arrow_head(Point(10, 10), 0.0, ArrowHeadStyle.TRIANGLE, 10)
        >>> [type(c).__name__ for c in cmds]
        ['MoveTo', 'LineTo', 'LineTo', 'ClosePath']
    """
    if style == ArrowHeadStyle.NONE:
        return []
    elif style in (ArrowHeadStyle.TRIANGLE, ArrowHeadStyle.TRIANGLE_OPEN):
        return _triangle(tip, angle, size)
    elif style in (ArrowHeadStyle.DIAMOND, ArrowHeadStyle.DIAMOND_OPEN):
        return _diamond(tip, angle, size)
    elif style in (ArrowHeadStyle.CIRCLE, ArrowHeadStyle.CIRCLE_OPEN):
        return _circle(tip, angle, size)
    elif style in (ArrowHeadStyle.BAR, ArrowHeadStyle.MEASURE):
        return _bar(tip, angle, size)
    elif style == ArrowHeadStyle.CHEVRON:
        return _chevron(tip, angle, size)
    else:
        raise ValueError(f"Unknown arrow head style: {style!r}")
