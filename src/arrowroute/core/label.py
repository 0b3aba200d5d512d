"""Distance label generation.

The label is the only asynchronous step of arrow assembly: the arrow length is
formatted as text, converted to outline commands by an external text shaper,
centred on the segment midpoint, pushed off the line and rotated to follow it.
Shaper failures never propagate; they produce a LabelErr result so the rest of
the arrow renders unchanged.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import structlog

from arrowroute.config import LabelFontConfig
from arrowroute.core.geometry import distance
from arrowroute.domain import (
    ArrowComponent,
    ClosePath,
    Command,
    ComponentKind,
    CurveTo,
    LineTo,
    MoveTo,
    PathData,
    Point,
)

logger = structlog.get_logger(__name__)

# Gap between the line's stroke and the label glyphs
LABEL_PADDING = 4.0

# Lines within this many degrees of horizontal keep upright text
ROTATION_THRESHOLD_DEG = 5.0


class TextShaper(Protocol):
    """Converts text to outline path commands."""

    async def text_to_path_commands(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float,
        family: str,
        weight: str = "normal",
        style: str = "normal",
    ) -> list[Command]: ...


@dataclass(frozen=True)
class LabelOk:
    """Label generated successfully."""

    component: ArrowComponent


@dataclass(frozen=True)
class LabelErr:
    """Label generation failed; the arrow renders without it."""

    reason: str


@dataclass(frozen=True)
class LabelSkipped:
    """No label was produced."""

    reason: str = "disabled"


LabelResult = LabelOk | LabelErr | LabelSkipped


def format_distance(start: Point, end: Point, precision: int) -> str:
    """Format the start-end distance with a fixed number of decimals."""
    return f"{distance(start, end):.{precision}f}"


def should_rotate(angle_deg: float) -> bool:
    """Check if label text should follow the line angle.

    Near-horizontal lines (within the threshold of 0 or +-180 degrees) keep
    upright text.
    """
    return (
        abs(angle_deg) > ROTATION_THRESHOLD_DEG
        and abs(angle_deg) < 180 - ROTATION_THRESHOLD_DEG
        and abs(angle_deg - 180) > ROTATION_THRESHOLD_DEG
        and abs(angle_deg + 180) > ROTATION_THRESHOLD_DEG
    )


def transform_commands(
    commands: list[Command], transform: Callable[[Point], Point]
) -> list[Command]:
    """Apply a point transform to every coordinate of a command list."""
    result: list[Command] = []
    for cmd in commands:
        if isinstance(cmd, MoveTo):
            result.append(MoveTo(transform(cmd.position)))
        elif isinstance(cmd, LineTo):
            result.append(LineTo(transform(cmd.position)))
        elif isinstance(cmd, CurveTo):
            result.append(
                CurveTo(
                    transform(cmd.control1),
                    transform(cmd.control2),
                    transform(cmd.position),
                )
            )
        else:
            result.append(cmd)
    return result


def _anchor_bounds(commands: list[Command]) -> tuple[float, float, float, float] | None:
    positions = [cmd.position for cmd in commands if not isinstance(cmd, ClosePath)]
    if not positions:
        return None
    xs = [p.x for p in positions]
    ys = [p.y for p in positions]
    return (min(xs), min(ys), max(xs), max(ys))


def place_label(
    commands: list[Command],
    start: Point,
    end: Point,
    stroke_width: float,
) -> list[Command] | None:
    """Position shaped label glyphs next to the segment start-end.

    The glyphs are centred on the midpoint, moved perpendicular to the line
    by half the stroke width plus half the text height plus padding, then
    rotated about the midpoint unless the line is near horizontal.

    Args:
        commands: Shaped glyph outline at the origin
        start: Segment start
        end: Segment end
        stroke_width: Width of the arrow line

    Returns:
        Placed commands, or None when the outline has no positioned commands
    """
    bounds = _anchor_bounds(commands)
    if bounds is None:
        return None

    min_x, min_y, max_x, max_y = bounds
    text_width = max_x - min_x
    text_height = max_y - min_y

    angle = math.atan2(end.y - start.y, end.x - start.x)
    mid = start.lerp(end, 0.5)

    perpendicular = stroke_width / 2 + text_height / 2 + LABEL_PADDING
    perp_x = -math.sin(angle) * perpendicular
    perp_y = math.cos(angle) * perpendicular

    offset_x = mid.x - text_width / 2 - min_x + perp_x
    offset_y = mid.y + text_height / 2 - max_y - perp_y

    rotate = should_rotate(math.degrees(angle))
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    def place(p: Point) -> Point:
        x = p.x + offset_x
        y = p.y + offset_y
        if rotate:
            dx = x - mid.x
            dy = y - mid.y
            x = mid.x + dx * cos_a - dy * sin_a
            y = mid.y + dx * sin_a + dy * cos_a
        return Point(x, y)

    return transform_commands(commands, place)


async def generate_label(
    start: Point,
    end: Point,
    shaper: TextShaper,
    font_size: float,
    stroke_width: float,
    stroke_color: str,
    fill_color: str,
    precision: int = 1,
    font: LabelFontConfig | None = None,
) -> LabelResult:
    """Generate the distance label component for an arrow.

    Args:
        start: Arrow start
        end: Arrow end
        shaper: Text-to-outline collaborator
        font_size: Label font size
        stroke_width: Width of the arrow line
        stroke_color: Arrow stroke color (label fallback color)
        fill_color: Preferred label color; "none" falls back to stroke_color
        precision: Decimal places in the distance text
        font: Font family, weight and style requested from the shaper

    Returns:
        LabelOk with a fill-only component, LabelErr if shaping failed, or
        LabelSkipped if the shaper produced no outline
    """
    font = font or LabelFontConfig()
    text = format_distance(start, end, precision)

    try:
        shaped = await shaper.text_to_path_commands(
            text, 0.0, 0.0, font_size, font.family, font.weight, font.style
        )
    except Exception as e:
        logger.warning(
            "Failed to generate label path data",
            text=text,
            error=str(e),
            error_type=type(e).__name__,
        )
        return LabelErr(reason=str(e))

    if not shaped:
        return LabelSkipped(reason="empty outline")

    placed = place_label(shaped, start, end, stroke_width)
    if not placed:
        return LabelSkipped(reason="empty outline")

    label_color = fill_color if fill_color and fill_color != "none" else stroke_color
    path_data = PathData(
        subpaths=[placed],
        fill_color=label_color,
        stroke_color="none",
        stroke_width=0.0,
    )
    return LabelOk(component=ArrowComponent(kind=ComponentKind.LABEL, path_data=path_data))
