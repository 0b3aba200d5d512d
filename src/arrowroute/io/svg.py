"""SVG serialization for arrow components.

Path commands serialize to absolute SVG path data (``M``, ``L``, ``C``, ``Z``)
with numbers rounded to PATH_DECIMAL_PRECISION decimals and trailing zeros
trimmed. SvgWriter places a list of components into a standalone document
whose viewBox covers all of them.
"""

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from pathlib import Path

import structlog

from arrowroute.core.curves import bezier_flatten
from arrowroute.core.heads import generate_arrow_head
from arrowroute.domain import (
    ArrowComponent,
    ArrowHeadStyle,
    Bounds,
    ClosePath,
    Command,
    CurveTo,
    FillRule,
    LineTo,
    MoveTo,
    PathData,
    Point,
)
from arrowroute.exceptions import SvgWriteError

logger = structlog.get_logger(__name__)

PATH_DECIMAL_PRECISION = 4

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def format_number(value: float, precision: int = PATH_DECIMAL_PRECISION) -> str:
    """Format a coordinate without trailing zeros.

    >>> format_number(12.50000)
    '12.5'
    >>> format_number(-0.00001)
    '0'
    """
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def _pt(point: Point) -> str:
    return f"{format_number(point.x)} {format_number(point.y)}"


def commands_to_string(commands: Sequence[Command]) -> str:
    """Serialize commands to an SVG path ``d`` string.

    Args:
        commands: Absolute path commands

    Returns:
        Space-separated SVG path data, e.g. ``"M 0 0 L 10 0 Z"``
    """
    parts: list[str] = []
    for cmd in commands:
        if isinstance(cmd, MoveTo):
            parts.append(f"M {_pt(cmd.position)}")
        elif isinstance(cmd, LineTo):
            parts.append(f"L {_pt(cmd.position)}")
        elif isinstance(cmd, CurveTo):
            parts.append(f"C {_pt(cmd.control1)} {_pt(cmd.control2)} {_pt(cmd.position)}")
        elif isinstance(cmd, ClosePath):
            parts.append("Z")
        else:
            raise ValueError(f"Unknown path command: {cmd!r}")
    return " ".join(parts)


def path_data_to_d(path_data: PathData) -> str:
    """Serialize all subpaths of a shape into one ``d`` string."""
    return " ".join(commands_to_string(sub) for sub in path_data.subpaths if sub)


def arrow_head_path_string(
    tip: Point, angle: float, style: ArrowHeadStyle, size: float
) -> str:
    """SVG path data for an arrow head; empty for ``none``."""
    return commands_to_string(generate_arrow_head(tip, angle, style, size))


def _command_points(commands: Sequence[Command]) -> list[Point]:
    points: list[Point] = []
    current: Point | None = None
    subpath_start: Point | None = None
    for cmd in commands:
        if isinstance(cmd, MoveTo):
            current = subpath_start = cmd.position
            points.append(current)
        elif isinstance(cmd, LineTo):
            current = cmd.position
            points.append(current)
        elif isinstance(cmd, CurveTo):
            if current is None:
                points.extend([cmd.control1, cmd.control2, cmd.position])
            else:
                flat = bezier_flatten([current, cmd.control1, cmd.control2, cmd.position])
                points.extend(flat[1:])
            current = cmd.position
        elif isinstance(cmd, ClosePath):
            current = subpath_start
    return points


def compute_view_box(
    components: Sequence[ArrowComponent],
    obstacles: Sequence[Bounds] = (),
    padding: float = 20.0,
) -> tuple[float, float, float, float]:
    """Bounding box of components and obstacles as ``(x, y, width, height)``.

    Curves are flattened so the box follows the drawn outline rather than
    control points. Stroke widths are added as extra padding.
    """
    xs: list[float] = []
    ys: list[float] = []
    stroke = 0.0

    for component in components:
        for sub in component.path_data.subpaths:
            for p in _command_points(sub):
                xs.append(p.x)
                ys.append(p.y)
        stroke = max(stroke, component.path_data.stroke_width)

    for obs in obstacles:
        xs.extend([obs.min_x, obs.max_x])
        ys.extend([obs.min_y, obs.max_y])

    if not xs:
        return (0.0, 0.0, 2 * padding, 2 * padding)

    pad = padding + stroke / 2
    return (
        min(xs) - pad,
        min(ys) - pad,
        max(xs) - min(xs) + 2 * pad,
        max(ys) - min(ys) + 2 * pad,
    )


class SvgWriter:
    """Writes arrow components to standalone SVG documents.

    Example:
        writer = SvgWriter()
        writer.write(Path("arrows.svg"), components, obstacles, show_obstacles=True)
    """

    OBSTACLE_FILL = "#e8eef7"
    OBSTACLE_STROKE = "#9aa9bf"

    def __init__(self, padding: float = 20.0) -> None:
        """Initialize the writer.

        Args:
            padding: Space around the drawing inside the viewBox
        """
        self.padding = padding

    def _path_element(self, path_data: PathData, kind: str) -> ET.Element:
        attrs = {
            "d": path_data_to_d(path_data),
            "fill": path_data.fill_color,
            "stroke": path_data.stroke_color,
            "stroke-width": format_number(path_data.stroke_width),
            "data-kind": kind,
        }
        if path_data.fill_rule != FillRule.NONZERO:
            attrs["fill-rule"] = path_data.fill_rule.value
        if path_data.stroke_opacity != 1.0:
            attrs["stroke-opacity"] = format_number(path_data.stroke_opacity)
        if path_data.fill_opacity != 1.0:
            attrs["fill-opacity"] = format_number(path_data.fill_opacity)
        if path_data.stroke_color != "none":
            attrs["stroke-linecap"] = "round"
            attrs["stroke-linejoin"] = "round"
        return ET.Element("path", attrs)

    def render(
        self,
        components: Sequence[ArrowComponent],
        obstacles: Sequence[Bounds] = (),
        show_obstacles: bool = False,
    ) -> str:
        """Render components into an SVG document string.

        Args:
            components: Arrow components in paint order
            obstacles: Scene obstacles
            show_obstacles: Draw obstacle rectangles beneath the arrows and
                include them in the viewBox

        Returns:
            SVG document text
        """
        drawn_obstacles = obstacles if show_obstacles else ()
        x, y, width, height = compute_view_box(components, drawn_obstacles, self.padding)

        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NAMESPACE,
                "viewBox": " ".join(format_number(v) for v in (x, y, width, height)),
                "width": format_number(width),
                "height": format_number(height),
            },
        )

        if drawn_obstacles:
            group = ET.SubElement(root, "g", {"class": "obstacles"})
            for obs in drawn_obstacles:
                ET.SubElement(
                    group,
                    "rect",
                    {
                        "x": format_number(obs.min_x),
                        "y": format_number(obs.min_y),
                        "width": format_number(obs.width),
                        "height": format_number(obs.height),
                        "fill": self.OBSTACLE_FILL,
                        "stroke": self.OBSTACLE_STROKE,
                    },
                )

        arrows = ET.SubElement(root, "g", {"class": "arrows"})
        for component in components:
            if component.path_data.is_empty():
                continue
            arrows.append(self._path_element(component.path_data, component.kind.value))

        ET.indent(root)
        return ET.tostring(root, encoding="unicode") + "\n"

    def write(
        self,
        output_path: Path,
        components: Sequence[ArrowComponent],
        obstacles: Sequence[Bounds] = (),
        show_obstacles: bool = False,
    ) -> None:
        """Render and save an SVG document.

        Raises:
            SvgWriteError: If the file cannot be written
        """
        document = self.render(components, obstacles, show_obstacles)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(document, encoding="utf-8")
        except OSError as e:
            raise SvgWriteError(str(output_path), str(e)) from e

        logger.info(
            "SVG written",
            path=str(output_path),
            components=len(components),
            size_bytes=len(document.encode("utf-8")),
        )
