"""Arrow assembly.

Chooses a routing strategy for an arrow, shortens the line so it does not run
into its heads, and emits the renderable components in order: start head, end
head, line, and optionally the distance label.

Strategy selection:
- PATHFINDING: avoidance is on, the direct segment hits an obstacle and the
  routing mode is 'pathfinding' (multi-waypoint route, polyline or smooth)
- SINGLE_CURVE: the line style is curved, or avoidance is on in 'simple' mode
  and the direct segment hits an obstacle (one bent cubic)
- STRAIGHT: everything else, including a failed path search

Geometry is synchronous and pure; only the label step awaits the text shaper.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

import structlog

from arrowroute.config import ArrowConfig, LabelFontConfig, LineStyle, RoutingMode
from arrowroute.core.curves import (
    ControlPair,
    bezier_end_angle,
    calculate_curved_path,
    curve_length,
    fit_smooth_curves,
    polyline_length,
)
from arrowroute.core.geometry import direction_angle, polar_offset, segment_intersects_box
from arrowroute.core.heads import generate_arrow_head, head_clearance, is_filled_head
from arrowroute.core.label import LabelOk, LabelResult, LabelSkipped, TextShaper, generate_label
from arrowroute.core.router import ObstacleRouter
from arrowroute.domain import (
    ArrowComponent,
    ArrowHeadStyle,
    Bounds,
    Command,
    ComponentKind,
    CurveTo,
    LineTo,
    MoveTo,
    PathData,
    Point,
)

logger = structlog.get_logger(__name__)


class RouteStrategy(str, Enum):
    """Geometry used for an arrow line."""

    STRAIGHT = "straight"
    SINGLE_CURVE = "single_curve"
    PATHFINDING = "pathfinding"


@dataclass
class ArrowGeometry:
    """Routed geometry of one arrow, before head shortening.

    Attributes:
        strategy: Strategy that produced the geometry
        points: Route points; first is the arrow start, last is the arrow end
        controls: One control pair per segment for curves, empty for polylines
        start_angle: Direction of travel leaving the start (radians)
        end_angle: Direction of travel arriving at the end (radians)
        fell_back: True when pathfinding found no route
    """

    strategy: RouteStrategy
    points: list[Point]
    controls: list[ControlPair] = field(default_factory=list)
    start_angle: float = 0.0
    end_angle: float = 0.0
    fell_back: bool = False

    @property
    def is_curved(self) -> bool:
        return bool(self.controls)

    @property
    def start_head_angle(self) -> float:
        """Head angle at the start; points back towards the start."""
        return self.start_angle + math.pi

    @property
    def end_head_angle(self) -> float:
        return self.end_angle

    def length(self) -> float:
        """Approximate length of the routed line."""
        if self.controls:
            return curve_length(self.points, self.controls)
        return polyline_length(self.points)


class ArrowAssembler:
    """Builds arrow components from endpoints, obstacles and configuration.

    Example:
        assembler = ArrowAssembler(ArrowConfig())
        components = assembler.assemble(Point(0, 0), Point(100, 0))
    """

    # Box margin used when deciding whether the direct segment conflicts
    CONFLICT_MARGIN: ClassVar[float] = 10.0

    # Minimum curvature when a single curve has to bend around obstacles
    MIN_AVOIDANCE_CURVATURE: ClassVar[float] = 30.0

    def __init__(self, config: ArrowConfig) -> None:
        """Initialize the assembler.

        Args:
            config: Head, label and routing configuration
        """
        self.config = config

    def has_conflict(self, start: Point, end: Point, obstacles: Sequence[Bounds]) -> bool:
        """Check if avoidance is on and the direct segment hits an obstacle."""
        if not self.config.route.avoid_obstacles or not obstacles:
            return False
        return any(
            segment_intersects_box(
                start, end, obs, self.CONFLICT_MARGIN, self.config.route.intersection_epsilon
            )
            for obs in obstacles
        )

    def compute_geometry(
        self, start: Point, end: Point, obstacles: Sequence[Bounds] = ()
    ) -> ArrowGeometry:
        """Route the arrow and derive its end tangents.

        Args:
            start: Arrow start
            end: Arrow end
            obstacles: Scene obstacles

        Returns:
            ArrowGeometry for the chosen strategy
        """
        route = self.config.route
        conflict = self.has_conflict(start, end, obstacles)
        fell_back = False

        if conflict and route.routing_mode == RoutingMode.PATHFINDING:
            router = ObstacleRouter(route.margin, epsilon=route.intersection_epsilon)
            result = router.route(start, end, obstacles)
            fell_back = result.fell_back
            if len(result.points) > 2:
                return self._multi_waypoint(result.points)

        if route.line_style == LineStyle.CURVED or (
            conflict and route.routing_mode == RoutingMode.SIMPLE
        ):
            curvature = (
                max(route.curvature, self.MIN_AVOIDANCE_CURVATURE) if conflict else route.curvature
            )
            pair = calculate_curved_path(
                start, end, curvature, obstacles, route.avoid_obstacles
            )
            logger.debug("Single curve", curvature=curvature, conflict=conflict)
            return ArrowGeometry(
                strategy=RouteStrategy.SINGLE_CURVE,
                points=[start, end],
                controls=[pair],
                start_angle=bezier_end_angle(start, pair.control1, pair.control2, end, True),
                end_angle=bezier_end_angle(start, pair.control1, pair.control2, end, False),
                fell_back=fell_back,
            )

        angle = direction_angle(start, end)
        return ArrowGeometry(
            strategy=RouteStrategy.STRAIGHT,
            points=[start, end],
            start_angle=angle,
            end_angle=angle,
            fell_back=fell_back,
        )

    def _multi_waypoint(self, points: list[Point]) -> ArrowGeometry:
        route = self.config.route
        if route.line_style == LineStyle.CURVED:
            controls = fit_smooth_curves(points, route.smoothness)
            first, last = controls[0], controls[-1]
            start_angle = bezier_end_angle(
                points[0], first.control1, first.control2, points[1], True
            )
            end_angle = bezier_end_angle(
                points[-2], last.control1, last.control2, points[-1], False
            )
        else:
            controls = []
            start_angle = direction_angle(points[0], points[1])
            end_angle = direction_angle(points[-2], points[-1])

        logger.debug("Multi-waypoint route", points=len(points), curved=bool(controls))
        return ArrowGeometry(
            strategy=RouteStrategy.PATHFINDING,
            points=points,
            controls=controls,
            start_angle=start_angle,
            end_angle=end_angle,
        )

    def line_commands(self, geometry: ArrowGeometry) -> list[Command]:
        """Path commands for the arrow line with head clearance applied.

        Each end is pulled inward along its tangent by the clearance of the
        head drawn there. Interior points and control points are unchanged.
        """
        size = self.config.head_size
        start_clear = head_clearance(self.config.start_head, size)
        end_clear = head_clearance(self.config.end_head, size)

        line_start = geometry.points[0]
        if start_clear > 0:
            line_start = polar_offset(line_start, geometry.start_angle, start_clear)

        line_end = geometry.points[-1]
        if end_clear > 0:
            line_end = polar_offset(line_end, geometry.end_angle, -end_clear)

        commands: list[Command] = [MoveTo(line_start)]
        if geometry.controls:
            last = len(geometry.controls) - 1
            for i, pair in enumerate(geometry.controls):
                target = line_end if i == last else geometry.points[i + 1]
                commands.append(CurveTo(pair.control1, pair.control2, target))
        else:
            commands.extend(LineTo(p) for p in geometry.points[1:-1])
            commands.append(LineTo(line_end))
        return commands

    def head_component(
        self,
        tip: Point,
        angle: float,
        style: ArrowHeadStyle,
        color: str,
        stroke_width: float,
    ) -> ArrowComponent | None:
        """Build the component for one arrow head, or None for no head."""
        commands = generate_arrow_head(tip, angle, style, self.config.head_size)
        if not commands:
            return None

        path_data = PathData(
            subpaths=[commands],
            fill_color=color if is_filled_head(style) else "none",
            stroke_color=color,
            stroke_width=stroke_width,
        )
        return ArrowComponent(kind=ComponentKind.HEAD, path_data=path_data)

    def geometry_components(
        self,
        geometry: ArrowGeometry,
        stroke_color: str = "#000000",
        stroke_width: float = 2.0,
    ) -> list[ArrowComponent]:
        """Heads and line for already-computed geometry."""
        components: list[ArrowComponent] = []

        start_head = self.head_component(
            geometry.points[0],
            geometry.start_head_angle,
            self.config.start_head,
            stroke_color,
            stroke_width,
        )
        if start_head:
            components.append(start_head)

        end_head = self.head_component(
            geometry.points[-1],
            geometry.end_head_angle,
            self.config.end_head,
            stroke_color,
            stroke_width,
        )
        if end_head:
            components.append(end_head)

        line = PathData(
            subpaths=[self.line_commands(geometry)],
            fill_color="none",
            stroke_color=stroke_color,
            stroke_width=stroke_width,
        )
        components.append(ArrowComponent(kind=ComponentKind.LINE, path_data=line))
        return components

    def assemble(
        self,
        start: Point,
        end: Point,
        obstacles: Sequence[Bounds] = (),
        stroke_color: str = "#000000",
        stroke_width: float = 2.0,
    ) -> list[ArrowComponent]:
        """Synchronously build heads and line for one arrow.

        Args:
            start: Arrow start
            end: Arrow end
            obstacles: Scene obstacles
            stroke_color: Color of line and heads
            stroke_width: Width of line and head outlines

        Returns:
            Start head (if any), end head (if any), then the line
        """
        geometry = self.compute_geometry(start, end, obstacles)
        return self.geometry_components(geometry, stroke_color, stroke_width)

    async def label(
        self,
        start: Point,
        end: Point,
        shaper: TextShaper | None,
        stroke_color: str,
        stroke_width: float,
        fill_color: str,
        font: LabelFontConfig | None = None,
    ) -> LabelResult:
        """Generate the distance label, honoring the configuration."""
        if not self.config.show_label:
            return LabelSkipped()
        if shaper is None:
            return LabelSkipped(reason="no text shaper")
        return await generate_label(
            start,
            end,
            shaper,
            font_size=self.config.label_font_size,
            stroke_width=stroke_width,
            stroke_color=stroke_color,
            fill_color=fill_color,
            precision=self.config.label_precision,
            font=font,
        )

    async def generate_components(
        self,
        start: Point,
        end: Point,
        obstacles: Sequence[Bounds] = (),
        stroke_color: str = "#000000",
        stroke_width: float = 2.0,
        fill_color: str = "none",
        shaper: TextShaper | None = None,
        font: LabelFontConfig | None = None,
    ) -> list[ArrowComponent]:
        """Build all arrow components, including the label when enabled.

        A failed label only omits the label component.

        Returns:
            Start head (if any), end head (if any), line, label (if any)
        """
        components = self.assemble(start, end, obstacles, stroke_color, stroke_width)
        result = await self.label(
            start, end, shaper, stroke_color, stroke_width, fill_color, font
        )
        if isinstance(result, LabelOk):
            components.append(result.component)
        return components


def assemble_arrow(
    start: Point,
    end: Point,
    config: ArrowConfig,
    obstacles: Sequence[Bounds] = (),
    stroke_color: str = "#000000",
    stroke_width: float = 2.0,
) -> list[ArrowComponent]:
    """Heads and line for one arrow, without a label."""
    return ArrowAssembler(config).assemble(start, end, obstacles, stroke_color, stroke_width)


def generate_arrow_line(
    start: Point,
    end: Point,
    config: ArrowConfig,
    obstacles: Sequence[Bounds] = (),
) -> list[Command]:
    """Path commands for an arrow's line, shortened for its heads."""
    assembler = ArrowAssembler(config)
    return assembler.line_commands(assembler.compute_geometry(start, end, obstacles))


async def generate_arrow_components(
    start: Point,
    end: Point,
    config: ArrowConfig,
    stroke_color: str,
    stroke_width: float,
    fill_color: str = "none",
    obstacles: Sequence[Bounds] = (),
    shaper: TextShaper | None = None,
    font: LabelFontConfig | None = None,
) -> list[ArrowComponent]:
    """Generate arrow components as separate PathData objects.

    Returns:
        Start head (if any), end head (if any), line, label (if enabled and
        generated)
    """
    return await ArrowAssembler(config).generate_components(
        start, end, obstacles, stroke_color, stroke_width, fill_color, shaper, font
    )
