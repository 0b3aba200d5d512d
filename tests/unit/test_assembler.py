"""Unit tests for arrow assembly."""

import asyncio
import math
from unittest.mock import patch

import pytest

from arrowroute.config import ArrowConfig, LineStyle, RouteConfig, RoutingMode
from arrowroute.core.assembler import (
    ArrowAssembler,
    RouteStrategy,
    assemble_arrow,
    generate_arrow_components,
    generate_arrow_line,
)
from arrowroute.domain import ArrowHeadStyle, Bounds, ComponentKind, CurveTo, LineTo, MoveTo, Point

BLOCKER = Bounds(40, -10, 60, 10)


def make_config(**route) -> ArrowConfig:
    return ArrowConfig(route=RouteConfig(**route))


class TestStrategySelection:
    """Tests for compute_geometry strategy choice."""

    def test_straight_by_default(self):
        """Test the default config draws a straight line."""
        geometry = ArrowAssembler(ArrowConfig()).compute_geometry(Point(0, 0), Point(100, 0))
        assert geometry.strategy == RouteStrategy.STRAIGHT
        assert geometry.points == [Point(0, 0), Point(100, 0)]
        assert not geometry.is_curved

    def test_obstacles_ignored_without_avoidance(self):
        """Test a crossing obstacle has no effect when avoidance is off."""
        assembler = ArrowAssembler(ArrowConfig())
        assert not assembler.has_conflict(Point(0, 0), Point(100, 0), [BLOCKER])
        geometry = assembler.compute_geometry(Point(0, 0), Point(100, 0), [BLOCKER])
        assert geometry.strategy == RouteStrategy.STRAIGHT

    def test_curved_style(self):
        """Test the curved style without conflict draws the plain bow."""
        assembler = ArrowAssembler(make_config(line_style=LineStyle.CURVED))
        geometry = assembler.compute_geometry(Point(0, 0), Point(100, 0))

        assert geometry.strategy == RouteStrategy.SINGLE_CURVE
        assert geometry.controls[0].control1 == Point(25, 15)
        assert geometry.controls[0].control2 == Point(75, 15)

    def test_simple_avoidance(self):
        """Test simple mode bends one curve around the obstacle."""
        assembler = ArrowAssembler(make_config(avoid_obstacles=True))
        geometry = assembler.compute_geometry(Point(0, 0), Point(100, 0), [BLOCKER])

        assert geometry.strategy == RouteStrategy.SINGLE_CURVE
        assert geometry.controls[0].control1 == Point(25, 40)
        assert geometry.controls[0].control2 == Point(75, 40)
        assert geometry.start_angle == pytest.approx(math.atan2(40, 25))
        assert geometry.end_angle == pytest.approx(math.atan2(-40, 25))

    def test_simple_avoidance_minimum_curvature(self):
        """Test a conflicting curve uses at least the minimum curvature."""
        far = Bounds(40, 300, 60, 320)
        assembler = ArrowAssembler(make_config(avoid_obstacles=True, curvature=0))
        # Conflict comes from BLOCKER; the far box only adds to the list
        geometry = assembler.compute_geometry(Point(0, 0), Point(100, 0), [BLOCKER, far])
        assert geometry.controls[0].control1.y != 0

    def test_pathfinding_polyline(self):
        """Test pathfinding mode routes through a waypoint."""
        assembler = ArrowAssembler(
            make_config(avoid_obstacles=True, routing_mode=RoutingMode.PATHFINDING)
        )
        geometry = assembler.compute_geometry(Point(0, 0), Point(100, 0), [BLOCKER])

        assert geometry.strategy == RouteStrategy.PATHFINDING
        assert len(geometry.points) == 3
        assert abs(geometry.points[1].y) == 25
        assert not geometry.is_curved
        assert geometry.length() == pytest.approx(2 * math.hypot(50, 25))

    def test_pathfinding_curved(self):
        """Test curved pathfinding fits one cubic per segment."""
        assembler = ArrowAssembler(
            make_config(
                avoid_obstacles=True,
                routing_mode=RoutingMode.PATHFINDING,
                line_style=LineStyle.CURVED,
            )
        )
        geometry = assembler.compute_geometry(Point(0, 0), Point(100, 0), [BLOCKER])

        assert geometry.strategy == RouteStrategy.PATHFINDING
        assert len(geometry.controls) == 2
        commands = assembler.line_commands(geometry)
        assert [type(c) for c in commands] == [MoveTo, CurveTo, CurveTo]

    def test_pathfinding_fallback(self):
        """Test a failed search degrades to a straight line."""
        assembler = ArrowAssembler(
            make_config(avoid_obstacles=True, routing_mode=RoutingMode.PATHFINDING)
        )
        with patch("arrowroute.core.router.find_node_path", return_value=[]):
            geometry = assembler.compute_geometry(Point(0, 0), Point(100, 0), [BLOCKER])

        assert geometry.strategy == RouteStrategy.STRAIGHT
        assert geometry.fell_back


class TestLineCommands:
    """Tests for head clearance on the line."""

    def test_end_head_shortens_line(self):
        """Test the line stops short of a triangle head."""
        commands = generate_arrow_line(Point(0, 0), Point(100, 0), ArrowConfig())
        assert commands[0] == MoveTo(Point(0, 0))
        assert isinstance(commands[1], LineTo)
        assert commands[1].position.x == pytest.approx(91.6)
        assert commands[1].position.y == pytest.approx(0)

    def test_start_circle_shortens_line(self):
        """Test a circle start head moves the line start by its radius."""
        config = ArrowConfig.from_preset("connector")
        commands = generate_arrow_line(Point(0, 0), Point(100, 0), config)
        assert commands[0].position.x == pytest.approx(6)

    def test_flush_heads_keep_endpoints(self):
        """Test bar heads do not shorten the line."""
        config = ArrowConfig.from_preset("dimension")
        commands = generate_arrow_line(Point(0, 0), Point(100, 0), config)
        assert commands == [MoveTo(Point(0, 0)), LineTo(Point(100, 0))]

    def test_interior_points_unchanged(self):
        """Test only the ends of a polyline move."""
        config = make_config(avoid_obstacles=True, routing_mode=RoutingMode.PATHFINDING)
        commands = generate_arrow_line(Point(0, 0), Point(100, 0), config, [BLOCKER])

        assert commands[0] == MoveTo(Point(0, 0))
        assert abs(commands[1].position.y) == 25
        assert commands[2].position != Point(100, 0)


class TestComponents:
    """Tests for component assembly."""

    def test_default_components(self):
        """Test the default arrow has an end head and a line."""
        components = assemble_arrow(Point(0, 0), Point(100, 0), ArrowConfig())
        assert [c.kind for c in components] == [ComponentKind.HEAD, ComponentKind.LINE]

    def test_order_with_both_heads(self):
        """Test start head, end head, then line."""
        components = assemble_arrow(
            Point(0, 0), Point(100, 0), ArrowConfig.from_preset("connector")
        )
        assert [c.kind for c in components] == [
            ComponentKind.HEAD,
            ComponentKind.HEAD,
            ComponentKind.LINE,
        ]

    def test_no_heads(self):
        """Test an arrow without heads is only a line."""
        config = ArrowConfig(end_head=ArrowHeadStyle.NONE)
        components = assemble_arrow(Point(0, 0), Point(100, 0), config)
        assert [c.kind for c in components] == [ComponentKind.LINE]

    def test_paint(self):
        """Test filled heads use the stroke color and lines are unfilled."""
        components = assemble_arrow(
            Point(0, 0), Point(100, 0), ArrowConfig(), stroke_color="#336699", stroke_width=3
        )
        head, line = components
        assert head.path_data.fill_color == "#336699"
        assert head.path_data.stroke_color == "#336699"
        assert line.path_data.fill_color == "none"
        assert line.path_data.stroke_width == 3

    def test_open_head_unfilled(self):
        """Test open heads are stroked only."""
        config = ArrowConfig(end_head=ArrowHeadStyle.TRIANGLE_OPEN)
        head = assemble_arrow(Point(0, 0), Point(100, 0), config)[0]
        assert head.path_data.fill_color == "none"

    def test_head_tips_on_endpoints(self):
        """Test head outlines start at the arrow endpoints."""
        config = ArrowConfig(start_head=ArrowHeadStyle.TRIANGLE)
        start_head, end_head, _ = assemble_arrow(Point(0, 0), Point(100, 0), config)
        assert start_head.path_data.subpaths[0][0] == MoveTo(Point(0, 0))
        assert end_head.path_data.subpaths[0][0] == MoveTo(Point(100, 0))

    def test_start_head_points_backwards(self):
        """Test the start head wedge opens towards the line."""
        config = ArrowConfig(start_head=ArrowHeadStyle.TRIANGLE)
        start_head = assemble_arrow(Point(0, 0), Point(100, 0), config)[0]
        wing = start_head.path_data.subpaths[0][1].position
        assert wing.x > 0

    def test_curved_end_head_follows_tangent(self):
        """Test the end head on a curve uses the curve's end tangent."""
        assembler = ArrowAssembler(make_config(line_style=LineStyle.CURVED))
        geometry = assembler.compute_geometry(Point(0, 0), Point(100, 0))
        assert geometry.end_head_angle == pytest.approx(math.atan2(-15, 25))
        assert geometry.start_head_angle == pytest.approx(math.atan2(15, 25) + math.pi)


class TestLabels:
    """Tests for label handling during assembly."""

    def test_label_appended(self, box_shaper):
        """Test a dimension arrow gains a label component."""
        components = asyncio.run(
            generate_arrow_components(
                Point(0, 0),
                Point(100, 0),
                ArrowConfig.from_preset("dimension"),
                stroke_color="#000000",
                stroke_width=2,
                shaper=box_shaper,
            )
        )
        assert [c.kind for c in components] == [
            ComponentKind.HEAD,
            ComponentKind.HEAD,
            ComponentKind.LINE,
            ComponentKind.LABEL,
        ]

    def test_label_disabled(self, box_shaper):
        """Test no label when the config disables it."""
        components = asyncio.run(
            generate_arrow_components(
                Point(0, 0), Point(100, 0), ArrowConfig(), "#000000", 2, shaper=box_shaper
            )
        )
        assert ComponentKind.LABEL not in [c.kind for c in components]
        assert box_shaper.calls == []

    def test_label_failure_keeps_arrow(self, failing_shaper):
        """Test a failing shaper only drops the label."""
        components = asyncio.run(
            generate_arrow_components(
                Point(0, 0),
                Point(100, 0),
                ArrowConfig.from_preset("dimension"),
                "#000000",
                2,
                shaper=failing_shaper,
            )
        )
        assert [c.kind for c in components] == [
            ComponentKind.HEAD,
            ComponentKind.HEAD,
            ComponentKind.LINE,
        ]

    def test_no_shaper(self):
        """Test labels are skipped without a shaper."""
        assembler = ArrowAssembler(ArrowConfig.from_preset("dimension"))
        result = asyncio.run(
            assembler.label(Point(0, 0), Point(100, 0), None, "#000", 2, "none")
        )
        assert result.reason == "no text shaper"
