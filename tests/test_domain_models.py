"""Tests for domain models to verify they work correctly."""

import pytest

from arrowroute.domain import (
    ArrowComponent,
    ArrowHeadStyle,
    Bounds,
    ClosePath,
    ComponentKind,
    CurveTo,
    FillRule,
    GraphNode,
    LineTo,
    MoveTo,
    NodeKind,
    PathData,
    Point,
    VisibilityGraph,
    command_from_dict,
)
from arrowroute.exceptions import InvalidBoundsError


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        assert Point(100.0, 200.0).to_tuple() == (100.0, 200.0)

    def test_point_offset_and_lerp(self) -> None:
        """Test translation and interpolation."""
        p = Point(10.0, 20.0)
        assert p.offset(5, -5) == Point(15.0, 15.0)
        assert p.lerp(Point(20.0, 40.0), 0.5) == Point(15.0, 30.0)
        assert p.lerp(Point(20.0, 40.0), 0.0) == p

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(100.0, 200.0)
        assert Point.from_dict(p1.to_dict()) == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_point_hashable(self) -> None:
        """Test that equal points hash equally."""
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


class TestBounds:
    """Tests for Bounds class."""

    def test_bounds_dimensions(self) -> None:
        """Test width, height and center."""
        b = Bounds(40, -10, 60, 10)
        assert b.width == 20
        assert b.height == 20
        assert b.center == Point(50, 0)

    def test_zero_area_bounds_allowed(self) -> None:
        """Test that degenerate bounds are valid."""
        b = Bounds(5, 5, 5, 5)
        assert b.width == 0
        assert b.height == 0

    def test_inverted_bounds_rejected(self) -> None:
        """Test that min greater than max raises."""
        with pytest.raises(InvalidBoundsError, match="min must not exceed max"):
            Bounds(10, 0, 0, 10)
        with pytest.raises(InvalidBoundsError):
            Bounds(0, 10, 10, 0)

    def test_bounds_expanded(self) -> None:
        """Test growing bounds outward by a margin."""
        assert Bounds(0, 0, 10, 20).expanded(5) == Bounds(-5, -5, 15, 25)

    def test_bounds_serialization(self) -> None:
        """Test bounds serialization and deserialization."""
        b = Bounds(1, 2, 3, 4)
        assert Bounds.from_dict(b.to_dict()) == b


class TestCommands:
    """Tests for path command types."""

    def test_command_serialization(self) -> None:
        """Test every command survives a dictionary round trip."""
        commands = [
            MoveTo(Point(0, 0)),
            LineTo(Point(10, 0)),
            CurveTo(Point(12, 0), Point(15, 3), Point(15, 5)),
            ClosePath(),
        ]
        assert [command_from_dict(c.to_dict()) for c in commands] == commands

    def test_command_type_tags(self) -> None:
        """Test that type tags match SVG instruction letters."""
        assert MoveTo(Point(0, 0)).to_dict()["type"] == "M"
        assert LineTo(Point(0, 0)).to_dict()["type"] == "L"
        assert CurveTo(Point(0, 0), Point(0, 0), Point(0, 0)).to_dict()["type"] == "C"
        assert ClosePath().to_dict() == {"type": "Z"}

    def test_unknown_command_tag(self) -> None:
        """Test that an unknown tag raises ValueError."""
        with pytest.raises(ValueError, match="Unknown path command type"):
            command_from_dict({"type": "Q"})


class TestPathData:
    """Tests for PathData class."""

    def test_defaults(self) -> None:
        """Test default paint attributes."""
        pd = PathData(subpaths=[])
        assert pd.fill_color == "none"
        assert pd.stroke_color == "none"
        assert pd.fill_rule == FillRule.NONZERO
        assert pd.is_empty()

    def test_commands_flattens_subpaths(self) -> None:
        """Test that commands() concatenates subpaths in order."""
        first = [MoveTo(Point(0, 0)), LineTo(Point(1, 0))]
        second = [MoveTo(Point(5, 5)), ClosePath()]
        pd = PathData(subpaths=[first, second])
        assert pd.commands() == first + second
        assert not pd.is_empty()

    def test_path_data_serialization(self) -> None:
        """Test path data serialization and deserialization."""
        pd = PathData(
            subpaths=[[MoveTo(Point(0, 0)), LineTo(Point(10, 10))]],
            fill_color="#ff0000",
            stroke_color="#000000",
            stroke_width=2.5,
            fill_rule=FillRule.EVENODD,
        )
        restored = PathData.from_dict(pd.to_dict())
        assert restored == pd


class TestArrowComponent:
    """Tests for ArrowComponent class."""

    def test_component_serialization(self) -> None:
        """Test component serialization and deserialization."""
        component = ArrowComponent(
            kind=ComponentKind.HEAD,
            path_data=PathData(subpaths=[[MoveTo(Point(1, 1))]], fill_color="#000"),
        )
        data = component.to_dict()
        assert data["kind"] == "head"
        assert ArrowComponent.from_dict(data) == component

    def test_head_style_values(self) -> None:
        """Test head style identifiers used in documents."""
        assert ArrowHeadStyle("triangleOpen") == ArrowHeadStyle.TRIANGLE_OPEN
        assert ArrowHeadStyle("circleOpen") == ArrowHeadStyle.CIRCLE_OPEN
        assert ArrowHeadStyle.NONE.value == "none"


class TestVisibilityGraph:
    """Tests for VisibilityGraph class."""

    def _graph(self) -> VisibilityGraph:
        nodes = [
            GraphNode(0, Point(0, 0), NodeKind.START),
            GraphNode(1, Point(5, 5), NodeKind.WAYPOINT),
            GraphNode(2, Point(10, 0), NodeKind.END),
        ]
        return VisibilityGraph(nodes=nodes)

    def test_start_and_end_indices(self) -> None:
        """Test that start is index 0 and end is the last index."""
        graph = self._graph()
        assert graph.start_index == 0
        assert graph.end_index == 2
        assert graph.adjacency == [[], [], []]

    def test_add_edge_is_undirected(self) -> None:
        """Test that edges are visible from both nodes."""
        graph = self._graph()
        graph.add_edge(0, 1, 7.0)
        assert graph.neighbors(0) == [(1, 7.0)]
        assert graph.neighbors(1) == [(0, 7.0)]
        assert graph.edge_count == 1

    def test_edges_listed_once(self) -> None:
        """Test that edges() reports each edge once, lower index first."""
        graph = self._graph()
        graph.add_edge(1, 2, 3.0)
        graph.add_edge(0, 2, 10.0)
        edges = graph.edges()
        assert len(edges) == 2
        assert all(e.node_a < e.node_b for e in edges)
        assert {(e.node_a, e.node_b) for e in edges} == {(0, 2), (1, 2)}
