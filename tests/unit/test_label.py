"""Unit tests for distance label generation."""

import asyncio

import pytest

from arrowroute.config import LabelFontConfig
from arrowroute.core.label import (
    LabelErr,
    LabelOk,
    LabelSkipped,
    format_distance,
    generate_label,
    place_label,
    should_rotate,
)
from arrowroute.domain import ClosePath, ComponentKind, LineTo, MoveTo, Point

BOX = [
    MoveTo(Point(0, -10)),
    LineTo(Point(20, -10)),
    LineTo(Point(20, 0)),
    LineTo(Point(0, 0)),
    ClosePath(),
]


def extent(commands):
    points = [c.position for c in commands if not isinstance(c, ClosePath)]
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


class TestFormatting:
    """Tests for distance text and rotation rules."""

    def test_format_distance(self):
        """Test fixed-decimal distance text."""
        assert format_distance(Point(0, 0), Point(3, 4), 1) == "5.0"
        assert format_distance(Point(0, 0), Point(3, 4), 0) == "5"
        assert format_distance(Point(0, 0), Point(1, 1), 3) == "1.414"

    @pytest.mark.parametrize(
        ("angle", "expected"),
        [
            (0.0, False),
            (4.9, False),
            (-3.0, False),
            (45.0, True),
            (90.0, True),
            (-90.0, True),
            (176.0, False),
            (180.0, False),
            (-178.0, False),
        ],
    )
    def test_should_rotate(self, angle, expected):
        """Test near-horizontal lines keep upright text."""
        assert should_rotate(angle) is expected


class TestPlaceLabel:
    """Tests for label placement."""

    def test_horizontal_line(self):
        """Test a label centred above a horizontal line."""
        placed = place_label(BOX, Point(0, 0), Point(100, 0), stroke_width=2)

        min_x, min_y, max_x, max_y = extent(placed)
        assert (min_x, max_x) == (pytest.approx(40), pytest.approx(60))
        # Pushed off the line by half stroke + half height + padding
        assert (min_y, max_y) == (pytest.approx(-15), pytest.approx(-5))

    def test_vertical_line_rotates(self):
        """Test the label follows a vertical line."""
        placed = place_label(BOX, Point(0, 0), Point(0, 100), stroke_width=2)

        min_x, min_y, max_x, max_y = extent(placed)
        assert max_x - min_x == pytest.approx(10)
        assert max_y - min_y == pytest.approx(20)

    def test_close_path_kept(self):
        """Test non-positional commands pass through."""
        placed = place_label(BOX, Point(0, 0), Point(100, 0), stroke_width=2)
        assert isinstance(placed[-1], ClosePath)
        assert len(placed) == len(BOX)

    def test_empty_outline(self):
        """Test an outline without positions gives None."""
        assert place_label([ClosePath()], Point(0, 0), Point(100, 0), 2) is None


class TestGenerateLabel:
    """Tests for generate_label."""

    def test_ok(self, box_shaper):
        """Test a successful label is a fill-only component."""
        result = asyncio.run(
            generate_label(
                Point(0, 0),
                Point(100, 0),
                box_shaper,
                font_size=14,
                stroke_width=2,
                stroke_color="#112233",
                fill_color="#ff0000",
            )
        )

        assert isinstance(result, LabelOk)
        assert result.component.kind == ComponentKind.LABEL
        path_data = result.component.path_data
        assert path_data.fill_color == "#ff0000"
        assert path_data.stroke_color == "none"
        assert path_data.stroke_width == 0.0
        assert box_shaper.calls[0][0] == "100.0"
        assert box_shaper.calls[0][1] == 14

    def test_fill_falls_back_to_stroke(self, box_shaper):
        """Test a 'none' fill uses the stroke color."""
        result = asyncio.run(
            generate_label(Point(0, 0), Point(100, 0), box_shaper, 12, 2, "#112233", "none")
        )
        assert result.component.path_data.fill_color == "#112233"

    def test_font_and_precision_passed(self, box_shaper):
        """Test font settings and precision reach the shaper."""
        font = LabelFontConfig(family="Mono", weight="700", style="italic")
        asyncio.run(
            generate_label(
                Point(0, 0), Point(3, 4), box_shaper, 12, 2, "#000", "none", precision=2, font=font
            )
        )
        assert box_shaper.calls[0] == ("5.00", 12, "Mono", "700", "italic")

    def test_shaper_failure(self, failing_shaper):
        """Test a raising shaper gives LabelErr instead of propagating."""
        result = asyncio.run(
            generate_label(Point(0, 0), Point(100, 0), failing_shaper, 12, 2, "#000", "none")
        )
        assert isinstance(result, LabelErr)
        assert "font engine unavailable" in result.reason

    def test_empty_outline(self, empty_shaper):
        """Test an empty outline is skipped."""
        result = asyncio.run(
            generate_label(Point(0, 0), Point(100, 0), empty_shaper, 12, 2, "#000", "none")
        )
        assert result == LabelSkipped(reason="empty outline")
