"""Shared test fixtures."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from arrowroute.domain import ClosePath, LineTo, MoveTo, Point

DIGIT_NAMES = ["zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]

UNITS_PER_EM = 1000
ADVANCE_WIDTH = 600


def _box_glyph(left: int, bottom: int, right: int, top: int):
    pen = TTGlyphPen(None)
    pen.moveTo((left, bottom))
    pen.lineTo((left, top))
    pen.lineTo((right, top))
    pen.lineTo((right, bottom))
    pen.closePath()
    return pen.glyph()


def build_test_font(path: Path) -> Path:
    """Build a tiny TrueType font whose digits and period are plain boxes."""
    glyph_order = [".notdef", *DIGIT_NAMES, "period"]

    cmap = {ord(str(i)): name for i, name in enumerate(DIGIT_NAMES)}
    cmap[ord(".")] = "period"

    glyphs = {name: _box_glyph(50, 0, 550, 700) for name in glyph_order}
    glyphs["period"] = _box_glyph(50, 0, 150, 100)

    builder = FontBuilder(UNITS_PER_EM, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap(cmap)
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics({name: (ADVANCE_WIDTH, 50) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Boxes", "styleName": "Regular"})
    builder.setupOS2()
    builder.setupPost()
    builder.save(str(path))
    return path


@pytest.fixture
def test_font_path(tmp_path: Path) -> Path:
    """Path to a freshly built box-glyph font."""
    return build_test_font(tmp_path / "Boxes-Regular.ttf")


class BoxShaper:
    """Text shaper that returns a 20x10 box sitting on the baseline."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def text_to_path_commands(self, text, x, y, font_size, family, weight="normal", style="normal"):
        self.calls.append((text, font_size, family, weight, style))
        return [
            MoveTo(Point(0, -10)),
            LineTo(Point(20, -10)),
            LineTo(Point(20, 0)),
            LineTo(Point(0, 0)),
            ClosePath(),
        ]


class FailingShaper:
    """Text shaper that always raises."""

    async def text_to_path_commands(self, text, x, y, font_size, family, weight="normal", style="normal"):
        raise RuntimeError("font engine unavailable")


class EmptyShaper:
    """Text shaper that produces no outline."""

    async def text_to_path_commands(self, text, x, y, font_size, family, weight="normal", style="normal"):
        return []


@pytest.fixture
def box_shaper() -> BoxShaper:
    return BoxShaper()


@pytest.fixture
def failing_shaper() -> FailingShaper:
    return FailingShaper()


@pytest.fixture
def empty_shaper() -> EmptyShaper:
    return EmptyShaper()
