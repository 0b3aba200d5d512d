"""Label text shaping with fontTools.

FontTextShaper turns a string into absolute outline commands by drawing each
glyph through a TransformPen (scaled from font units to font size, y flipped
to SVG's downward axis) into a pen that records domain commands. Glyphs are
laid out left to right by advance width; there is no kerning or shaping
beyond the cmap lookup.
"""

import asyncio
from pathlib import Path
from typing import Any

import structlog
from fontTools.pens.basePen import BasePen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont

from arrowroute.domain import ClosePath, Command, CurveTo, LineTo, MoveTo, Point
from arrowroute.exceptions import FontNotFoundError, LabelError, TextShapingError

logger = structlog.get_logger(__name__)

NOTDEF = ".notdef"


class CommandPen(BasePen):
    """Pen that records path commands.

    Quadratic segments are converted to cubics by BasePen.
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self.commands: list[Command] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(MoveTo(Point(*pt)))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(LineTo(Point(*pt)))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.commands.append(CurveTo(Point(*pt1), Point(*pt2), Point(*pt3)))

    def _closePath(self) -> None:
        self.commands.append(ClosePath())

    def _endPath(self) -> None:
        pass


class FontTextShaper:
    """Converts text to outline commands using a single font file.

    The family, weight and style requested by callers are informational;
    outlines always come from the loaded font.

    Example:
        shaper = FontTextShaper(Path("Inter-Light.ttf"))
        commands = shaper.shape("42.0", 0, 0, 12)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the shaper.

        Args:
            font_path: Path to a TTF or OTF font
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> TTFont:
        """Load the font file if not loaded yet.

        Raises:
            FontNotFoundError: If the font file does not exist
            TextShapingError: If the font cannot be parsed
        """
        if self._font is None:
            if not self._font_path.exists():
                raise FontNotFoundError(str(self._font_path))
            try:
                self._font = TTFont(str(self._font_path))
            except Exception as e:
                raise TextShapingError("", f"cannot load font: {e}") from e
        return self._font

    def shape(self, text: str, x: float, y: float, font_size: float) -> list[Command]:
        """Outline text with its baseline origin at (x, y).

        Args:
            text: Text to outline
            x: Baseline start x
            y: Baseline y (SVG coordinates, y grows downward)
            font_size: Font size in canvas units

        Returns:
            Absolute path commands for all glyphs

        Raises:
            TextShapingError: If a glyph cannot be drawn
        """
        font = self.load()
        glyph_set = font.getGlyphSet()
        cmap = font.getBestCmap() or {}
        hmtx = font["hmtx"]
        scale = font_size / font["head"].unitsPerEm

        pen = CommandPen(glyph_set)
        cursor = 0.0
        for char in text:
            glyph_name = cmap.get(ord(char), NOTDEF)
            if glyph_name not in glyph_set:
                raise TextShapingError(text, f"no glyph for {char!r}")

            transform = TransformPen(pen, (scale, 0, 0, -scale, x + cursor * scale, y))
            try:
                glyph_set[glyph_name].draw(transform)
            except Exception as e:
                raise TextShapingError(text, f"cannot draw glyph '{glyph_name}': {e}") from e

            advance, _lsb = hmtx[glyph_name]
            cursor += advance

        return pen.commands

    async def text_to_path_commands(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float,
        family: str,
        weight: str = "normal",
        style: str = "normal",
    ) -> list[Command]:
        """Asynchronously outline text; font parsing runs in a worker thread."""
        logger.debug(
            "Shaping text",
            text=text,
            font_size=font_size,
            family=family,
            weight=weight,
            style=style,
        )
        try:
            return await asyncio.to_thread(self.shape, text, x, y, font_size)
        except LabelError:
            raise
        except Exception as e:
            raise TextShapingError(text, str(e)) from e
