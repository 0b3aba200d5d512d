"""Path command types for renderable vector shapes.

Commands map one-to-one onto absolute SVG path instructions:
- MoveTo: ``M x y``
- LineTo: ``L x y``
- CurveTo: ``C x1 y1 x2 y2 x y``
- ClosePath: ``Z``

A PathData groups one or more command sequences (subpaths) with the paint
attributes needed to render them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from arrowroute.domain.geometry import Point


class FillRule(str, Enum):
    """SVG fill rule."""

    NONZERO = "nonzero"
    EVENODD = "evenodd"


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at position."""

    position: Point

    def to_dict(self) -> dict[str, Any]:
        return {"type": "M", "position": self.position.to_dict()}


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight line from the current point to position."""

    position: Point

    def to_dict(self) -> dict[str, Any]:
        return {"type": "L", "position": self.position.to_dict()}


@dataclass(frozen=True, slots=True)
class CurveTo:
    """Cubic Bezier from the current point to position.

    Attributes:
        control1: First control point
        control2: Second control point
        position: End point of the curve
    """

    control1: Point
    control2: Point
    position: Point

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "C",
            "control1": self.control1.to_dict(),
            "control2": self.control2.to_dict(),
            "position": self.position.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current subpath."""

    def to_dict(self) -> dict[str, Any]:
        return {"type": "Z"}


Command = MoveTo | LineTo | CurveTo | ClosePath


def command_from_dict(data: dict[str, Any]) -> Command:
    """Deserialize a command from its dictionary form.

    Args:
        data: Dictionary produced by a command's ``to_dict``

    Returns:
        Command instance

    Raises:
        ValueError: If the command type tag is unknown
    """
    tag = data["type"]
    if tag == "M":
        return MoveTo(Point.from_dict(data["position"]))
    elif tag == "L":
        return LineTo(Point.from_dict(data["position"]))
    elif tag == "C":
        return CurveTo(
            control1=Point.from_dict(data["control1"]),
            control2=Point.from_dict(data["control2"]),
            position=Point.from_dict(data["position"]),
        )
    elif tag == "Z":
        return ClosePath()
    else:
        raise ValueError(f"Unknown path command type: {tag!r}")


@dataclass
class PathData:
    """One renderable shape.

    Attributes:
        subpaths: Ordered command sequences; each starts with a MoveTo
        fill_color: Fill paint, or "none"
        stroke_color: Stroke paint, or "none"
        stroke_width: Stroke width in canvas units
        stroke_opacity: Stroke opacity (0-1)
        fill_opacity: Fill opacity (0-1)
        fill_rule: Fill rule for overlapping subpaths
    """

    subpaths: list[list[Command]]
    fill_color: str = "none"
    stroke_color: str = "none"
    stroke_width: float = 1.0
    stroke_opacity: float = 1.0
    fill_opacity: float = 1.0
    fill_rule: FillRule = field(default=FillRule.NONZERO)

    def commands(self) -> list[Command]:
        """Flatten all subpaths into a single command list."""
        return [cmd for subpath in self.subpaths for cmd in subpath]

    def is_empty(self) -> bool:
        return not any(self.subpaths)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the path data
        """
        return {
            "subpaths": [[cmd.to_dict() for cmd in sub] for sub in self.subpaths],
            "fill_color": self.fill_color,
            "stroke_color": self.stroke_color,
            "stroke_width": self.stroke_width,
            "stroke_opacity": self.stroke_opacity,
            "fill_opacity": self.fill_opacity,
            "fill_rule": self.fill_rule.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathData":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of path data

        Returns:
            PathData instance
        """
        return cls(
            subpaths=[[command_from_dict(c) for c in sub] for sub in data["subpaths"]],
            fill_color=data["fill_color"],
            stroke_color=data["stroke_color"],
            stroke_width=data["stroke_width"],
            stroke_opacity=data.get("stroke_opacity", 1.0),
            fill_opacity=data.get("fill_opacity", 1.0),
            fill_rule=FillRule(data.get("fill_rule", FillRule.NONZERO.value)),
        )
