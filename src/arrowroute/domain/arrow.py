"""Arrow types: head styles and renderable arrow components."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from arrowroute.domain.path import PathData


class ArrowHeadStyle(str, Enum):
    """Glyph drawn at an arrow end.

    Values match the identifiers used by diagram documents.
    """

    NONE = "none"
    TRIANGLE = "triangle"
    TRIANGLE_OPEN = "triangleOpen"
    DIAMOND = "diamond"
    DIAMOND_OPEN = "diamondOpen"
    CIRCLE = "circle"
    CIRCLE_OPEN = "circleOpen"
    BAR = "bar"
    MEASURE = "measure"
    CHEVRON = "chevron"


class ComponentKind(str, Enum):
    """Role of a rendered arrow component."""

    HEAD = "head"
    LINE = "line"
    LABEL = "label"


@dataclass
class ArrowComponent:
    """One renderable part of an arrow.

    Attributes:
        kind: Whether this is a head, the line, or the label
        path_data: Geometry and paint for the part
    """

    kind: ComponentKind
    path_data: PathData

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "path_data": self.path_data.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArrowComponent":
        return cls(
            kind=ComponentKind(data["kind"]),
            path_data=PathData.from_dict(data["path_data"]),
        )
