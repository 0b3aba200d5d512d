"""Domain models for arrowroute.

This module contains the core domain models representing points, obstacles,
path commands, arrow components and the visibility graph. All models are
designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries
- Independent of any rendering framework

Key classes:
- Point: A 2D point
- Bounds: Axis-aligned obstacle rectangle
- MoveTo / LineTo / CurveTo / ClosePath: SVG-style path commands
- PathData: A renderable shape with paint attributes
- ArrowComponent: A head, line or label part of an arrow
- VisibilityGraph: Arena-style graph over candidate routing points
"""

from arrowroute.domain.arrow import ArrowComponent, ArrowHeadStyle, ComponentKind
from arrowroute.domain.geometry import Bounds, Point
from arrowroute.domain.graph import GraphEdge, GraphNode, NodeKind, VisibilityGraph
from arrowroute.domain.path import (
    ClosePath,
    Command,
    CurveTo,
    FillRule,
    LineTo,
    MoveTo,
    PathData,
    command_from_dict,
)

__all__: list[str] = [
    # Enums
    "ArrowHeadStyle",
    "ComponentKind",
    "FillRule",
    "NodeKind",
    # Core types
    "Point",
    "Bounds",
    "MoveTo",
    "LineTo",
    "CurveTo",
    "ClosePath",
    "Command",
    "PathData",
    "ArrowComponent",
    "GraphNode",
    "GraphEdge",
    "VisibilityGraph",
    "command_from_dict",
]
