"""Core routing algorithms for arrowroute.

This module contains the core algorithms for:

- Geometry primitives (segment and box intersection, containment)
- Waypoint generation around obstacles
- Visibility graph construction and bidirectional path search
- Path simplification and Bezier curve fitting
- Arrow head geometry and arrow assembly

The geometry pipeline is synchronous and pure. Only label generation awaits
an external text shaper.

Key functions:
- segments_intersect: Determinant-based segment intersection test
- segment_intersects_box: Segment versus margin-expanded box test
- find_path_around_obstacles: Route two points around obstacles
- simplify_path: Greedy farthest-visible-point reduction
- fit_smooth_curves: C1-continuous cubic segments through a polyline
- generate_arrow_head: Path commands for one arrow head style
- generate_arrow_components: Full arrow including optional label

Key classes:
- VisibilityGraphBuilder: Builds the visibility graph for one routing call
- BidirectionalSearch: NBA* search over a visibility graph
- ObstacleRouter: Chains the routing stages
- ArrowAssembler: Chooses a strategy and emits arrow components
- SceneRenderer: Routes every arrow of a scene with statistics
"""

from arrowroute.core.assembler import (
    ArrowAssembler,
    ArrowGeometry,
    RouteStrategy,
    assemble_arrow,
    generate_arrow_components,
    generate_arrow_line,
)
from arrowroute.core.curves import (
    ControlPair,
    bezier_flatten,
    calculate_curved_path,
    fit_smooth_curves,
)
from arrowroute.core.geometry import (
    point_in_box,
    segment_intersects_box,
    segments_intersect,
)
from arrowroute.core.heads import generate_arrow_head, head_clearance, is_filled_head
from arrowroute.core.label import (
    LabelErr,
    LabelOk,
    LabelResult,
    LabelSkipped,
    TextShaper,
    generate_label,
)
from arrowroute.core.renderer import RenderedArrow, SceneRenderer
from arrowroute.core.router import ObstacleRouter, RouteResult, find_path_around_obstacles
from arrowroute.core.search import BidirectionalSearch, find_node_path
from arrowroute.core.simplify import simplify_path
from arrowroute.core.visibility import VisibilityGraphBuilder
from arrowroute.core.waypoints import generate_waypoints

__all__ = [
    # Assembly
    "ArrowAssembler",
    "ArrowGeometry",
    "RouteStrategy",
    "assemble_arrow",
    "generate_arrow_components",
    "generate_arrow_line",
    # Routing
    "BidirectionalSearch",
    "ObstacleRouter",
    "RouteResult",
    "VisibilityGraphBuilder",
    "find_node_path",
    "find_path_around_obstacles",
    "generate_waypoints",
    "simplify_path",
    # Curves
    "ControlPair",
    "bezier_flatten",
    "calculate_curved_path",
    "fit_smooth_curves",
    # Geometry functions
    "point_in_box",
    "segment_intersects_box",
    "segments_intersect",
    # Heads
    "generate_arrow_head",
    "head_clearance",
    "is_filled_head",
    # Labels
    "LabelErr",
    "LabelOk",
    "LabelResult",
    "LabelSkipped",
    "TextShaper",
    "generate_label",
    # Scene rendering
    "RenderedArrow",
    "SceneRenderer",
]
