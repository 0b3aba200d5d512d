"""I/O layer for arrowroute.

This module handles everything that touches files or external formats:

- Load and validate JSON scene files
- Serialize path commands to SVG path data
- Write standalone SVG documents
- Outline label text with fonttools

Key classes:
- SceneReader: Load scenes from JSON
- SvgWriter: Save arrow components as SVG
- FontTextShaper: Text-to-outline shaper backed by a font file
"""

from arrowroute.io.scene import ArrowSpec, ObstacleSpec, PointSpec, Scene, SceneReader, parse_scene
from arrowroute.io.svg import (
    PATH_DECIMAL_PRECISION,
    SVG_NAMESPACE,
    SvgWriter,
    arrow_head_path_string,
    commands_to_string,
    compute_view_box,
    format_number,
    path_data_to_d,
)
from arrowroute.io.text import CommandPen, FontTextShaper

__all__ = [
    "PATH_DECIMAL_PRECISION",
    "SVG_NAMESPACE",
    "ArrowSpec",
    "CommandPen",
    "FontTextShaper",
    "ObstacleSpec",
    "PointSpec",
    "Scene",
    "SceneReader",
    "SvgWriter",
    "arrow_head_path_string",
    "commands_to_string",
    "compute_view_box",
    "format_number",
    "parse_scene",
    "path_data_to_d",
]
