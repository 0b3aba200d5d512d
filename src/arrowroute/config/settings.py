"""Configuration settings for Arrowroute."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from arrowroute.domain import ArrowHeadStyle


class RoutingMode(str, Enum):
    """How a conflicting arrow is steered around obstacles."""

    SIMPLE = "simple"
    PATHFINDING = "pathfinding"


class LineStyle(str, Enum):
    """Shape of the arrow line."""

    STRAIGHT = "straight"
    CURVED = "curved"


class RouteConfig(BaseModel):
    """Configuration for route computation."""

    margin: float = Field(
        default=15.0,
        ge=0.0,
        description="Clearance kept between routed paths and obstacles",
    )
    routing_mode: RoutingMode = Field(
        default=RoutingMode.SIMPLE,
        description="'simple' bends a single curve, 'pathfinding' searches a visibility graph",
    )
    curvature: float = Field(
        default=50.0,
        ge=0.0,
        le=100.0,
        description="Curvature amount for curved lines (percent)",
    )
    avoid_obstacles: bool = Field(
        default=False,
        description="Route around obstacles crossing the direct segment",
    )
    line_style: LineStyle = Field(
        default=LineStyle.STRAIGHT,
        description="Straight polyline or smooth curves",
    )
    smoothness: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Tangent scale used when smoothing multi-waypoint routes",
    )
    intersection_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        le=0.1,
        description="Determinant below which segments are treated as parallel",
    )


class ArrowConfig(BaseModel):
    """Configuration for arrow rendering."""

    start_head: ArrowHeadStyle = Field(
        default=ArrowHeadStyle.NONE,
        description="Glyph at the start of the arrow",
    )
    end_head: ArrowHeadStyle = Field(
        default=ArrowHeadStyle.TRIANGLE,
        description="Glyph at the end of the arrow",
    )
    head_size: float = Field(
        default=12.0,
        gt=0.0,
        description="Size of arrow heads in canvas units",
    )
    show_label: bool = Field(
        default=False,
        description="Render a distance label next to the line",
    )
    label_font_size: float = Field(
        default=12.0,
        gt=0.0,
        description="Font size of the distance label",
    )
    label_precision: int = Field(
        default=1,
        ge=0,
        le=6,
        description="Decimal places shown in the distance label",
    )
    route: RouteConfig = Field(default_factory=RouteConfig)

    @classmethod
    def from_preset(cls, name: str, **overrides: Any) -> "ArrowConfig":
        """Build a configuration from a named preset.

        Args:
            name: Preset name (see ARROW_PRESETS)
            **overrides: Field values that replace the preset's

        Returns:
            ArrowConfig instance

        Raises:
            KeyError: If the preset does not exist
        """
        return cls(**{**ARROW_PRESETS[name], **overrides})


ARROW_PRESETS: dict[str, dict[str, Any]] = {
    "simple": {
        "start_head": ArrowHeadStyle.NONE,
        "end_head": ArrowHeadStyle.TRIANGLE,
        "show_label": False,
    },
    "dimension": {
        "start_head": ArrowHeadStyle.BAR,
        "end_head": ArrowHeadStyle.BAR,
        "show_label": True,
    },
    "connector": {
        "start_head": ArrowHeadStyle.CIRCLE,
        "end_head": ArrowHeadStyle.TRIANGLE,
        "show_label": False,
    },
}


class LabelFontConfig(BaseModel):
    """Font used to outline distance labels."""

    font_path: Path | None = Field(
        default=None,
        description="Path to a TTF/OTF font for label outlines",
    )
    family: str = Field(
        default="Inter, system-ui, sans-serif",
        description="Font family requested from the text shaper",
    )
    weight: str = Field(
        default="300",
        description="Font weight requested from the text shaper",
    )
    style: str = Field(
        default="normal",
        description="Font style requested from the text shaper",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ArrowRouteSettings(BaseModel):
    """Main application settings."""

    arrow: ArrowConfig = Field(default_factory=ArrowConfig)
    label_font: LabelFontConfig = Field(default_factory=LabelFontConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ArrowRouteSettings:
    """Get default application settings."""
    return ArrowRouteSettings()
