"""Scene files for batch arrow rendering.

A scene is a JSON document listing obstacles and the arrows to route between
them:

    {
        "obstacles": [{"min_x": 40, "min_y": -10, "max_x": 60, "max_y": 10}],
        "arrows": [{"start": {"x": 0, "y": 0}, "end": {"x": 100, "y": 0}}],
        "settings": {"end_head": "triangle", "route": {"avoid_obstacles": true}}
    }

``settings`` holds scene-wide arrow configuration; an arrow's own ``config``
replaces it entirely.
"""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from arrowroute.config import ArrowConfig
from arrowroute.domain import Bounds, Point
from arrowroute.exceptions import SceneFormatError, SceneLoadError


class PointSpec(BaseModel):
    """A point in scene coordinates."""

    x: float
    y: float

    def to_point(self) -> Point:
        return Point(self.x, self.y)


class ObstacleSpec(BaseModel):
    """A rectangular obstacle."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @model_validator(mode="after")
    def _check_extents(self) -> "ObstacleSpec":
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError("min_x/min_y must not exceed max_x/max_y")
        return self

    def to_bounds(self) -> Bounds:
        return Bounds(self.min_x, self.min_y, self.max_x, self.max_y)


class ArrowSpec(BaseModel):
    """One arrow to route and render."""

    start: PointSpec
    end: PointSpec
    config: ArrowConfig | None = Field(
        default=None,
        description="Arrow configuration; scene settings are used when omitted",
    )
    stroke_color: str = Field(default="#000000", description="Line and head color")
    stroke_width: float = Field(default=2.0, gt=0.0, description="Line width")
    fill_color: str = Field(
        default="none",
        description="Label color; 'none' uses the stroke color",
    )


class Scene(BaseModel):
    """Obstacles and arrows to render together."""

    arrows: list[ArrowSpec] = Field(default_factory=list)
    obstacles: list[ObstacleSpec] = Field(default_factory=list)
    settings: ArrowConfig = Field(default_factory=ArrowConfig)

    def obstacle_bounds(self) -> list[Bounds]:
        return [obs.to_bounds() for obs in self.obstacles]

    def config_for(self, arrow: ArrowSpec) -> ArrowConfig:
        """Effective configuration of one arrow."""
        return arrow.config if arrow.config is not None else self.settings


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class SceneReader:
    """Loads scene JSON files into Scene models.

    Example:
        reader = SceneReader(Path("scene.json"))
        scene = reader.load()
        for arrow in scene.arrows:
            print(arrow.start, arrow.end)
    """

    def __init__(self, scene_path: Path) -> None:
        """Initialize the scene reader.

        Args:
            scene_path: Path to the scene JSON file
        """
        self._scene_path = scene_path

    def load(self) -> Scene:
        """Read and validate the scene file.

        Returns:
            Validated Scene

        Raises:
            SceneLoadError: If the file does not exist or cannot be read
            SceneFormatError: If the content is not a valid scene
        """
        if not self._scene_path.exists():
            raise SceneLoadError(str(self._scene_path), "file not found")

        try:
            content = self._scene_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SceneLoadError(str(self._scene_path), str(e)) from e

        return parse_scene(content, str(self._scene_path))


def parse_scene(content: str, source: str = "<string>") -> Scene:
    """Validate scene JSON text.

    Args:
        content: JSON document
        source: Name used in error messages

    Returns:
        Validated Scene

    Raises:
        SceneFormatError: If the content is not a valid scene
    """
    try:
        return Scene.model_validate_json(content)
    except ValidationError as e:
        raise SceneFormatError(source, _format_validation_error(e)) from e
