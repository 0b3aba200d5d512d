"""Exception hierarchy for Arrowroute."""


class ArrowRouteError(Exception):
    """Base exception for all Arrowroute errors."""

    pass


class GeometryError(ArrowRouteError):
    """Errors in geometric inputs."""

    pass


class InvalidBoundsError(GeometryError):
    """Obstacle bounds with inverted extents."""

    def __init__(self, min_x: float, min_y: float, max_x: float, max_y: float) -> None:
        self.min_x = min_x
        self.min_y = min_y
        self.max_x = max_x
        self.max_y = max_y
        super().__init__(
            f"Invalid bounds ({min_x}, {min_y}, {max_x}, {max_y}): "
            "min must not exceed max"
        )


class SceneError(ArrowRouteError):
    """Errors related to scene loading."""

    pass


class SceneLoadError(SceneError):
    """Error reading a scene file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load scene '{path}': {reason}")


class SceneFormatError(SceneError):
    """Scene file content does not match the expected schema."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid scene format '{path}': {details}")


class RenderError(ArrowRouteError):
    """Errors related to rendering output."""

    pass


class SvgWriteError(RenderError):
    """Error writing an SVG document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write SVG '{path}': {reason}")


class LabelError(ArrowRouteError):
    """Errors related to label glyph generation."""

    pass


class FontNotFoundError(LabelError):
    """Label font file could not be found."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Label font not found: '{path}'")


class TextShapingError(LabelError):
    """Error converting label text to outline commands."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Could not shape text '{text}': {reason}")
