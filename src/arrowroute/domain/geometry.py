"""Core geometric types for arrow routing.

This module defines the fundamental geometric types used throughout arrowroute:
- Point: A 2D coordinate
- Bounds: An axis-aligned rectangle that routed paths should avoid
"""

from dataclasses import dataclass
from typing import Any

from arrowroute.exceptions import InvalidBoundsError


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Coordinates follow the SVG
    convention: x grows to the right, y grows downwards.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def offset(self, dx: float, dy: float) -> "Point":
        """Return a new point translated by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linearly interpolate towards another point.

        Args:
            other: Target point
            t: Interpolation factor (0 returns self, 1 returns other)

        Returns:
            Interpolated point
        """
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle used as a routing obstacle.

    Zero-width or zero-height bounds are valid; inverted extents are not.

    Attributes:
        min_x: Left edge
        min_y: Top edge
        max_x: Right edge
        max_y: Bottom edge

    Raises:
        InvalidBoundsError: If min_x > max_x or min_y > max_y
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise InvalidBoundsError(self.min_x, self.min_y, self.max_x, self.max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def expanded(self, margin: float) -> "Bounds":
        """Return bounds grown outward by margin on every side."""
        return Bounds(
            self.min_x - margin,
            self.min_y - margin,
            self.max_x + margin,
            self.max_y + margin,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with min_x, min_y, max_x and max_y fields
        """
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bounds":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with min_x, min_y, max_x and max_y fields

        Returns:
            Bounds instance
        """
        return cls(
            min_x=data["min_x"],
            min_y=data["min_y"],
            max_x=data["max_x"],
            max_y=data["max_y"],
        )
