"""Core geometric types for vector layer artwork.

This module defines the path geometry drawn on a glyph canvas:
- Point: A 2D point in canvas units
- SubPath: One continuous move-to started chain of points
- PathGeometry: The ordered subpaths of one vector layer

All types are frozen so that a layer stack can be snapshotted by reference.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point on the authoring canvas.

    Canvas coordinates grow to the right (x) and downward (y).

    Attributes:
        x: X coordinate in canvas units
        y: Y coordinate in canvas units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

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
class SubPath:
    """One continuous chain of points started by a move-to.

    Attributes:
        points: Vertices in drawing order; the first one is the move-to target
        closed: True if the chain terminates with a close-path
    """

    points: tuple[Point, ...]
    closed: bool = False

    def vertices(self) -> list[Point]:
        """Return the ordered vertex list with the closing edge made explicit.

        Closed subpaths get their first vertex appended to the end so that
        walking consecutive pairs visits every edge, the closing one included.

        Returns:
            List of vertices
        """
        vertices = list(self.points)
        if self.closed and len(vertices) >= 2:
            vertices.append(vertices[0])
        return vertices

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "closed": self.closed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubPath":
        return cls(
            points=tuple(Point.from_dict(p) for p in data["points"]),
            closed=data.get("closed", False),
        )


@dataclass(frozen=True, slots=True)
class PathGeometry:
    """The geometry of a vector layer: an ordered sequence of subpaths.

    Attributes:
        subpaths: Subpaths in paint order
    """

    subpaths: tuple[SubPath, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        """Check if the geometry has no drawable points.

        Returns:
            True if no subpath carries a point
        """
        return not any(subpath.points for subpath in self.subpaths)

    def points(self) -> list[Point]:
        """Return every point of every subpath, in order."""
        return [point for subpath in self.subpaths for point in subpath.points]

    def append(self, subpath: SubPath) -> "PathGeometry":
        """Return a new geometry with ``subpath`` added after the existing ones.

        Args:
            subpath: Subpath to add

        Returns:
            New PathGeometry instance
        """
        return PathGeometry(subpaths=(*self.subpaths, subpath))

    def draw(self, pen: Any) -> None:
        """Draw the geometry into a fontTools-style segment pen.

        Each subpath becomes a ``moveTo`` followed by ``lineTo`` calls and is
        terminated by ``closePath`` or ``endPath``.

        Args:
            pen: Any object implementing the fontTools pen protocol
        """
        for subpath in self.subpaths:
            if not subpath.points:
                continue
            first, *rest = subpath.points
            pen.moveTo(first.to_tuple())
            for point in rest:
                pen.lineTo(point.to_tuple())
            if subpath.closed:
                pen.closePath()
            else:
                pen.endPath()

    def to_dict(self) -> dict[str, Any]:
        return {"subpaths": [s.to_dict() for s in self.subpaths]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathGeometry":
        return cls(subpaths=tuple(SubPath.from_dict(s) for s in data["subpaths"]))
