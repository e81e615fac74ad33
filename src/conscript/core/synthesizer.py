"""Path synthesis from pointer gestures.

Converts raw pointer input into subpaths for the four drawing tools:

- freehand: every sampled pointer position, unsmoothed
- line: gesture start to final pointer position
- rectangle: four edges walked in fixed-length sub-segments
- circle: a fixed regular polygon around the gesture start

Rectangle and circle outlines use a uniform vertex density so that the
eraser, which hit-tests per segment, behaves the same along every edge.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from conscript.domain import Point, SubPath

DEFAULT_RECT_STEP = 5.0
DEFAULT_CIRCLE_SEGMENTS = 32


class DrawMode(str, Enum):
    """Active drawing tool."""

    FREE = "free"
    LINE = "line"
    RECT = "rect"
    CIRCLE = "circle"
    ERASER = "eraser"

    @property
    def is_shape(self) -> bool:
        """True for tools that always create a new layer."""
        return self in (DrawMode.RECT, DrawMode.CIRCLE)

    @property
    def is_stroke(self) -> bool:
        """True for tools that extend the active layer."""
        return self in (DrawMode.FREE, DrawMode.LINE)


def freehand_path(start: Point, moves: Iterable[Point]) -> SubPath:
    """Build a freehand subpath.

    Args:
        start: Gesture start (move-to)
        moves: Sampled pointer positions, in order

    Returns:
        Open subpath visiting the start and every move point
    """
    return SubPath(points=(start, *moves))


def line_path(start: Point, end: Point) -> SubPath:
    """Build a straight line subpath from ``start`` to ``end``."""
    return SubPath(points=(start, end))


def _edge_offsets(length: float, step: float) -> list[float]:
    """Signed offsets strictly inside an edge, every ``step`` units."""
    sign = 1.0 if length > 0 else -1.0
    offsets = []
    i = step
    while i < abs(length):
        offsets.append(sign * i)
        i += step
    return offsets


def rectangle_path(
    anchor: Point,
    width: float,
    height: float,
    step: float = DEFAULT_RECT_STEP,
) -> SubPath:
    """Build a rectangle outline with uniform vertex density.

    The walk starts at ``anchor`` and visits the top edge, the right edge,
    the bottom edge (backwards) and the left edge (upwards), ending on the
    anchor again. Width and height are signed drag distances, so the
    rectangle can extend in any direction from the anchor.

    Args:
        anchor: Drag start corner
        width: Signed horizontal drag distance
        height: Signed vertical drag distance
        step: Sub-segment length along each edge

    Returns:
        Subpath whose last point equals ``anchor``

    Examples:
        >>> path = rectangle_path(Point(0.0, 0.0), 10.0, 5.0)
        >>> [p.to_tuple() for p in path.points]
        [(0.0, 0.0), (5.0, 0.0), (10.0, 0.0), (10.0, 5.0), (5.0, 5.0), (0.0, 5.0), (0.0, 0.0)]
    """
    x, y = anchor.x, anchor.y
    points = [anchor]

    # Top edge
    points.extend(Point(x + dx, y) for dx in _edge_offsets(width, step))
    points.append(Point(x + width, y))

    # Right edge
    points.extend(Point(x + width, y + dy) for dy in _edge_offsets(height, step))
    points.append(Point(x + width, y + height))

    # Bottom edge
    points.extend(Point(x + width - dx, y + height) for dx in _edge_offsets(width, step))
    points.append(Point(x, y + height))

    # Left edge
    points.extend(Point(x, y + height - dy) for dy in _edge_offsets(height, step))
    points.append(Point(x, y))

    return SubPath(points=tuple(points))


def circle_path(
    center: Point,
    drag: tuple[float, float],
    segments: int = DEFAULT_CIRCLE_SEGMENTS,
) -> SubPath:
    """Build a regular polygon approximating a circle.

    The radius is the length of the drag vector. Vertices start at angle 0
    and advance by ``2π / segments``; the last vertex repeats the first one
    so the outline is closed by an explicit edge.

    Args:
        center: Circle center (gesture start)
        drag: Drag vector (dx, dy) from the center
        segments: Number of polygon sides

    Returns:
        Subpath of ``segments + 1`` points
    """
    radius = math.hypot(*drag)
    points = [Point(center.x + radius, center.y)]
    for i in range(1, segments + 1):
        angle = (i / segments) * math.pi * 2
        points.append(
            Point(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle))
        )
    return SubPath(points=tuple(points))


@dataclass
class Gesture:
    """One pointer gesture in progress.

    Attributes:
        mode: Tool the gesture was started with
        start: Pointer position at gesture start
        moves: Pointer positions received since the start
    """

    mode: DrawMode
    start: Point
    moves: list[Point] = field(default_factory=list)

    @property
    def current(self) -> Point:
        """Latest pointer position."""
        return self.moves[-1] if self.moves else self.start

    def add(self, point: Point) -> None:
        """Record a pointer move."""
        self.moves.append(point)

    def to_subpath(
        self,
        rect_step: float = DEFAULT_RECT_STEP,
        circle_segments: int = DEFAULT_CIRCLE_SEGMENTS,
    ) -> SubPath | None:
        """Synthesize the subpath for this gesture's tool.

        Args:
            rect_step: Rectangle sub-segment length
            circle_segments: Circle polygon sides

        Returns:
            The synthesized subpath, or None for the eraser
        """
        end = self.current
        if self.mode is DrawMode.FREE:
            return freehand_path(self.start, self.moves)
        if self.mode is DrawMode.LINE:
            return line_path(self.start, end)
        if self.mode is DrawMode.RECT:
            return rectangle_path(
                self.start, end.x - self.start.x, end.y - self.start.y, step=rect_step
            )
        if self.mode is DrawMode.CIRCLE:
            return circle_path(
                self.start, (end.x - self.start.x, end.y - self.start.y), segments=circle_segments
            )
        return None
