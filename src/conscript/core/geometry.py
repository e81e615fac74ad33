"""Geometric operations for drawing, erasing and glyph metrics.

This module provides core mathematical utilities for:
- Point-to-segment distance with clamped projection
- Glyph bounding-width derivation

All functions are pure and stateless.
"""

import math
from collections.abc import Iterable

from fontTools.pens.boundsPen import BoundsPen

from conscript.domain import Layer, Point, RasterLayer, VectorLayer


def distance_to_segment(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Find the distance from a point to a line segment.

    Projects the point onto the infinite line, clamps the projection
    parameter to [0, 1], and measures to the clamped point.

    Args:
        point: The point to measure from
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Euclidean distance from ``point`` to the segment

    Examples:
        >>> distance_to_segment(Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0))
        1.0
        >>> distance_to_segment(Point(5.0, 0.0), Point(0.0, 0.0), Point(2.0, 0.0))
        3.0
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Zero-length segment degenerates to a point
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0:
        return math.hypot(point.x - seg_start.x, point.y - seg_start.y)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest_x = seg_start.x + t * dx
    nearest_y = seg_start.y + t * dy

    return math.hypot(point.x - nearest_x, point.y - nearest_y)


def layer_max_x(layer: Layer) -> float | None:
    """Find the rightmost X coordinate reached by a layer.

    Vector layers are measured with a fontTools BoundsPen; raster layers
    reach ``x + width``.

    Args:
        layer: Layer to measure

    Returns:
        Maximum X, or None for a vector layer without geometry
    """
    if isinstance(layer, RasterLayer):
        return layer.x + layer.width

    pen = BoundsPen(None)
    layer.geometry.draw(pen)
    if pen.bounds is None:
        return None
    _, _, x_max, _ = pen.bounds
    return x_max


def glyph_bounding_width(
    layers: Iterable[Layer],
    canvas_size: float = 400.0,
    min_width: float = 50.0,
) -> float:
    """Derive a glyph's bounding width from its layer stack.

    The width is the maximum X extent reached by any visible layer, clamped
    to ``[min_width, canvas_size]``. Hidden layers do not count.

    Args:
        layers: Layer stack of the glyph
        canvas_size: Size of the authoring canvas (upper clamp)
        min_width: Lower clamp

    Returns:
        Bounding width in canvas units

    Examples:
        >>> glyph_bounding_width([])
        50.0
    """
    max_x = float(min_width)
    for layer in layers:
        if not layer.visible:
            continue
        if isinstance(layer, VectorLayer) and layer.is_empty():
            continue
        layer_x = layer_max_x(layer)
        if layer_x is not None and layer_x > max_x:
            max_x = float(layer_x)
    return min(float(canvas_size), max_x)
