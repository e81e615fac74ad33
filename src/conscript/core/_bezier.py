"""Internal Bezier curve flattening algorithms.

This is an internal module used when importing SVG path data whose
curves must be reduced to the polyline geometry of vector layers.
Not intended for public use.
"""

import math

from conscript.domain import Point


def flatten_quadratic(points: list[Point], tolerance: float) -> list[Point]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        points: List of 3 control points [p0, p1, p2]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, endpoints included
    """
    p0, p1, p2 = points

    # Curve point at t=0.5
    curve_mid_x = 0.25 * p0.x + 0.5 * p1.x + 0.25 * p2.x
    curve_mid_y = 0.25 * p0.y + 0.5 * p1.y + 0.25 * p2.y

    chord_mid_x = (p0.x + p2.x) / 2
    chord_mid_y = (p0.y + p2.y) / 2

    distance = math.hypot(curve_mid_x - chord_mid_x, curve_mid_y - chord_mid_y)

    if distance <= tolerance:
        return [p0, p2]

    mid = Point(curve_mid_x, curve_mid_y)
    left = flatten_quadratic(
        [p0, Point((p0.x + p1.x) / 2, (p0.y + p1.y) / 2), mid], tolerance
    )
    right = flatten_quadratic(
        [mid, Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2), p2], tolerance
    )

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def flatten_cubic(points: list[Point], tolerance: float) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, endpoints included
    """
    p0, p1, p2, p3 = points

    curve_mid_x = 0.125 * (p0.x + 3 * p1.x + 3 * p2.x + p3.x)
    curve_mid_y = 0.125 * (p0.y + 3 * p1.y + 3 * p2.y + p3.y)

    line_mid_x = (p0.x + p3.x) / 2
    line_mid_y = (p0.y + p3.y) / 2

    distance = math.hypot(curve_mid_x - line_mid_x, curve_mid_y - line_mid_y)

    # A curve whose control points stray far from the chord can still pass
    # through the chord midpoint, so the control polygon is checked as well
    control_spread = max(
        math.hypot(p1.x - line_mid_x, p1.y - line_mid_y),
        math.hypot(p2.x - line_mid_x, p2.y - line_mid_y),
    )
    chord = math.hypot(p3.x - p0.x, p3.y - p0.y)

    if distance <= tolerance and control_spread <= chord / 2 + tolerance:
        return [p0, p3]

    # First level
    q1 = Point((p0.x + p1.x) / 2, (p0.y + p1.y) / 2)
    q2 = Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)
    q3 = Point((p2.x + p3.x) / 2, (p2.y + p3.y) / 2)

    # Second level
    r1 = Point((q1.x + q2.x) / 2, (q1.y + q2.y) / 2)
    r2 = Point((q2.x + q3.x) / 2, (q2.y + q3.y) / 2)

    # Third level (midpoint)
    mid = Point((r1.x + r2.x) / 2, (r1.y + r2.y) / 2)

    left = flatten_cubic([p0, q1, r1, mid], tolerance)
    right = flatten_cubic([mid, r2, q3, p3], tolerance)

    return left[:-1] + right
