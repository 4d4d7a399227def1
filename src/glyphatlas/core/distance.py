"""Exact point-to-outline distance and ray crossing queries.

This module provides the geometric kernel of distance field generation:
- Distance from a point to a line segment or quadratic Bezier curve
- Crossing count of a +x ray with a line segment or quadratic curve
- nearest: both queries summed over a whole contour

Segments own their end point but not their start point: a parameter of
t = 0 is excluded from the distance query, and the crossing tie-break
assigns a vertex hit to exactly one of the two segments sharing it. This
keeps line and curve segments consistent when they meet.

All functions are pure and stateless, so they are safe to call from
worker processes.
"""

import math

from glyphatlas.core._roots import solve_cubic
from glyphatlas.domain import Contour, CubicCurve, Line, Point, QuadraticCurve
from glyphatlas.exceptions import UnsupportedSegmentError

# Returned for segments that do not own the nearest point
INFINITE_DISTANCE = math.inf


def line_distance(p: Point, s: Point, e: Point) -> float:
    """Distance from ``p`` to the line segment from ``s`` to ``e``.

    Args:
        p: Query point
        s: Segment start (excluded)
        e: Segment end

    Returns:
        Euclidean distance, or INFINITE_DISTANCE for a zero-length segment
        or when the projection of ``p`` falls at or before ``s``
    """
    dx = e.x - s.x
    dy = e.y - s.y
    if dx == 0.0 and dy == 0.0:
        return INFINITE_DISTANCE

    t = ((p.x - s.x) * dx + (p.y - s.y) * dy) / (dx * dx + dy * dy)
    if t <= 0.0:
        return INFINITE_DISTANCE

    t = min(t, 1.0)
    return math.hypot(s.x + t * dx - p.x, s.y + t * dy - p.y)


def _counts_crossing(t: float, x: float, px: float, start_dy: float, end_dy: float) -> bool:
    """Half-open tie-break shared by lines and curves.

    A crossing at parameter ``t`` and abscissa ``x`` counts when it lies to
    the right of the query point and strictly inside the segment, at the
    start of an upward segment, or at the end of a downward one.
    """
    if x <= px:
        return False
    if 0.0 < t < 1.0:
        return True
    if t == 0.0:
        return start_dy > 0.0
    if t == 1.0:
        return end_dy < 0.0
    return False


def line_crossings(p: Point, s: Point, e: Point) -> int:
    """Count crossings of the +x ray from ``p`` with a line segment.

    Args:
        p: Ray origin
        s: Segment start
        e: Segment end

    Returns:
        0 or 1; horizontal segments never cross
    """
    dy = e.y - s.y
    if dy == 0.0:
        return 0

    t = (p.y - s.y) / dy
    x = s.x + t * (e.x - s.x)
    return 1 if _counts_crossing(t, x, p.x, dy, dy) else 0


def _quadratic_point(s: Point, c: Point, e: Point, t: float) -> tuple[float, float]:
    a = 1.0 - t
    return (
        a * a * s.x + 2.0 * a * t * c.x + t * t * e.x,
        a * a * s.y + 2.0 * a * t * c.y + t * t * e.y,
    )


def quadratic_distance(p: Point, s: Point, c: Point, e: Point) -> float:
    """Distance from ``p`` to the quadratic Bezier curve (s, c, e).

    The squared distance |B(t) - p|^2 is a quartic in t whose derivative is
    the cubic d4*t^3 + 3*d3*t^2 + d2*t + d1. Each real root is a candidate
    parameter; roots at or before t = 0 are dropped and roots past the end
    are clamped to t = 1.

    Args:
        p: Query point
        s: Curve start (excluded)
        c: Control point
        e: Curve end

    Returns:
        Euclidean distance, or INFINITE_DISTANCE when no candidate lies in
        (0, 1]
    """
    ax = s.x - 2.0 * c.x + e.x
    ay = s.y - 2.0 * c.y + e.y
    d4 = ax * ax + ay * ay
    if d4 == 0.0:
        # Control point at the chord midpoint: B(t) is linear in t
        return line_distance(p, s, e)

    scx = c.x - s.x
    scy = c.y - s.y
    psx = s.x - p.x
    psy = s.y - p.y

    d3 = ax * scx + ay * scy
    d2 = ax * psx + ay * psy + 2.0 * (scx * scx + scy * scy)
    d1 = scx * psx + scy * psy

    min_dist = INFINITE_DISTANCE
    for t in solve_cubic(d4, 3.0 * d3, d2, d1):
        if t <= 0.0:
            continue
        t = min(t, 1.0)
        x, y = _quadratic_point(s, c, e, t)
        dist = math.hypot(x - p.x, y - p.y)
        if dist < min_dist:
            min_dist = dist

    return min_dist


def quadratic_crossings(p: Point, s: Point, c: Point, e: Point) -> int:
    """Count crossings of the +x ray from ``p`` with a quadratic curve.

    y(t) = u*t^2 - 2*v*t + s.y with u = s.y - 2*c.y + e.y and v = s.y - c.y.

    Args:
        p: Ray origin
        s: Curve start
        c: Control point
        e: Curve end

    Returns:
        0, 1 or 2
    """
    u = s.y - 2.0 * c.y + e.y

    if u == 0.0:
        dy = e.y - s.y
        if dy == 0.0:
            return 0
        t = (p.y - s.y) / dy
        x, _ = _quadratic_point(s, c, e, t)
        return 1 if _counts_crossing(t, x, p.x, dy, dy) else 0

    v = s.y - c.y

    # Local vertical direction at each end, falling back to the chord when
    # the tangent is horizontal there
    start_dy = c.y - s.y if s.y != c.y else e.y - s.y
    end_dy = e.y - c.y if c.y != e.y else e.y - s.y

    # Roots sum to 2v/u; hits on an end point get an exact parameter
    if p.y == s.y:
        t1, t2 = 0.0, 2.0 * v / u
    elif p.y == e.y:
        t1, t2 = 1.0, 2.0 * v / u - 1.0
    else:
        w = c.y * c.y - e.y * s.y + p.y * u
        if w < 0.0:
            return 0
        w = math.sqrt(w)
        t1, t2 = (v + w) / u, (v - w) / u

    x1, _ = _quadratic_point(s, c, e, t1)
    if t1 == t2:
        # Tangential touch: counts only as an end point hit
        if 0.0 < t1 < 1.0:
            return 0
        return 1 if _counts_crossing(t1, x1, p.x, start_dy, end_dy) else 0

    x2, _ = _quadratic_point(s, c, e, t2)
    count = 0
    if _counts_crossing(t1, x1, p.x, start_dy, end_dy):
        count += 1
    if _counts_crossing(t2, x2, p.x, start_dy, end_dy):
        count += 1
    return count


def nearest(point: Point, contour: Contour) -> tuple[float, int]:
    """Distance from ``point`` to ``contour`` and its ray crossing count.

    Args:
        point: Query point
        contour: Closed contour of line and quadratic segments

    Returns:
        Tuple of (minimum distance, crossings of the +x ray)

    Raises:
        UnsupportedSegmentError: If the contour holds a cubic segment
    """
    min_dist = INFINITE_DISTANCE
    crossings = 0

    for start, segment in contour.iter_segments():
        if isinstance(segment, Line):
            dist = line_distance(point, start, segment.end)
            crossings += line_crossings(point, start, segment.end)
        elif isinstance(segment, QuadraticCurve):
            dist = quadratic_distance(point, start, segment.control, segment.end)
            crossings += quadratic_crossings(point, start, segment.control, segment.end)
        elif isinstance(segment, CubicCurve):
            raise UnsupportedSegmentError(segment.kind)
        else:
            raise UnsupportedSegmentError(type(segment).__name__)

        if dist < min_dist:
            min_dist = dist

    return min_dist, crossings
