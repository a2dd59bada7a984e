from __future__ import annotations

from typing import Sequence, Tuple

from bombline.constants import GEOMETRY_EPSILON

Point = Tuple[float, float]


def chebyshev(a: Sequence[float], b: Sequence[float]) -> float:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def is_neighbor(a: Sequence[float], b: Sequence[float]) -> bool:
    """True when b is one of the eight cells around a (never a itself)."""
    return chebyshev(a, b) == 1


def within_reach(a: Sequence[float], b: Sequence[float]) -> bool:
    """True when b is a itself or one of its eight neighbours."""
    return chebyshev(a, b) <= 1


def orientation(p: Point, q: Point, r: Point, eps: float = GEOMETRY_EPSILON) -> int:
    """0 when colinear, 1 for clockwise, 2 for counterclockwise."""
    val = (q[1] - p[1]) * (r[0] - q[0]) - (q[0] - p[0]) * (r[1] - q[1])
    if abs(val) < eps:
        return 0
    return 1 if val > 0 else 2


def on_segment(p: Point, q: Point, r: Point) -> bool:
    """Given colinear p, q, r: does q lie within the bounding box of segment p-r?"""
    return (
        min(p[0], r[0]) <= q[0] <= max(p[0], r[0])
        and min(p[1], r[1]) <= q[1] <= max(p[1], r[1])
    )


def segments_intersect(p1: Point, q1: Point, p2: Point, q2: Point) -> bool:
    o1 = orientation(p1, q1, p2)
    o2 = orientation(p1, q1, q2)
    o3 = orientation(p2, q2, p1)
    o4 = orientation(p2, q2, q1)

    if o1 != o2 and o3 != o4:
        return True
    # Colinear special cases
    if o1 == 0 and on_segment(p1, p2, q1):
        return True
    if o2 == 0 and on_segment(p1, q2, q1):
        return True
    if o3 == 0 and on_segment(p2, p1, q2):
        return True
    if o4 == 0 and on_segment(p2, q1, q2):
        return True
    return False


def has_self_intersections(points: Sequence[Sequence[float]]) -> bool:
    """Return True if any two non-consecutive segments of the polyline touch.

    Segments sharing a vertex (index gap 1) are skipped. The first/last segment
    pair is only exempt when the polyline is closed, since they legitimately
    meet at the shared endpoint.
    """
    pts = [(float(p[0]), float(p[1])) for p in points]
    segment_count = len(pts) - 1
    closed = len(pts) > 3 and pts[0] == pts[-1]
    for i in range(segment_count):
        for j in range(i + 2, segment_count):
            if closed and i == 0 and j == segment_count - 1:
                continue
            if segments_intersect(pts[i], pts[i + 1], pts[j], pts[j + 1]):
                return True
    return False
