"""
Polyline and polygon ring utilities for the polyline offset engine.

Provides the open/closed test, signed area and winding helpers, and
duplicate point removal for cleaning input before offsetting.
"""

from typing import List, Sequence

from ..config import MIN_SEGMENT_LENGTH, SQ_OPEN_TOLERANCE
from ..models.geometry import Point2D


def is_closed(points: Sequence[Point2D], sq_tolerance: float = SQ_OPEN_TOLERANCE) -> bool:
    """
    Check if a polyline is closed.

    Args:
        points: Polyline vertices
        sq_tolerance: Squared distance below which first and last point coincide

    Returns:
        True if first and last point are (almost) the same
    """
    if len(points) < 2:
        return False
    return points[0].distance_sq_to(points[-1]) <= sq_tolerance


def polygon_signed_area(ring: Sequence[Point2D]) -> float:
    """
    Compute signed area of polygon using shoelace formula.

    Works for closed rings (last point repeating the first) and for
    rings given without the closing point.

    Args:
        ring: List of polygon vertices

    Returns:
        Signed area (positive = CCW, negative = CW)
    """
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y

    return area / 2.0


def is_clockwise(ring: Sequence[Point2D]) -> bool:
    """
    Check if polygon ring is clockwise.

    Args:
        ring: List of polygon vertices

    Returns:
        True if clockwise (negative area)
    """
    return polygon_signed_area(ring) < 0


def reverse_ring(ring: Sequence[Point2D]) -> List[Point2D]:
    """
    Reverse the order of vertices in a ring.

    Args:
        ring: List of polygon vertices

    Returns:
        Reversed list (changes winding direction, and with it the offset side)
    """
    return list(reversed(ring))


def ensure_ccw(ring: Sequence[Point2D]) -> List[Point2D]:
    """
    Ensure ring is counter-clockwise, reversing if needed.

    On a CCW ring a positive offset distance shrinks the shape.

    Args:
        ring: List of polygon vertices

    Returns:
        Ring in CCW order
    """
    if is_clockwise(ring):
        return reverse_ring(ring)
    return list(ring)


def remove_duplicate_points(
    points: Sequence[Point2D],
    min_distance: float = MIN_SEGMENT_LENGTH
) -> List[Point2D]:
    """
    Remove consecutive points closer than min_distance.

    The offset engine refuses zero-length segments, so input coming from
    sources with repeated vertices should be cleaned with this first.
    The first point is always kept. For a closed polyline the closing
    point is kept as well, dropping the vertex before it instead.

    Args:
        points: Polyline vertices
        min_distance: Minimum segment length to keep

    Returns:
        New list without near-duplicate neighbours
    """
    if len(points) < 2:
        return list(points)

    closed = is_closed(points)
    min_dist_sq = min_distance * min_distance

    result = [points[0]]
    for p in points[1:]:
        if p.distance_sq_to(result[-1]) >= min_dist_sq:
            result.append(p)

    # Re-close the ring if the closing point was merged away
    if closed and len(result) > 1:
        if result[-1].distance_sq_to(points[-1]) > 0.0:
            if result[-1].distance_sq_to(points[-1]) < min_dist_sq:
                result[-1] = points[-1]
            else:
                result.append(points[-1])
    elif closed:
        result.append(points[-1])

    return result
