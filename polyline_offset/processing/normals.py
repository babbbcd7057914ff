"""
Segment normals for polyline offsetting.

Each segment gets the unit vector perpendicular to it, pointing to the
left of the walking direction. Offsetting moves segments along these
normals, so on a counter-clockwise loop they point inward.
"""

from typing import List, Sequence
import math

from ..config import MIN_SEGMENT_LENGTH
from ..errors import DegenerateSegmentError, InvalidInputSizeError
from ..models.geometry import Point2D


def make_offset_directions(points: Sequence[Point2D]) -> List[Point2D]:
    """
    Compute one unit normal per polyline segment.

    The segment vector is unitized and rotated 90 degrees
    counter-clockwise. Duplicate points are not skipped; clean the input
    with remove_duplicate_points() first if it may contain any.

    Args:
        points: Polyline vertices (at least 2)

    Returns:
        List of unit normals, one shorter than points

    Raises:
        InvalidInputSizeError: If there are fewer than 2 points
        DegenerateSegmentError: If two consecutive points coincide
    """
    if len(points) < 2:
        raise InvalidInputSizeError(
            f"A polyline needs at least 2 points, got {len(points)}"
        )

    normals = []
    prev = points[0]
    for i in range(1, len(points)):
        p = points[i]
        dx = p.x - prev.x
        dy = p.y - prev.y
        length = math.sqrt(dx * dx + dy * dy)
        if length < MIN_SEGMENT_LENGTH:
            raise DegenerateSegmentError(
                f"Points {i - 1} and {i} are the same at ({prev.x}, {prev.y})",
                index=i
            )
        # Unit direction rotated 90 degrees CCW: (x, y) -> (-y, x)
        normals.append(Point2D(-dy / length, dx / length))
        prev = p

    return normals
