"""
Mathematical utilities for the polyline offset engine.

Provides ray intersection and small scalar helpers.
"""

from typing import Optional
import math

from ..config import MAX_RAY_PARAMETER
from ..models.geometry import Point2D


def ray_parameter(
    p_a: Point2D, v_a: Point2D,
    p_b: Point2D, v_b: Point2D
) -> float:
    """
    Parameter on ray A where it crosses ray B.

    Rays are infinite lines given by a start point and a direction.
    The crossing point is p_a + v_a * t.

    Args:
        p_a, v_a: Start point and direction of the first ray
        p_b, v_b: Start point and direction of the second ray

    Returns:
        The parameter t on ray A, NaN if the directions are exactly
        parallel, and a very large value for almost parallel rays
    """
    det = v_a.x * v_b.y - v_a.y * v_b.x  # zero for parallel directions
    if det == 0.0:
        return math.nan

    dx = p_b.x - p_a.x
    dy = p_b.y - p_a.y
    return (dx * v_b.y - dy * v_b.x) / det


def intersect_rays(
    p_a: Point2D, v_a: Point2D,
    p_b: Point2D, v_b: Point2D
) -> Optional[Point2D]:
    """
    Find the intersection point of two infinite rays.

    Args:
        p_a, v_a: Start point and direction of the first ray
        p_b, v_b: Start point and direction of the second ray

    Returns:
        Intersection point, or None if the rays are parallel or cross
        further out than MAX_RAY_PARAMETER
    """
    t = ray_parameter(p_a, v_a, p_b, v_b)

    # NaN fails both comparisons
    if -MAX_RAY_PARAMETER < t < MAX_RAY_PARAMETER:
        return Point2D(p_a.x + v_a.x * t, p_a.y + v_a.y * t)

    return None


def angle_from_cosine(cosine: float) -> float:
    """
    Angle in degrees for a cosine, tolerating float noise outside [-1, 1].

    Only used to build readable error messages; all comparisons are
    done on cosines.
    """
    return math.degrees(math.acos(clamp(cosine, -1.0, 1.0)))


def clamp(value: float, min_val: float, max_val: float) -> float:
    """
    Clamp value to [min_val, max_val] range.

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))
