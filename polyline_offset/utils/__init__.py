"""
Utility functions for the polyline offset engine.
"""

from .math_utils import (
    ray_parameter,
    intersect_rays,
    angle_from_cosine,
    clamp,
)
from .polygon_utils import (
    is_closed,
    polygon_signed_area,
    is_clockwise,
    reverse_ring,
    ensure_ccw,
    remove_duplicate_points,
)

__all__ = [
    'ray_parameter',
    'intersect_rays',
    'angle_from_cosine',
    'clamp',
    'is_closed',
    'polygon_signed_area',
    'is_clockwise',
    'reverse_ring',
    'ensure_ccw',
    'remove_duplicate_points',
]
