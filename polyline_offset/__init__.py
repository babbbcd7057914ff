"""
Polyline Offset

Offsets open and closed 2D polylines by a constant distance or by one
distance per segment, with explicit policies for sharp U-turns and for
collinear segments whose distances differ.

Usage:
    from polyline_offset import Polyline2D, UTurnPolicy

    square = Polyline2D.from_tuples([(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)])
    inner = square.offset(1.0)
    outer = square.offset(-1.0, u_turn_policy=UTurnPolicy.CHAMFER)
"""

__version__ = "0.1.0"

from .config import (
    UTurnPolicy,
    CollinearPolicy,
    OffsetConfig,
    DEFAULT_CONFIG,
    COS_175,
    COS_177_5,
    COS_179,
    COS_2_5,
)
from .errors import (
    OffsetError,
    InvalidInputSizeError,
    DegenerateSegmentError,
    UTurnExceededError,
    CollinearUnequalDistanceError,
)
from .models import Point2D, Line2D, Polyline2D
from .processing import (
    make_offset_directions,
    offset,
    offset_with_policy,
    offset_with_directions,
    offset_variable,
    offset_variable_with_policy,
    offset_variable_with_directions,
    offset_with_config,
)

__all__ = [
    'UTurnPolicy',
    'CollinearPolicy',
    'OffsetConfig',
    'DEFAULT_CONFIG',
    'COS_175',
    'COS_177_5',
    'COS_179',
    'COS_2_5',
    'OffsetError',
    'InvalidInputSizeError',
    'DegenerateSegmentError',
    'UTurnExceededError',
    'CollinearUnequalDistanceError',
    'Point2D',
    'Line2D',
    'Polyline2D',
    'make_offset_directions',
    'offset',
    'offset_with_policy',
    'offset_with_directions',
    'offset_variable',
    'offset_variable_with_policy',
    'offset_variable_with_directions',
    'offset_with_config',
]
