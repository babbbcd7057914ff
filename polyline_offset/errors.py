"""
Exceptions raised by the polyline offset engine.

All of them derive from OffsetError, which is a ValueError, so callers
that only care about "bad input" can catch one type.
"""

from typing import Optional


class OffsetError(ValueError):
    """Raised when a polyline cannot be offset."""
    pass


class InvalidInputSizeError(OffsetError):
    """Raised when point, normal or distance counts are invalid or do not match."""
    pass


class DegenerateSegmentError(OffsetError):
    """Raised when a segment is too short to have a direction."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class UTurnExceededError(OffsetError):
    """Raised when a vertex turns back sharper than allowed under UTurnPolicy.FAIL."""

    def __init__(self, message: str, index: int, angle_degrees: float, max_angle_degrees: float):
        super().__init__(message)
        self.index = index
        self.angle_degrees = angle_degrees
        self.max_angle_degrees = max_angle_degrees


class CollinearUnequalDistanceError(OffsetError):
    """Raised for collinear segments with different distances under CollinearPolicy.FAIL."""

    def __init__(self, message: str, index: int, distance_prev: float, distance_next: float):
        super().__init__(message)
        self.index = index
        self.distance_prev = distance_prev
        self.distance_next = distance_next
