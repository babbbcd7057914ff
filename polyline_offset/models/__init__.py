"""
Data models for the polyline offset engine.
"""

from .geometry import Point2D, Line2D, Polyline2D

__all__ = [
    'Point2D', 'Line2D', 'Polyline2D',
]
