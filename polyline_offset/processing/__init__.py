"""
Processing modules for the polyline offset engine.

Contains segment normals, corner joins, the deferred collinear pass,
and the offset loops with their entry points.
"""

from .normals import make_offset_directions
from .corners import (
    offset_corner,
    offset_corner_variable,
    intersect_from_normals,
)
from .deferred import (
    ProportionalFix,
    ProjectFix,
    distribute_proportionally,
    project_onto_anchors,
)
from .offset import (
    offset,
    offset_with_policy,
    offset_with_directions,
    offset_variable,
    offset_variable_with_policy,
    offset_variable_with_directions,
    offset_with_config,
)

__all__ = [
    'make_offset_directions',
    'offset_corner',
    'offset_corner_variable',
    'intersect_from_normals',
    'ProportionalFix',
    'ProjectFix',
    'distribute_proportionally',
    'project_onto_anchors',
    'offset',
    'offset_with_policy',
    'offset_with_directions',
    'offset_variable',
    'offset_variable_with_policy',
    'offset_variable_with_directions',
    'offset_with_config',
]
