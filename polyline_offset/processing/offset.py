"""
Polyline offset engine.

Moves every segment of a polyline sideways along its left normal and
joins the moved segments at each vertex. Positive distances move to the
left of the walking direction, so a counter-clockwise loop shrinks.

Two loops exist, one for a constant distance and one for a distance per
segment. Both are a single scan over the vertices carrying only the
previous normal (and distance). The variable loop may leave placeholders
that a second pass in processing.deferred resolves.

Entry points:
    offset()                      constant distance, fails on sharp U-turns
    offset_with_policy()          constant distance, explicit U-turn policy
    offset_variable()             distance per segment, fails on degenerate vertices
    offset_variable_with_policy() distance per segment, explicit policies
    offset_with_config()          either of the above from an OffsetConfig
    offset_with_directions() and offset_variable_with_directions() take
    precomputed normals and every parameter explicitly.
"""

from typing import List, Sequence, Union
import logging

from ..config import (
    CollinearPolicy,
    UTurnPolicy,
    OffsetConfig,
    DEFAULT_CONFIG,
    DEFAULT_U_TURN_COSINE,
    POLICY_U_TURN_COSINE,
    DEFAULT_COLLINEAR_COSINE,
    EQUAL_DISTANCE_TOLERANCE,
    ZERO_DISTANCE_TOLERANCE,
)
from ..errors import InvalidInputSizeError
from ..models.geometry import Point2D
from ..utils.polygon_utils import is_closed
from .normals import make_offset_directions
from .corners import (
    offset_corner,
    offset_corner_variable,
    handle_u_turn,
    handle_u_turn_variable,
    handle_collinear,
)
from .deferred import (
    ProjectFix,
    ProportionalFix,
    distribute_proportionally,
    project_onto_anchors,
)

logger = logging.getLogger(__name__)


def _check_counts(points: Sequence[Point2D], normals: Sequence[Point2D]) -> None:
    if len(points) < 2:
        raise InvalidInputSizeError(
            f"A polyline needs at least 2 points, got {len(points)}"
        )
    if len(normals) != len(points) - 1:
        raise InvalidInputSizeError(
            f"Expected {len(points) - 1} normals for {len(points)} points, got {len(normals)}"
        )


def _check_u_turn_cosine(u_turn_cosine: float) -> None:
    if not (-1.0 < u_turn_cosine <= 0.0):
        raise ValueError(f"u_turn_cosine must be in (-1, 0], got {u_turn_cosine}")


def _unchanged(points: Sequence[Point2D]) -> List[Point2D]:
    """Copy of the input for a zero offset, without the closing point of a loop."""
    if len(points) < 2:
        raise InvalidInputSizeError(
            f"A polyline needs at least 2 points, got {len(points)}"
        )
    if is_closed(points):
        return list(points[:-1])
    return list(points)


def offset_with_directions(
    points: Sequence[Point2D],
    normals: Sequence[Point2D],
    distance: float,
    u_turn_policy: UTurnPolicy,
    u_turn_cosine: float
) -> List[Point2D]:
    """
    Offset a polyline by a constant distance, using precomputed normals.

    Without U-turns the output has as many points as the input, and a
    closed input gives a closed output.

    Args:
        points: Polyline vertices (at least 2)
        normals: Unit left normal per segment, see make_offset_directions()
        distance: Offset distance, positive to the left
        u_turn_policy: What to do at vertices turning at least the threshold angle
        u_turn_cosine: Cosine of the threshold angle, in (-1, 0]

    Returns:
        New list of offset points

    Raises:
        InvalidInputSizeError: Too few points, or normal count does not match
        UTurnExceededError: At a U-turn under UTurnPolicy.FAIL
    """
    _check_counts(points, normals)
    _check_u_turn_cosine(u_turn_cosine)

    closed = is_closed(points)
    res: List[Point2D] = []

    if closed:
        # The first vertex joins the last segment
        n_prev = normals[-1]
        start = 0
    else:
        # End points have a single segment, no miter
        n_prev = normals[0]
        res.append(points[0] + n_prev * distance)
        start = 1

    for i in range(start, len(normals)):
        pt = points[i]
        n_next = normals[i]
        cosine = n_prev.dot(n_next)
        if cosine > u_turn_cosine:
            res.append(offset_corner(pt, distance, n_prev, n_next, cosine))
        else:
            handle_u_turn(i, pt, cosine, n_prev, n_next, distance, res, u_turn_policy, u_turn_cosine)
        n_prev = n_next

    if closed:
        if res:
            res.append(res[0])
    else:
        res.append(points[-1] + normals[-1] * distance)

    return res


def offset_variable_with_directions(
    points: Sequence[Point2D],
    normals: Sequence[Point2D],
    distances: Sequence[float],
    collinear_policy: CollinearPolicy,
    u_turn_policy: UTurnPolicy,
    collinear_cosine: float,
    u_turn_cosine: float
) -> List[Point2D]:
    """
    Offset each segment of a polyline by its own distance, using precomputed normals.

    Vertices whose two distances are equal are joined exactly like in
    offset_with_directions(). Otherwise the two offset segment lines are
    intersected, which has no solution for collinear segments; those
    vertices are handled by collinear_policy.

    Args:
        points: Polyline vertices (at least 2)
        normals: Unit left normal per segment, see make_offset_directions()
        distances: Offset distance per segment, positive to the left
        collinear_policy: What to do at collinear vertices with unequal distances
        u_turn_policy: What to do at vertices turning at least the threshold angle
        collinear_cosine: Cosine at or above which segments count as collinear, in [0, 1)
        u_turn_cosine: Cosine of the U-turn threshold angle, in (-1, 0]

    Returns:
        New list of offset points

    Raises:
        InvalidInputSizeError: Too few points, or normal or distance count does not match
        UTurnExceededError: At a U-turn under UTurnPolicy.FAIL
        CollinearUnequalDistanceError: At a collinear vertex under CollinearPolicy.FAIL
    """
    _check_counts(points, normals)
    if len(distances) != len(normals):
        raise InvalidInputSizeError(
            f"Expected {len(normals)} distances for {len(normals)} segments, got {len(distances)}"
        )
    _check_u_turn_cosine(u_turn_cosine)
    if not (0.0 <= collinear_cosine < 1.0):
        raise ValueError(f"collinear_cosine must be in [0, 1), got {collinear_cosine}")

    closed = is_closed(points)
    res: List[Point2D] = []
    proportional_fixes: List[ProportionalFix] = []
    project_fixes: List[ProjectFix] = []

    if closed:
        n_prev = normals[-1]
        d_prev = distances[-1]
        start = 0
    else:
        n_prev = normals[0]
        d_prev = distances[0]
        res.append(points[0] + n_prev * d_prev)
        start = 1

    for i in range(start, len(normals)):
        pt = points[i]
        n_next = normals[i]
        d_next = distances[i]
        cosine = n_prev.dot(n_next)

        if abs(d_prev - d_next) < EQUAL_DISTANCE_TOLERANCE:
            if cosine > u_turn_cosine:
                res.append(offset_corner(pt, d_next, n_prev, n_next, cosine))
            else:
                handle_u_turn(i, pt, cosine, n_prev, n_next, d_next, res, u_turn_policy, u_turn_cosine)

        elif cosine > u_turn_cosine:
            if cosine < collinear_cosine:
                res.append(offset_corner_variable(pt, d_prev, d_next, n_prev, n_next, cosine))
            else:
                handle_collinear(
                    i, pt, n_prev, n_next, d_prev, d_next,
                    res, proportional_fixes, project_fixes, collinear_policy
                )

        else:
            handle_u_turn_variable(
                i, pt, cosine, n_prev, n_next, d_prev, d_next, res, u_turn_policy, u_turn_cosine
            )

        n_prev = n_next
        d_prev = d_next

    if closed:
        if res:
            res.append(res[0])
    else:
        res.append(points[-1] + normals[-1] * distances[-1])

    if proportional_fixes:
        distribute_proportionally(res, proportional_fixes, points)
    elif project_fixes:
        project_onto_anchors(res, project_fixes)

    return res


def offset(points: Sequence[Point2D], distance: float) -> List[Point2D]:
    """
    Offset a polyline by a constant distance.

    Fails at vertices turning 177.5 degrees or more. A distance of zero
    returns a copy of the input, without the closing point of a loop.

    Args:
        points: Polyline vertices (at least 2)
        distance: Offset distance, positive to the left

    Returns:
        New list of offset points

    Raises:
        InvalidInputSizeError: If there are fewer than 2 points
        DegenerateSegmentError: If two consecutive points coincide
        UTurnExceededError: At a U-turn of 177.5 degrees or more
    """
    if abs(distance) < ZERO_DISTANCE_TOLERANCE:
        return _unchanged(points)
    normals = make_offset_directions(points)
    return offset_with_directions(points, normals, distance, UTurnPolicy.FAIL, DEFAULT_U_TURN_COSINE)


def offset_with_policy(
    points: Sequence[Point2D],
    distance: float,
    u_turn_policy: UTurnPolicy,
    u_turn_cosine: float = POLICY_U_TURN_COSINE
) -> List[Point2D]:
    """
    Offset a polyline by a constant distance with an explicit U-turn policy.

    Args:
        points: Polyline vertices (at least 2)
        distance: Offset distance, positive to the left
        u_turn_policy: What to do at vertices turning at least the threshold angle
        u_turn_cosine: Cosine of the threshold angle (default: 175 degrees)

    Returns:
        New list of offset points
    """
    if abs(distance) < ZERO_DISTANCE_TOLERANCE:
        return _unchanged(points)
    normals = make_offset_directions(points)
    return offset_with_directions(points, normals, distance, u_turn_policy, u_turn_cosine)


def offset_variable(points: Sequence[Point2D], distances: Sequence[float]) -> List[Point2D]:
    """
    Offset each segment of a polyline by its own distance.

    Fails at U-turns of 175 degrees or more and at collinear segments
    with different distances.

    Args:
        points: Polyline vertices (at least 2)
        distances: Offset distance per segment, positive to the left

    Returns:
        New list of offset points
    """
    return offset_variable_with_policy(points, distances, UTurnPolicy.FAIL, CollinearPolicy.FAIL)


def offset_variable_with_policy(
    points: Sequence[Point2D],
    distances: Sequence[float],
    u_turn_policy: UTurnPolicy,
    collinear_policy: CollinearPolicy,
    u_turn_cosine: float = POLICY_U_TURN_COSINE,
    collinear_cosine: float = DEFAULT_COLLINEAR_COSINE
) -> List[Point2D]:
    """
    Offset each segment of a polyline by its own distance with explicit policies.

    If every distance is zero a copy of the input is returned, without
    the closing point of a loop.
    """
    if distances and all(abs(d) < ZERO_DISTANCE_TOLERANCE for d in distances):
        if len(distances) != len(points) - 1:
            raise InvalidInputSizeError(
                f"Expected {len(points) - 1} distances for {len(points)} points, got {len(distances)}"
            )
        return _unchanged(points)
    normals = make_offset_directions(points)
    return offset_variable_with_directions(
        points, normals, distances,
        collinear_policy, u_turn_policy,
        collinear_cosine, u_turn_cosine
    )


def offset_with_config(
    points: Sequence[Point2D],
    distance_or_distances: Union[float, Sequence[float]],
    config: OffsetConfig = DEFAULT_CONFIG
) -> List[Point2D]:
    """
    Offset a polyline with the policies and thresholds of a config.

    A single number offsets every segment by the same distance, a
    sequence gives one distance per segment.

    Args:
        points: Polyline vertices (at least 2)
        distance_or_distances: Offset distance, or one distance per segment
        config: Policies and thresholds (default: DEFAULT_CONFIG)

    Returns:
        New list of offset points
    """
    if isinstance(distance_or_distances, (int, float)):
        logger.debug(
            f"Offsetting {len(points)} points by {distance_or_distances} "
            f"(U-turns: {config.u_turn_policy.value})"
        )
        return offset_with_policy(
            points, float(distance_or_distances),
            config.u_turn_policy, config.u_turn_cosine
        )

    logger.debug(
        f"Offsetting {len(points)} points by {len(distance_or_distances)} distances "
        f"(U-turns: {config.u_turn_policy.value}, collinear: {config.collinear_policy.value})"
    )
    return offset_variable_with_policy(
        points, list(distance_or_distances),
        config.u_turn_policy, config.collinear_policy,
        config.u_turn_cosine, config.collinear_cosine
    )
