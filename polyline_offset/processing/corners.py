"""
Corner joins for polyline offsetting.

Computes the offset point at a vertex from the normals of its two
segments. The regular case is a closed-form miter join. Vertices where
the miter is unstable (U-turns) or undefined (collinear segments with
different distances) are dispatched on the configured policy.

All angle tests are done by the caller on the cosine between the two
unit normals, which equals the cosine of the turn angle.
"""

from typing import List
import logging
import math

from ..config import CollinearPolicy, UTurnPolicy
from ..errors import CollinearUnequalDistanceError, OffsetError, UTurnExceededError
from ..models.geometry import Point2D
from ..utils.math_utils import angle_from_cosine, intersect_rays
from .deferred import ProjectFix, ProportionalFix

logger = logging.getLogger(__name__)


def offset_corner(
    pt: Point2D,
    dist: float,
    n_prev: Point2D,
    n_next: Point2D,
    cosine: float
) -> Point2D:
    """
    Miter join for a constant offset distance.

    pt + (n_prev + n_next) * dist / (1 + cosine)

    Exact for every turn below 180 degrees, but blows up as cosine
    approaches -1. Callers route turns beyond the U-turn threshold to
    handle_u_turn() instead.

    Args:
        pt: Vertex
        dist: Offset distance
        n_prev, n_next: Unit normals of the incoming and outgoing segment
        cosine: Precomputed n_prev.dot(n_next)

    Returns:
        Offset point
    """
    f = dist / (1.0 + cosine)
    return Point2D(pt.x + (n_prev.x + n_next.x) * f, pt.y + (n_prev.y + n_next.y) * f)


def offset_corner_variable(
    pt: Point2D,
    dist_prev: float,
    dist_next: float,
    n_prev: Point2D,
    n_next: Point2D,
    cosine: float
) -> Point2D:
    """
    Miter join for two different offset distances.

    Same result as intersecting both offset segment lines, without
    calling a line intersection: the miter for dist_next is shifted along
    the outgoing segment so that the incoming line moves by the distance
    difference. Only valid for segments that are neither collinear nor a
    U-turn.

    Args:
        pt: Vertex
        dist_prev, dist_next: Offset distances of the incoming and outgoing segment
        n_prev, n_next: Unit normals of the incoming and outgoing segment
        cosine: Precomputed n_prev.dot(n_next)

    Returns:
        Offset point
    """
    delta = dist_prev - dist_next
    v_next = n_next.rotate90_cw()  # unit vector along the outgoing segment
    cos2 = n_prev.dot(v_next)      # non-zero because the segments are not collinear
    shift = delta / cos2
    f = dist_next / (1.0 + cosine)
    return Point2D(
        pt.x + v_next.x * shift + (n_prev.x + n_next.x) * f,
        pt.y + v_next.y * shift + (n_prev.y + n_next.y) * f
    )


def intersect_from_normals(
    from_a: Point2D, n_a: Point2D,
    from_b: Point2D, n_b: Point2D
) -> Point2D:
    """
    Intersect two lines given by a point and their normal (not their direction).

    Raises:
        OffsetError: If the lines are parallel
    """
    hit = intersect_rays(from_a, n_a.rotate90_cw(), from_b, n_b.rotate90_cw())
    if hit is None:
        raise OffsetError(
            f"Offset lines through ({from_a.x}, {from_a.y}) and ({from_b.x}, {from_b.y}) are parallel"
        )
    return hit


def _chamfer_normal(n_prev: Point2D, n_next: Point2D) -> Point2D:
    """Unit normal of the chamfer edge, on the same side as n_prev."""
    chamfer_tangent = (n_prev - n_next).unitized()
    chamfer_normal = chamfer_tangent.rotate90_ccw()
    if chamfer_normal.dot(n_prev) >= 0.0:
        return chamfer_normal
    return -chamfer_normal


def _raise_u_turn(index: int, pt: Point2D, cosine: float, u_turn_cosine: float) -> None:
    angle = angle_from_cosine(cosine)
    max_angle = angle_from_cosine(u_turn_cosine)
    raise UTurnExceededError(
        f"Point {index} at ({pt.x}, {pt.y}) makes a {angle:.4f} degree U-turn, "
        f"max {max_angle:.4f} is allowed",
        index=index,
        angle_degrees=angle,
        max_angle_degrees=max_angle
    )


def handle_u_turn(
    index: int,
    pt: Point2D,
    cosine: float,
    n_prev: Point2D,
    n_next: Point2D,
    dist: float,
    res: List[Point2D],
    policy: UTurnPolicy,
    u_turn_cosine: float
) -> None:
    """
    Apply the U-turn policy at a vertex with one offset distance.

    Appends zero, one or two points to res.

    Raises:
        UTurnExceededError: Under UTurnPolicy.FAIL
        ValueError: For an unknown policy
    """
    if policy is UTurnPolicy.FAIL:
        _raise_u_turn(index, pt, cosine, u_turn_cosine)

    elif policy is UTurnPolicy.CHAMFER:
        n_mid = _chamfer_normal(n_prev, n_next)
        cos_half = n_mid.dot(n_prev)  # same angle on both sides of the chamfer
        res.append(offset_corner(pt, dist, n_prev, n_mid, cos_half))
        res.append(offset_corner(pt, dist, n_mid, n_next, cos_half))
        logger.debug(f"Chamfered U-turn at point {index} ({angle_from_cosine(cosine):.2f} degrees)")

    elif policy is UTurnPolicy.USE_THRESHOLD:
        # Points into the tip of the U-turn, length close to 2.0
        mid = n_prev.rotate90_cw() + n_next.rotate90_ccw()
        cos_half = math.sqrt((1.0 + u_turn_cosine) / 2.0)
        # Left turns offset into the hairpin, right turns beyond its tip
        side = -1.0 if n_prev.cross(n_next) < 0.0 else 1.0
        # hypotenuse = adjacent / cos; halved because mid has length ~2
        res.append(pt - mid * (side * 0.5 * dist / cos_half))
        logger.debug(f"Used threshold angle at U-turn point {index}")

    elif policy is UTurnPolicy.SKIP:
        logger.debug(f"Skipped U-turn point {index}")

    else:
        raise ValueError(f"Unknown U-turn policy: {policy!r}")


def handle_u_turn_variable(
    index: int,
    pt: Point2D,
    cosine: float,
    n_prev: Point2D,
    n_next: Point2D,
    dist_prev: float,
    dist_next: float,
    res: List[Point2D],
    policy: UTurnPolicy,
    u_turn_cosine: float
) -> None:
    """
    Apply the U-turn policy at a vertex whose two segments have different distances.

    Appends zero, one or two points to res. Since the distances differ,
    points are found by intersecting offset lines instead of the
    closed-form miter.

    Raises:
        UTurnExceededError: Under UTurnPolicy.FAIL
        ValueError: For an unknown policy
    """
    if policy is UTurnPolicy.FAIL:
        _raise_u_turn(index, pt, cosine, u_turn_cosine)

    elif policy is UTurnPolicy.CHAMFER:
        n_mid = _chamfer_normal(n_prev, n_next)
        dist_mid = (dist_prev + dist_next) * 0.5
        mid_off = pt + n_mid * dist_mid
        res.append(intersect_from_normals(pt + n_prev * dist_prev, n_prev, mid_off, n_mid))
        res.append(intersect_from_normals(mid_off, n_mid, pt + n_next * dist_next, n_next))
        logger.debug(f"Chamfered U-turn at point {index} ({angle_from_cosine(cosine):.2f} degrees)")

    elif policy is UTurnPolicy.USE_THRESHOLD:
        cos_half = math.sqrt((1.0 + u_turn_cosine) / 2.0)
        sin_half = math.sqrt(1.0 - cos_half * cos_half)
        if n_prev.cross(n_next) < 0.0:
            # Right turn, the threshold lines meet beyond the tip
            sin_half = -sin_half
        n_mid = (n_prev.rotate90_cw() + n_next.rotate90_ccw()).unitized()
        # Normals as if the turn were exactly the threshold angle
        n_prev_thresh = n_mid.rotate_by(cos_half, -sin_half)
        n_next_thresh = n_mid.rotate_by(cos_half, sin_half)
        res.append(intersect_from_normals(
            pt + n_prev * dist_prev, n_prev_thresh,
            pt + n_next * dist_next, n_next_thresh
        ))
        logger.debug(f"Used threshold angle at U-turn point {index}")

    elif policy is UTurnPolicy.SKIP:
        logger.debug(f"Skipped U-turn point {index}")

    else:
        raise ValueError(f"Unknown U-turn policy: {policy!r}")


def handle_collinear(
    index: int,
    pt: Point2D,
    n_prev: Point2D,
    n_next: Point2D,
    dist_prev: float,
    dist_next: float,
    res: List[Point2D],
    proportional_fixes: List[ProportionalFix],
    project_fixes: List[ProjectFix],
    policy: CollinearPolicy
) -> None:
    """
    Apply the collinear policy at a vertex between collinear segments
    with different offset distances.

    PROPORTIONAL and PROJECT append a placeholder and record it for the
    deferred pass in processing.deferred.

    Raises:
        CollinearUnequalDistanceError: Under CollinearPolicy.FAIL
        ValueError: For an unknown policy
    """
    if policy is CollinearPolicy.FAIL:
        raise CollinearUnequalDistanceError(
            f"Segments before and after point {index} at ({pt.x}, {pt.y}) are collinear "
            f"but have different offset distances {dist_prev} and {dist_next}",
            index=index,
            distance_prev=dist_prev,
            distance_next=dist_next
        )

    elif policy is CollinearPolicy.SKIP:
        logger.debug(f"Skipped collinear point {index}")

    elif policy is CollinearPolicy.PROPORTIONAL:
        # Output and input indices drift apart after chamfers, skips and steps
        proportional_fixes.append(ProportionalFix(idx_res=len(res), idx_orig=index))
        res.append(pt)

    elif policy is CollinearPolicy.PROJECT:
        project_fixes.append(ProjectFix(idx=len(res), direction=n_prev + n_next))
        res.append(pt)

    elif policy is CollinearPolicy.STEP_WITH_TWO_POINTS:
        res.append(pt + n_prev * dist_prev)
        res.append(pt + n_next * dist_next)
        logger.debug(f"Added step at collinear point {index}")

    else:
        raise ValueError(f"Unknown collinear policy: {policy!r}")
