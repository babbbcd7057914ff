"""
Configuration constants for the polyline offset engine.

Contains tolerances, the precomputed cosine thresholds used for all
angle comparisons, the degenerate-case policy enums, and the runtime
configuration dataclass.
"""

from dataclasses import dataclass
from enum import Enum
import math


# =============================================================================
# DEGENERATE-CASE POLICIES
# =============================================================================

class UTurnPolicy(Enum):
    """
    What to do at a vertex that turns back on itself (close to 180 degrees).

    A miter join cannot be computed reliably there, so one of these
    strategies is applied once the turn exceeds the configured threshold.

    FAIL: Raise UTurnExceededError.

    CHAMFER: Replace the miter point by two points, cutting the corner flat.
             Adds one point to the output.

    USE_THRESHOLD: Compute the offset point as if the turn were exactly the
                   threshold angle. Keeps the point count, but the offset is
                   locally too short.

    SKIP: Drop the vertex. The output has one point less and a single
          straight edge cuts across the U-turn.
    """
    FAIL = "fail"
    CHAMFER = "chamfer"
    USE_THRESHOLD = "use_threshold"
    SKIP = "skip"


class CollinearPolicy(Enum):
    """
    What to do at a vertex between collinear segments with different
    offset distances (variable offsets only).

    FAIL: Raise CollinearUnequalDistanceError.

    SKIP: Drop the vertex. Reduces the point count.

    PROPORTIONAL: Place the point on the line between its resolved
                  neighbours, at the same relative position the input vertex
                  has between its input neighbours. Keeps the point count.

    PROJECT: Move the point along the sum of both segment normals onto the
             line between its resolved neighbours. Keeps the point count.
             At shallow angles with very different distances the point can
             land outside the neighbour span.

    STEP_WITH_TWO_POINTS: Emit one point per distance, giving a small step.
                          Keeps every offset edge parallel, adds one point.
    """
    FAIL = "fail"
    SKIP = "skip"
    PROPORTIONAL = "proportional"
    PROJECT = "project"
    STEP_WITH_TWO_POINTS = "step_with_two_points"


# =============================================================================
# TOLERANCES
# =============================================================================

# First and last point closer than this (squared) means a closed polyline
SQ_OPEN_TOLERANCE = 1e-12

# Offset distances below this return the input unchanged
ZERO_DISTANCE_TOLERANCE = 1e-12

# Segments shorter than this cannot produce a normal
MIN_SEGMENT_LENGTH = 1e-6

# Neighbouring distances closer than this are treated as equal
EQUAL_DISTANCE_TOLERANCE = 1e-6

# Ray intersections beyond this parameter count as parallel
MAX_RAY_PARAMETER = 1e12

# =============================================================================
# COSINE THRESHOLDS
# =============================================================================
# Angles are compared as dot products of unit normals against these values,
# never through acos. The angle is the one between two consecutive segment
# normals, which equals the turn angle at the vertex.

COS_175 = math.cos(math.radians(175.0))      # -0.9961946980917455
COS_177_5 = math.cos(math.radians(177.5))    # -0.9990482215818578
COS_179 = math.cos(math.radians(179.0))      # -0.9998476951563913
COS_2_5 = math.cos(math.radians(2.5))        # 0.9990482215818578

# U-turn threshold for offset(): fail only on really sharp reversals
DEFAULT_U_TURN_COSINE = COS_177_5

# U-turn threshold when a policy is given explicitly
POLICY_U_TURN_COSINE = COS_175

# Segments closer than 2.5 degrees count as collinear
DEFAULT_COLLINEAR_COSINE = COS_2_5


# =============================================================================
# RUNTIME CONFIGURATION
# =============================================================================

@dataclass
class OffsetConfig:
    """
    Runtime configuration for an offset call.

    Bundles both policies with the thresholds at which they kick in,
    so that callers can keep one validated object around instead of
    passing four arguments to every call.
    """

    u_turn_policy: UTurnPolicy = UTurnPolicy.FAIL
    collinear_policy: CollinearPolicy = CollinearPolicy.FAIL

    # Turns whose normal cosine is at or below this use u_turn_policy
    u_turn_cosine: float = DEFAULT_U_TURN_COSINE

    # Turns whose normal cosine is at or above this count as collinear
    collinear_cosine: float = DEFAULT_COLLINEAR_COSINE

    def __post_init__(self):
        """Validate configuration values."""
        if not isinstance(self.u_turn_policy, UTurnPolicy):
            raise ValueError(f"u_turn_policy must be a UTurnPolicy, got {self.u_turn_policy!r}")

        if not isinstance(self.collinear_policy, CollinearPolicy):
            raise ValueError(
                f"collinear_policy must be a CollinearPolicy, got {self.collinear_policy!r}"
            )

        if not (-1.0 < self.u_turn_cosine <= 0.0):
            raise ValueError(
                f"u_turn_cosine must be in (-1, 0], got {self.u_turn_cosine}"
            )

        if not (0.0 <= self.collinear_cosine < 1.0):
            raise ValueError(
                f"collinear_cosine must be in [0, 1), got {self.collinear_cosine}"
            )


# Default configuration instance
DEFAULT_CONFIG = OffsetConfig()
