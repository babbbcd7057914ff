"""
Core geometry types for the polyline offset engine.

Provides Point2D (also used as a 2D vector), Line2D and Polyline2D.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple
import math

from ..config import CollinearPolicy, UTurnPolicy, POLICY_U_TURN_COSINE
from ..errors import DegenerateSegmentError, OffsetError


@dataclass(frozen=True, slots=True)
class Point2D:
    """2D point or vector."""
    x: float
    y: float

    def __add__(self, other: 'Point2D') -> 'Point2D':
        """Vector addition."""
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        """Vector subtraction."""
        return Point2D(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> 'Point2D':
        """Scale by a scalar."""
        return Point2D(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> 'Point2D':
        """Divide by a scalar."""
        return Point2D(self.x / divisor, self.y / divisor)

    def __neg__(self) -> 'Point2D':
        """Reverse the vector."""
        return Point2D(-self.x, -self.y)

    def dot(self, other: 'Point2D') -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Point2D') -> float:
        """2D cross product (determinant, z-component of the 3D cross product)."""
        return self.x * other.y - self.y * other.x

    @property
    def length(self) -> float:
        """Vector length."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    @property
    def length_sq(self) -> float:
        """Squared vector length."""
        return self.x * self.x + self.y * self.y

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def distance_sq_to(self, other: 'Point2D') -> float:
        """Squared Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def unitized(self) -> 'Point2D':
        """
        Unit vector in the same direction.

        Raises:
            DegenerateSegmentError: If the vector has (almost) zero length
        """
        length = self.length
        if length < 1e-12:
            raise DegenerateSegmentError(f"Cannot unitize zero-length vector {self}")
        return Point2D(self.x / length, self.y / length)

    def rotate90_ccw(self) -> 'Point2D':
        """Rotate 90 degrees counter-clockwise."""
        return Point2D(-self.y, self.x)

    def rotate90_cw(self) -> 'Point2D':
        """Rotate 90 degrees clockwise."""
        return Point2D(self.y, -self.x)

    def rotate_by(self, cos: float, sin: float) -> 'Point2D':
        """Rotate by the angle given as cosine and sine; positive sine is counter-clockwise."""
        return Point2D(cos * self.x - sin * self.y, sin * self.x + cos * self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Line2D:
    """Finite line from start to end, also usable as an infinite ray."""
    start: Point2D
    end: Point2D

    @property
    def vector(self) -> Point2D:
        """Vector from start to end."""
        return self.end - self.start

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def evaluate_at(self, t: float) -> Point2D:
        """Point at parameter t; 0 is start, 1 is end. Not clamped."""
        return Point2D(
            self.start.x + (self.end.x - self.start.x) * t,
            self.start.y + (self.end.y - self.start.y) * t
        )

    def ray_closest_parameter(self, point: Point2D) -> float:
        """
        Parameter of the point on the infinite line closest to point.

        Not clamped to [0, 1].

        Raises:
            OffsetError: If the line is too short to define a direction
        """
        v = self.vector
        length_sq = v.length_sq
        if length_sq < 1e-12:
            raise OffsetError(f"Line from {self.start} to {self.end} is too short to project onto")
        return (point - self.start).dot(v) / length_sq


@dataclass
class Polyline2D:
    """
    Ordered sequence of 2D points, open or closed.

    A polyline is closed when its first and last point coincide.
    Offsetting returns a new Polyline2D; the points of this one are
    never modified.

    Winding convention:
        - Segment normals point to the left of the walking direction.
        - A positive distance therefore shrinks a counter-clockwise loop
          and grows a clockwise one.
    """
    points: List[Point2D] = field(default_factory=list)

    @staticmethod
    def from_tuples(coords: Iterable[Sequence[float]]) -> 'Polyline2D':
        """Create a polyline from (x, y) pairs."""
        return Polyline2D([Point2D(float(c[0]), float(c[1])) for c in coords])

    def as_tuples(self) -> List[Tuple[float, float]]:
        return [p.as_tuple() for p in self.points]

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_closed(self) -> bool:
        """True if first and last point coincide."""
        from ..utils.polygon_utils import is_closed
        return is_closed(self.points)

    @property
    def segment_count(self) -> int:
        return max(0, len(self.points) - 1)

    def signed_area(self) -> float:
        """
        Signed area of the loop (shoelace formula).
        Positive = CCW, Negative = CW.
        """
        from ..utils.polygon_utils import polygon_signed_area
        return polygon_signed_area(self.points)

    def is_ccw(self) -> bool:
        """Check if the loop is counter-clockwise."""
        return self.signed_area() > 0

    def reversed(self) -> 'Polyline2D':
        """New polyline walking the other way (flips the offset side)."""
        return Polyline2D(list(reversed(self.points)))

    def offset(
        self,
        distance: float,
        u_turn_policy: Optional[UTurnPolicy] = None,
        u_turn_cosine: Optional[float] = None
    ) -> 'Polyline2D':
        """
        Offset every segment by the same distance.

        Without a policy this fails at turns sharper than 177.5 degrees.
        With a policy, the policy applies beyond u_turn_cosine
        (default: 175 degrees).
        """
        from ..processing.offset import offset, offset_with_policy

        if u_turn_policy is None and u_turn_cosine is None:
            return Polyline2D(offset(self.points, distance))

        return Polyline2D(offset_with_policy(
            self.points,
            distance,
            u_turn_policy if u_turn_policy is not None else UTurnPolicy.FAIL,
            u_turn_cosine if u_turn_cosine is not None else POLICY_U_TURN_COSINE,
        ))

    def offset_variable(
        self,
        distances: Sequence[float],
        u_turn_policy: Optional[UTurnPolicy] = None,
        collinear_policy: Optional[CollinearPolicy] = None
    ) -> 'Polyline2D':
        """
        Offset each segment by its own distance.

        Unspecified policies default to FAIL.
        """
        from ..processing.offset import offset_variable_with_policy

        return Polyline2D(offset_variable_with_policy(
            self.points,
            distances,
            u_turn_policy if u_turn_policy is not None else UTurnPolicy.FAIL,
            collinear_policy if collinear_policy is not None else CollinearPolicy.FAIL,
        ))
