"""Planar geometry kernel for the descent simulation.

Provides the value types and primitive operations shared by the terrain
model, the curve evaluator, the trajectory planner and the dynamics:

- Point: immutable 2-D position or vector in world units [m]
- Segment: directed terrain edge between two points
- WorldBounds: the rectangular world [0, W) x [0, H)
- Distances, interpolation and reference-magnitude normalization

The planner validates thousands of candidate paths per cycle, so the
point-to-segment clearance test also exists as a numba-compiled kernel
operating on numpy arrays (`path_clearance`). Both implementations follow
the same projection-and-clamp rule.

Example:
    >>> from lander.geometry import Point, Segment, segment_distance
    >>>
    >>> ridge = Segment(Point(0.0, 0.0), Point(100.0, 100.0))
    >>> segment_distance(ridge, Point(100.0, 0.0))  # ~70.7 m
"""

import math
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

WORLD_WIDTH: float = 7000.0  # [m]
WORLD_HEIGHT: float = 3000.0  # [m]

# Length used by `normalize`; command scores are dot products of such vectors.
REFERENCE_MAGNITUDE: float = 1000.0


class DegenerateGeometryError(ValueError):
    """Raised when an operation is undefined for the given geometry.

    Typical cause is a zero-length segment, whose projection denominator
    vanishes. Callers are expected to recover, e.g. by treating the segment
    as a point.
    """


# =============================================================================
# Value Types
# =============================================================================


@dataclass(frozen=True)
class Point:
    """Immutable 2-D point or vector.

    Attributes:
        x: Horizontal coordinate [m]
        y: Vertical coordinate (altitude, positive up) [m]
    """
    x: float
    y: float

    def __post_init__(self) -> None:
        # Coerce ints and numpy scalars so equality and hashing are uniform.
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def dot(self, other: "Point") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def norm(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point [m]."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linear interpolation toward `other` (t is not clamped)."""
        return Point(lerp(self.x, other.x, t), lerp(self.y, other.y, t))

    def as_array(self) -> NDArray[np.float64]:
        """Return the point as a numpy array [x, y]."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, values: NDArray[np.float64]) -> "Point":
        """Create a point from the first two entries of an array."""
        return cls(float(values[0]), float(values[1]))


ORIGIN = Point(0.0, 0.0)


@beartype
@dataclass(frozen=True)
class Segment:
    """Directed terrain edge from `a` to `b`.

    A segment is flat when both endpoints share the same altitude; flat
    segments mark landing pads.
    """
    a: Point
    b: Point

    @property
    def is_flat(self) -> bool:
        """True if the segment is horizontal (a landing pad)."""
        return self.a.y == self.b.y

    @property
    def is_degenerate(self) -> bool:
        """True if both endpoints coincide."""
        return self.a == self.b

    @property
    def midpoint(self) -> Point:
        return self.a.lerp(self.b, 0.5)

    @property
    def length(self) -> float:
        return self.a.distance(self.b)

    def as_array(self) -> NDArray[np.float64]:
        """Return [ax, ay, bx, by]."""
        return np.array([self.a.x, self.a.y, self.b.x, self.b.y], dtype=np.float64)


@beartype
@dataclass(frozen=True)
class WorldBounds:
    """Rectangular simulation world [0, width) x [0, height).

    Attributes:
        width: World width [m]
        height: World height [m]
    """
    width: float = WORLD_WIDTH
    height: float = WORLD_HEIGHT

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"World dimensions must be positive, got {self.width} x {self.height}"
            )

    def contains(self, p: Point) -> bool:
        """True if `p` lies inside the half-open world rectangle."""
        return 0.0 <= p.x < self.width and 0.0 <= p.y < self.height


# =============================================================================
# Scalar Operations
# =============================================================================


@beartype
def distance(p: Point, q: Point) -> float:
    """Euclidean distance between two points [m]."""
    return p.distance(q)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between `a` and `b`.

    `t` is unrestricted; values outside [0, 1] extrapolate.
    """
    return (b - a) * t + a


@beartype
def point_lerp(p: Point, q: Point, t: float) -> Point:
    """Component-wise linear interpolation between two points."""
    return p.lerp(q, t)


@beartype
def dot(p: Point, q: Point) -> float:
    """Dot product of two vectors."""
    return p.dot(q)


@beartype
def normalize(v: Point, magnitude: float = REFERENCE_MAGNITUDE) -> Point:
    """Scale a vector to a fixed reference magnitude.

    Args:
        v: Vector to scale
        magnitude: Length of the returned vector (default 1000, not 1)

    Returns:
        `v` rescaled to `magnitude`, or the zero vector if `v` has zero length
    """
    length = v.norm()
    if length == 0.0:
        return ORIGIN
    return v * (magnitude / length)


@beartype
def in_world_bounds(p: Point, bounds: WorldBounds = WorldBounds()) -> bool:
    """True if `0 <= p.x < W` and `0 <= p.y < H`."""
    return bounds.contains(p)


@beartype
def segment_parameter(segment: Segment, p: Point) -> float:
    """Projection parameter of `p` on a segment, clamped to [0, 1].

    Args:
        segment: Finite segment a -> b
        p: Query point

    Returns:
        u such that a + u * (b - a) is the closest point of the segment to p

    Raises:
        DegenerateGeometryError: If the segment has zero length
    """
    dx = segment.b.x - segment.a.x
    dy = segment.b.y - segment.a.y
    denom = dx * dx + dy * dy
    if denom == 0.0:
        raise DegenerateGeometryError(f"Segment has zero length at {segment.a}")

    u = ((p.x - segment.a.x) * dx + (p.y - segment.a.y) * dy) / denom
    return min(1.0, max(0.0, u))


@beartype
def closest_point(segment: Segment, p: Point) -> Point:
    """Closest point to `p` on the finite segment.

    A degenerate segment is treated as the single point `segment.a`.
    """
    try:
        u = segment_parameter(segment, p)
    except DegenerateGeometryError:
        return segment.a
    return segment.a.lerp(segment.b, u)


@beartype
def segment_distance(segment: Segment, p: Point) -> float:
    """Distance from `p` to the closest point on a finite segment [m].

    Projects `p` on the line through the segment, clamps the projection
    parameter to [0, 1] and measures to the clamped point. A zero-length
    segment is treated as a point.
    """
    return p.distance(closest_point(segment, p))


def _orientation(p: Point, q: Point, r: Point) -> float:
    """Signed area of the triangle p, q, r (positive if counter-clockwise)."""
    return (q.x - p.x) * (r.y - p.y) - (q.y - p.y) * (r.x - p.x)


def _on_segment(p: Point, q: Point, r: Point) -> bool:
    """True if collinear point r lies within the bounding box of p, q."""
    return (min(p.x, q.x) <= r.x <= max(p.x, q.x)
            and min(p.y, q.y) <= r.y <= max(p.y, q.y))


@beartype
def segments_intersect(s1: Segment, s2: Segment) -> bool:
    """True if two finite segments share at least one point.

    Touching endpoints and collinear overlaps count as intersections.
    """
    d1 = _orientation(s2.a, s2.b, s1.a)
    d2 = _orientation(s2.a, s2.b, s1.b)
    d3 = _orientation(s1.a, s1.b, s2.a)
    d4 = _orientation(s1.a, s1.b, s2.b)

    if ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4)):
        return True

    if d1 == 0 and _on_segment(s2.a, s2.b, s1.a):
        return True
    if d2 == 0 and _on_segment(s2.a, s2.b, s1.b):
        return True
    if d3 == 0 and _on_segment(s1.a, s1.b, s2.a):
        return True
    if d4 == 0 and _on_segment(s1.a, s1.b, s2.b):
        return True
    return False


# =============================================================================
# Vectorized Kernels
# =============================================================================


@njit(cache=True, fastmath=True)
def _min_segment_distance(
    points: NDArray[np.float64],
    segments: NDArray[np.float64],
) -> float:
    """Smallest distance between any point and any segment.

    points has shape (N, 2); segments has shape (M, 4) as [ax, ay, bx, by].
    """
    best = np.inf
    for i in range(points.shape[0]):
        px = points[i, 0]
        py = points[i, 1]
        for j in range(segments.shape[0]):
            ax = segments[j, 0]
            ay = segments[j, 1]
            dx = segments[j, 2] - ax
            dy = segments[j, 3] - ay
            denom = dx * dx + dy * dy
            if denom > 0.0:
                u = ((px - ax) * dx + (py - ay) * dy) / denom
                if u > 1.0:
                    u = 1.0
                elif u < 0.0:
                    u = 0.0
            else:
                u = 0.0
            cx = ax + u * dx - px
            cy = ay + u * dy - py
            d = np.sqrt(cx * cx + cy * cy)
            if d < best:
                best = d
    return best


@beartype
def path_clearance(
    points: NDArray[np.float64],
    segments: NDArray[np.float64],
) -> float:
    """Minimum distance from a set of points to a set of segments [m].

    Args:
        points: Sampled positions, shape (N, 2)
        segments: Segments as rows [ax, ay, bx, by], shape (M, 4)

    Returns:
        Smallest point-to-segment distance, or inf if either set is empty
    """
    if points.shape[0] == 0 or segments.shape[0] == 0:
        return math.inf
    return float(_min_segment_distance(
        np.ascontiguousarray(points, dtype=np.float64),
        np.ascontiguousarray(segments, dtype=np.float64),
    ))


@beartype
def points_in_bounds(points: NDArray[np.float64], bounds: WorldBounds) -> bool:
    """True if every row of an (N, 2) array lies inside the world."""
    xs = points[:, 0]
    ys = points[:, 1]
    return bool(np.all((xs >= 0.0) & (xs < bounds.width) & (ys >= 0.0) & (ys < bounds.height)))
