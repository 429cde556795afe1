"""
Geometry utilities for road network growth.

Points, vectors and segments with the small amount of algebra the growth
engine needs, plus the parametric segment intersection test used by the
local constraints.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint

# Distance under which an intersection is treated as the segment's own origin
INTERSECTION_EPSILON = 1e-7
# Cross products below this magnitude are treated as parallel directions
PARALLEL_EPSILON = 1e-12


@dataclass(frozen=True)
class Vector:
    """2-D displacement."""
    dx: float
    dy: float

    @classmethod
    def zero(cls) -> 'Vector':
        return cls(0.0, 0.0)

    @classmethod
    def polar(cls, length: float, angle: float) -> 'Vector':
        """Build a vector from a length and an angle in radians."""
        return cls(length * math.cos(angle), length * math.sin(angle))

    def __add__(self, other: 'Vector') -> 'Vector':
        return Vector(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: 'Vector') -> 'Vector':
        return Vector(self.dx - other.dx, self.dy - other.dy)

    def __mul__(self, factor: float) -> 'Vector':
        return Vector(self.dx * factor, self.dy * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> 'Vector':
        return Vector(self.dx / divisor, self.dy / divisor)

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def angle(self) -> float:
        """Heading in radians, measured from the positive x axis."""
        return float(np.arctan2(self.dy, self.dx))

    def cross(self, other: 'Vector') -> float:
        """Z component of the 3-D cross product of the two vectors."""
        return self.dx * other.dy - self.dy * other.dx


@dataclass(frozen=True)
class Point:
    """2-D coordinate."""
    x: float
    y: float

    @classmethod
    def zero(cls) -> 'Point':
        return cls(0.0, 0.0)

    def __add__(self, vector: Vector) -> 'Point':
        return Point(self.x + vector.dx, self.y + vector.dy)

    def __sub__(self, other: 'Point') -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def distance_to(self, other: 'Point') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def squared_distance_to(self, other: 'Point') -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def to_shapely(self) -> ShapelyPoint:
        return ShapelyPoint(self.x, self.y)


@dataclass(frozen=True)
class Segment:
    """
    Line segment defined by an origin point and a direction vector.

    The far endpoint is always ``origin + direction``; scaling a segment
    stretches the direction and leaves the origin in place.
    """
    origin: Point
    direction: Vector

    @classmethod
    def between(cls, start: Point, end: Point) -> 'Segment':
        return cls(start, end - start)

    @property
    def end(self) -> Point:
        return self.origin + self.direction

    @property
    def length(self) -> float:
        return self.direction.length

    @property
    def heading(self) -> float:
        return self.direction.angle

    def __mul__(self, factor: float) -> 'Segment':
        return Segment(self.origin, self.direction * factor)

    def to_linestring(self) -> LineString:
        return LineString([(self.origin.x, self.origin.y), (self.end.x, self.end.y)])

    def __str__(self) -> str:
        return f"({self.origin.x:.3f}, {self.origin.y:.3f}) -> ({self.end.x:.3f}, {self.end.y:.3f})"


def shares_endpoints(s1: Segment, s2: Segment) -> bool:
    """True if both segments span the same two endpoints, in either orientation."""
    return ((s1.origin == s2.origin and s1.end == s2.end) or
            (s1.origin == s2.end and s1.end == s2.origin))


def intersects(s1: Segment, s2: Segment, shared_endpoints: bool = True) -> Optional[Point]:
    """
    Find the point where two segments cross.

    Solves ``s1.origin + t * s1.direction == s2.origin + u * s2.direction``
    and accepts the solution when both t and u lie in [0, 1]. A crossing that
    sits on ``s1``'s own origin is ignored so a road never intersects the
    junction it grows from.

    Args:
        s1: Segment being tested (usually the candidate road)
        s2: Existing segment
        shared_endpoints: Also report segments spanning the same endpoints
            (including reversed ones) as intersecting at ``s1.origin``

    Returns:
        Intersection point, or None when the segments do not cross, are
        parallel, or either is degenerate
    """
    denominator = s1.direction.cross(s2.direction)

    if abs(denominator) > PARALLEL_EPSILON:
        offset = s2.origin - s1.origin
        t = offset.cross(s2.direction) / denominator
        u = offset.cross(s1.direction) / denominator

        if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
            travel = s1.direction * t
            if travel.length < INTERSECTION_EPSILON:
                return None
            return s1.origin + travel

    if shared_endpoints and s1.length > 0 and shares_endpoints(s1, s2):
        return s1.origin

    return None
