#!/usr/bin/env python3
"""
Road Growth Contracts Module

Immutable data contracts shared by the growth loop, the local constraints
and the expansion policy.
"""

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import List, Tuple

from citygrowth.growth.geometry_utils import Point, Segment, Vector


class ColorTag(IntEnum):
    """Render hint carried in road metadata."""
    DEFAULT = 0
    RED = 1
    BLUE = 2


@dataclass(frozen=True)
class RoadMeta:
    """Growth metadata for a road.

    A road with ``ended`` set never produces successors.
    """
    ended: bool = False
    color: ColorTag = ColorTag.DEFAULT
    is_street: bool = False


@dataclass(frozen=True)
class RoadCandidate:
    """A pending or accepted piece of road.

    ``creation_order`` is the frontier depth the candidate was spawned at and
    the only key the frontier queue orders on (smallest first).
    """
    creation_order: int
    segment: Segment
    meta: RoadMeta = field(default_factory=RoadMeta)

    @classmethod
    def seed(cls) -> 'RoadCandidate':
        """Zero-length candidate at the origin that starts every run."""
        return cls(0, Segment(Point.zero(), Vector.zero()))

    def terminated_at(self, point: Point) -> 'RoadCandidate':
        """Copy that ends exactly at ``point`` and grows no further."""
        return RoadCandidate(
            creation_order=self.creation_order,
            segment=Segment.between(self.segment.origin, point),
            meta=RoadMeta(ended=True, color=ColorTag.DEFAULT, is_street=self.meta.is_street)
        )

    def with_order(self, creation_order: int) -> 'RoadCandidate':
        return replace(self, creation_order=creation_order)


@dataclass
class Bounds:
    """Running min/max of accepted road origins; starts at the map origin."""
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    def update(self, point: Point):
        if point.x > self.max_x:
            self.max_x = point.x
        if point.x < self.min_x:
            self.min_x = point.x
        if point.y > self.max_y:
            self.max_y = point.y
        if point.y < self.min_y:
            self.min_y = point.y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True)
class GrowthResult:
    """Outcome of a finished run, roads in acceptance order."""
    roads: List[RoadCandidate]
    bounds: Bounds
    seed: int
    exhausted: bool  # True when the frontier emptied before the budget

    @property
    def total_roads(self) -> int:
        return len(self.roads)

    @property
    def street_count(self) -> int:
        return sum(1 for road in self.roads if road.meta.is_street)

    @property
    def ended_count(self) -> int:
        return sum(1 for road in self.roads if road.meta.ended)
