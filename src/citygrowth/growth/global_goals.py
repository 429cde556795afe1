"""Expansion policy: which roads grow out of an accepted road.

Primary roads keep going with a small random turn and occasionally branch
at right angles; streets run straight and only inside low-noise regions.
Successors are returned with a relative creation order of 0; the growth
loop converts that into an absolute frontier depth.
"""

import math
from typing import List

from citygrowth.core.config import GrowthConfig
from citygrowth.core.contracts import RoadCandidate, RoadMeta
from .geometry_utils import Segment, Vector
from .oracles import NoiseOracle, RandomSource

PERPENDICULAR = 90  # degrees


def random_turn(rng: RandomSource, max_angle: int) -> int:
    """Whole number of degrees, uniform in [-max_angle, max_angle]."""
    return rng.uniform_int(2 * max_angle + 1) - max_angle


def grow_road(
    segment: Segment,
    offset: float,
    config: GrowthConfig,
    noise: NoiseOracle,
    rng: RandomSource
) -> RoadCandidate:
    """Primary road leaving the end of ``segment``.

    The heading is the parent's heading plus ``offset`` degrees plus a random
    turn. With noise-biased headings two turns are drawn and the one whose
    endpoint samples the higher noise is kept (the first on a tie).
    """
    length = config.growth.segment_length
    heading = segment.heading + math.radians(offset)

    def propose() -> Segment:
        turn = math.radians(random_turn(rng, config.growth.max_angle))
        return Segment(segment.end, Vector.polar(length, heading + turn))

    options = [propose()]
    if config.features.noise_biased_heading:
        options.append(propose())

    best = max(options, key=lambda s: noise.sample(s.end))
    return RoadCandidate(0, best, RoadMeta())


def grow_street_branch(
    segment: Segment,
    config: GrowthConfig,
    rng: RandomSource
) -> RoadCandidate:
    """Street leaving the end of ``segment`` at roughly a right angle."""
    jitter = rng.uniform_int(config.growth.max_angle)
    if rng.uniform_int(2) == 0:
        offset = PERPENDICULAR + jitter
    else:
        offset = -PERPENDICULAR - jitter

    heading = segment.heading + math.radians(offset)
    return RoadCandidate(
        0,
        Segment(segment.end, Vector.polar(config.growth.segment_length, heading)),
        RoadMeta(is_street=True)
    )


def global_goals(
    segment: Segment,
    meta: RoadMeta,
    config: GrowthConfig,
    noise: NoiseOracle,
    rng: RandomSource
) -> List[RoadCandidate]:
    """
    Propose the roads that grow from an accepted road.

    Args:
        segment: Accepted road segment
        meta: Its metadata
        config: Growth configuration
        noise: Noise oracle biasing headings and branching
        rng: Seeded random source

    Returns:
        Successor candidates ordered street branch, branch, continuation;
        empty for ended roads
    """
    if meta.ended:
        return []

    params = config.growth
    # Branching and street growth only happen where the noise dips below zero
    in_low_region = noise.sample(segment.origin) < 0

    successors: List[RoadCandidate] = []

    if not meta.is_street:
        successors.append(grow_road(segment, 0, config, noise, rng))

        if rng.uniform_real() < params.branch_probability and in_low_region:
            offset = PERPENDICULAR if rng.uniform_int(2) == 0 else -PERPENDICULAR
            successors.insert(0, grow_road(segment, offset, config, noise, rng))
    elif in_low_region:
        successors.append(RoadCandidate(
            0,
            Segment(segment.end, Vector.polar(params.segment_length, segment.heading)),
            RoadMeta(is_street=True)
        ))

    if config.features.streets_enabled:
        if rng.uniform_real() < params.street_branch_probability and in_low_region:
            successors.insert(0, grow_street_branch(segment, config, rng))

    return successors
