"""Local constraints applied to road candidates before they are accepted.

A candidate that ends close to an existing junction is snapped onto it; a
candidate that would cross an existing road is trimmed back to the crossing.
Both rewrites end the road. Pure functions over the candidate and the
spatial index; the index is only read.
"""

import logging
from typing import Tuple

from citygrowth.core.config import GrowthConfig
from citygrowth.core.contracts import RoadCandidate
from citygrowth.spatial.spatial_index import SpatialIndex
from .geometry_utils import INTERSECTION_EPSILON, intersects

logger = logging.getLogger(__name__)


def snap_to_junction(
    candidate: RoadCandidate,
    index: SpatialIndex,
    snap_distance: float,
    neighbors=None
) -> RoadCandidate:
    """Terminate the candidate on the closest stored junction if it is within reach.

    Junctions closer than ``INTERSECTION_EPSILON`` are ignored so a candidate
    never snaps onto the point it already ends at.

    Returns:
        The rewritten candidate, or the original one when nothing is in reach
    """
    if neighbors is None:
        neighbors = index.nearest_to(candidate.segment.end, 1)
    if not neighbors:
        return candidate

    nearest = neighbors[0]
    distance = nearest.distance
    if INTERSECTION_EPSILON <= distance <= snap_distance:
        logger.debug(f"Snapped road {candidate.segment} onto junction "
                     f"({nearest.point.x:.2f}, {nearest.point.y:.2f}) at {distance:.2f}")
        return candidate.terminated_at(nearest.point)

    return candidate


def trim_at_crossing(
    candidate: RoadCandidate,
    neighbors,
    shared_endpoints: bool = True
) -> RoadCandidate:
    """Terminate the candidate where it first crosses a neighboring road.

    The candidate is extended to twice its length for the test, so roads
    that stop just short of another road are pulled onto it. Neighbors are
    scanned in the order given and the first crossing strictly inside the
    neighbor's segment wins; touching a neighbor's endpoint does not count.

    Returns:
        The rewritten candidate, or the original one when nothing is crossed
    """
    probe = candidate.segment * 2
    for neighbor in neighbors:
        existing = neighbor.segment
        crossing = intersects(probe, existing, shared_endpoints=shared_endpoints)
        if crossing is None:
            continue
        if crossing == existing.origin or crossing == existing.end:
            continue

        logger.debug(f"Trimmed road {candidate.segment} at crossing "
                     f"({crossing.x:.2f}, {crossing.y:.2f})")
        return candidate.terminated_at(crossing)

    return candidate


def apply_local_constraints(
    candidate: RoadCandidate,
    index: SpatialIndex,
    config: GrowthConfig
) -> Tuple[bool, RoadCandidate]:
    """Main entry point: snap, else trim, against already accepted roads.

    Args:
        candidate: Road popped from the frontier
        index: Spatial index of accepted road origins
        config: Growth configuration

    Returns:
        Tuple of (accepted, possibly rewritten candidate). No placement is
        illegal yet, so ``accepted`` is always True.
    """
    if len(index) == 0:
        return True, candidate

    neighbors = index.nearest_to(candidate.segment.end, config.growth.neighbor_count)

    snapped = snap_to_junction(candidate, index, config.growth.snap_distance, neighbors)
    if snapped is not candidate:
        return True, snapped

    trimmed = trim_at_crossing(
        candidate,
        neighbors,
        shared_endpoints=config.features.shared_endpoint_intersection
    )
    return True, trimmed
