"""Main orchestrator for procedural road network growth.

This module implements the GrowthEngine class that drains the frontier of
road candidates: each candidate is checked against local constraints,
recorded, indexed, and expanded into new candidates until the frontier runs
dry or the segment budget is spent.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Iterator, List, Optional

from citygrowth.core.config import GrowthConfig
from citygrowth.core.contracts import Bounds, GrowthResult, RoadCandidate
from citygrowth.metrics.performance_tracker import PerformanceTracker
from citygrowth.spatial.spatial_index import SpatialIndex
from .constraints import apply_local_constraints
from .frontier import FrontierQueue
from .global_goals import global_goals
from .oracles import (
    NoiseOracle, PerlinNoiseOracle, ProductNoiseOracle, RandomSource, SeededRandom
)

logger = logging.getLogger(__name__)


@dataclass
class SimulationContext:
    """All mutable state of one growth run.

    Owned by a single run; nothing else may modify it while the run is in
    progress.
    """
    config: GrowthConfig
    noise: NoiseOracle
    rng: RandomSource
    frontier: FrontierQueue = field(default_factory=FrontierQueue)
    roads: List[RoadCandidate] = field(default_factory=list)
    index: SpatialIndex = field(default_factory=SpatialIndex)
    bounds: Bounds = field(default_factory=Bounds)
    tracker: Optional[PerformanceTracker] = None

    @property
    def accepted_count(self) -> int:
        return len(self.roads)


class GrowthEngine:
    """Main API for road network growth.

    Orchestrates a run by:
    1. Seeding the frontier with a zero-length road at the origin
    2. Popping the earliest created candidate
    3. Applying local constraints (snap / trim)
    4. Recording and indexing the accepted road
    5. Enqueueing the roads the expansion policy grows from it

    Configuration values are preconditions and are not validated here.
    """

    def __init__(
        self,
        config: Optional[GrowthConfig] = None,
        noise: Optional[NoiseOracle] = None,
        rng: Optional[RandomSource] = None
    ):
        """Initialize growth engine.

        Args:
            config: Growth configuration, defaults to ``GrowthConfig()``
            noise: Noise oracle; built from the configured seed when omitted
            rng: Random source shared by every run of this engine. When
                omitted each run gets a fresh generator seeded from the
                configuration, which makes repeated runs identical.
        """
        self.config = config if config is not None else GrowthConfig()
        self.noise = noise if noise is not None else self._build_noise_oracle()
        self.rng = rng
        # State of the most recent run(), kept for read-only inspection
        self.last_context: Optional[SimulationContext] = None

        logger.info(f"Initialized GrowthEngine with seed {self.config.growth.seed}, "
                    f"budget {self.config.growth.max_segments}")

    def _build_noise_oracle(self) -> NoiseOracle:
        params = self.config.growth
        if self.config.features.product_noise:
            return ProductNoiseOracle.seeded(params.seed, params.noise_scale)
        return PerlinNoiseOracle(params.seed, params.noise_scale)

    def new_context(self) -> SimulationContext:
        """Fresh run state with the seed road already on the frontier."""
        rng = self.rng if self.rng is not None else SeededRandom(self.config.growth.seed)
        tracker = None
        if self.config.performance.enable_performance_tracking:
            tracker = PerformanceTracker(self.config.performance.max_history_size)

        context = SimulationContext(config=self.config, noise=self.noise, rng=rng, tracker=tracker)
        context.frontier.push(RoadCandidate.seed())
        return context

    def should_continue(self, context: SimulationContext) -> bool:
        return bool(context.frontier) and context.accepted_count <= self.config.growth.max_segments

    def step(self, context: SimulationContext) -> Optional[RoadCandidate]:
        """Process one candidate from the frontier.

        Returns:
            The accepted road, or None if the candidate was rejected
        """
        tracker = context.tracker
        candidate = context.frontier.pop()

        if tracker:
            tracker.start_operation('local_constraints')
        accepted, road = apply_local_constraints(candidate, context.index, self.config)
        if tracker:
            tracker.end_operation('local_constraints')

        if not accepted:
            logger.debug(f"Rejected road {candidate.segment}")
            return None

        context.roads.append(road)
        if tracker:
            tracker.start_operation('index_insert')
        context.index.insert(road.segment.origin, road.segment)
        if tracker:
            tracker.end_operation('index_insert')
        context.bounds.update(road.segment.origin)

        if tracker:
            tracker.start_operation('global_goals')
        successors = global_goals(road.segment, road.meta, self.config, context.noise, context.rng)
        if tracker:
            tracker.end_operation('global_goals')
            tracker.record_road()

        for successor in successors:
            context.frontier.push(
                successor.with_order(successor.creation_order + 1 + road.creation_order)
            )

        log_config = self.config.logging
        if log_config.log_step_progress and context.accepted_count % log_config.progress_log_interval == 0:
            logger.debug(f"Accepted {context.accepted_count} roads, frontier holds {len(context.frontier)}")

        return road

    def iter_roads(self, context: Optional[SimulationContext] = None) -> Iterator[RoadCandidate]:
        """Yield accepted roads one at a time until the run terminates."""
        if context is None:
            context = self.new_context()
        while self.should_continue(context):
            road = self.step(context)
            if road is not None:
                yield road

    def run(self, context: Optional[SimulationContext] = None) -> GrowthResult:
        """Grow a complete road network.

        Returns:
            GrowthResult with roads in acceptance order
        """
        if context is None:
            context = self.new_context()

        started = time.perf_counter()
        for _ in self.iter_roads(context):
            pass
        elapsed = time.perf_counter() - started

        exhausted = not context.frontier
        logger.info(f"Grew {context.accepted_count} roads in {elapsed:.2f}s "
                    f"({'frontier exhausted' if exhausted else 'budget reached'}), "
                    f"bounds {context.bounds.as_tuple()}")
        if context.tracker:
            context.tracker.log_performance_summary()

        self.last_context = context
        return GrowthResult(
            roads=list(context.roads),
            bounds=replace(context.bounds),
            seed=self.config.growth.seed,
            exhausted=exhausted
        )
