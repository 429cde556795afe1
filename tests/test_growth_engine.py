#!/usr/bin/env python3
"""
Unit tests for the growth loop.
"""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from citygrowth.core.config import GrowthConfig
from citygrowth.core.contracts import RoadCandidate, RoadMeta
from citygrowth.growth.geometry_utils import Point, Segment, Vector
from citygrowth.growth.growth_engine import GrowthEngine

from fakes import ConstantNoise, ScriptedRandom


def make_config(max_segments=10, **features):
    config = GrowthConfig()
    config.growth.max_segments = max_segments
    for name, value in features.items():
        setattr(config.features, name, value)
    return config


def straight_engine(max_segments=10):
    """Engine whose roads never turn and never branch."""
    return GrowthEngine(
        make_config(max_segments),
        noise=ConstantNoise(1.0),
        rng=ScriptedRandom(default_int=10, default_real=0.99)
    )


class TestGrowthLoop:
    """Termination and ordering of the growth loop."""

    def test_straight_chain(self):
        result = straight_engine(10).run()

        assert result.total_roads == 11
        assert result.exhausted is False
        assert result.roads[0] == RoadCandidate.seed()
        for i, road in enumerate(result.roads[1:], start=1):
            assert road.segment.origin == Point(5.0 * (i - 1), 0.0)
            assert road.segment.end == Point(5.0 * i, 0.0)
            assert road.creation_order == i
            assert not road.meta.ended

    def test_zero_budget_accepts_only_seed(self):
        result = straight_engine(0).run()
        assert result.total_roads == 1
        assert result.roads[0] == RoadCandidate.seed()
        assert result.exhausted is False

    def test_exhausted_frontier(self):
        engine = straight_engine(10)
        context = engine.new_context()
        context.frontier.pop()
        context.frontier.push(RoadCandidate(0, Segment(Point(0, 0), Vector(5, 0)), RoadMeta(ended=True)))

        result = engine.run(context)

        assert result.total_roads == 1
        assert result.exhausted is True
        assert len(context.frontier) == 0

    def test_bounds_follow_origins(self):
        result = straight_engine(10).run()
        assert result.bounds.as_tuple() == (0.0, 0.0, 45.0, 0.0)

    def test_result_bounds_detached_from_context(self):
        engine = straight_engine(5)
        result = engine.run()
        assert result.bounds.max_x == 25.0

        # Keep growing the finished run's state
        engine.step(engine.last_context)

        assert engine.last_context.bounds.max_x == 30.0
        assert result.bounds.max_x == 25.0

    def test_step_returns_accepted_road(self):
        engine = straight_engine(10)
        context = engine.new_context()

        first = engine.step(context)
        second = engine.step(context)

        assert first == RoadCandidate.seed()
        assert second.segment.end == Point(5.0, 0.0)
        assert context.accepted_count == 2
        # Both roads start at the origin; the later one replaces the seed's entry
        assert len(context.index) == 1
        assert context.index.nearest(Point(0, 0)).segment == second.segment

    def test_iter_roads_matches_run(self):
        streamed = list(straight_engine(25).iter_roads())
        result = straight_engine(25).run()
        assert streamed == result.roads

    def test_last_context_is_kept(self):
        engine = straight_engine(5)
        result = engine.run()
        assert engine.last_context is not None
        assert engine.last_context.roads == result.roads

    def test_tracker_records_phases(self):
        engine = straight_engine(10)
        engine.run()
        tracker = engine.last_context.tracker

        assert tracker.roads_accepted == 11
        assert tracker.operation_counts['local_constraints'] == 11
        assert tracker.operation_counts['index_insert'] == 11
        assert tracker.operation_counts['global_goals'] == 11

    def test_tracking_disabled(self):
        config = make_config(5)
        config.performance.enable_performance_tracking = False
        engine = GrowthEngine(config, noise=ConstantNoise(1.0), rng=ScriptedRandom(default_int=10))
        engine.run()
        assert engine.last_context.tracker is None


class TestGrowthWithDefaultOracles:
    """Runs with the real Perlin noise and seeded generator."""

    @pytest.fixture(scope="class")
    def result(self):
        return GrowthEngine(make_config(400)).run()

    def test_budget_respected(self, result):
        assert result.total_roads <= 401
        if not result.exhausted:
            assert result.total_roads == 401

    def test_seed_is_first(self, result):
        assert result.roads[0] == RoadCandidate.seed()

    def test_creation_order_non_decreasing(self, result):
        orders = [road.creation_order for road in result.roads]
        assert orders == sorted(orders)

    def test_bounds_contain_every_origin(self, result):
        b = result.bounds
        for road in result.roads:
            assert b.min_x <= road.segment.origin.x <= b.max_x
            assert b.min_y <= road.segment.origin.y <= b.max_y

    def test_roads_never_longer_than_twice_segment_length(self, result):
        for road in result.roads:
            assert road.segment.length <= 2 * 5.0 + 1e-9

    def test_repeated_runs_identical(self, result):
        engine = GrowthEngine(make_config(400))
        assert engine.run().roads == result.roads
        assert engine.run().roads == result.roads

    def test_different_seed_differs(self, result):
        config = make_config(400)
        config.growth.seed = 11
        other = GrowthEngine(config).run()
        assert [r.segment for r in other.roads] != [r.segment for r in result.roads]

    def test_single_noise_field(self):
        config = make_config(100, product_noise=False, noise_biased_heading=False)
        first = GrowthEngine(config).run()
        second = GrowthEngine(config).run()
        assert first.roads == second.roads
        assert first.total_roads <= 101
