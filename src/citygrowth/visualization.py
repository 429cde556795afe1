#!/usr/bin/env python3
"""
Road Network Visualization Module

Draws a grown road list with matplotlib. The renderer only reads the road
list (and optionally the noise oracle for street shading); it never touches
the growth state.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

from citygrowth.core.contracts import ColorTag, GrowthResult, RoadCandidate
from citygrowth.growth.oracles import NoiseOracle

logger = logging.getLogger(__name__)


class RoadNetworkVisualizer:
    """
    Renders road networks to image files.

    Color rules, first match wins:
    - roads tagged RED are red
    - primary roads are blue
    - roads tagged BLUE are blue
    - streets in positive-noise regions are green
    - all other streets are black
    """

    def __init__(self, output_dir: str = "outputs", noise: Optional[NoiseOracle] = None):
        """
        Initialize visualizer with output directory.

        Args:
            output_dir: Directory to save visualization outputs
            noise: Oracle used to shade streets; without it streets are black
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.noise = noise

        self.colors = {
            'red': '#C73E1D',
            'primary': '#2E86AB',
            'blue': '#2E86AB',
            'high_noise_street': '#3B8B3B',
            'street': '#000000',
        }

    def road_color(self, road: RoadCandidate) -> str:
        if road.meta.color == ColorTag.RED:
            return self.colors['red']
        if not road.meta.is_street:
            return self.colors['primary']
        if road.meta.color == ColorTag.BLUE:
            return self.colors['blue']
        if self.noise is not None and self.noise.sample(road.segment.origin) > 0:
            return self.colors['high_noise_street']
        return self.colors['street']

    def draw(self, ax, roads: Sequence[RoadCandidate], linewidth: float = 0.6):
        """Draw roads onto an existing matplotlib axis."""
        lines: List = []
        colors: List[str] = []
        for road in roads:
            start, end = road.segment.origin, road.segment.end
            lines.append([(start.x, start.y), (end.x, end.y)])
            colors.append(self.road_color(road))

        ax.add_collection(LineCollection(lines, colors=colors, linewidths=linewidth))
        ax.autoscale_view()
        ax.set_aspect('equal')
        ax.axis('off')

    def plot_growth_result(self, result: GrowthResult, filename: str = "road_network.png",
                           title: Optional[str] = None) -> str:
        """
        Render a finished run to a PNG file.

        Returns:
            Path to saved plot file
        """
        fig, ax = plt.subplots(figsize=(12, 12))
        self.draw(ax, result.roads)

        min_x, min_y, max_x, max_y = result.bounds.as_tuple()
        margin = 5.0
        ax.set_xlim(min_x - margin, max_x + margin)
        ax.set_ylim(min_y - margin, max_y + margin)
        ax.set_title(title or f"Seed {result.seed}: {result.total_roads} roads "
                              f"({result.street_count} streets)")

        output_path = self.output_dir / filename
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        logger.info(f"Saved road network plot to {output_path}")
        return str(output_path)
