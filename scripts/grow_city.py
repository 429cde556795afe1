#!/usr/bin/env python3
"""
Road Network Growth CLI

Grows a synthetic city road network and writes:
- a PNG rendering of the roads
- optionally the roads as GeoJSON
"""

import sys
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from citygrowth.core.config import GrowthConfig, configure_logging, create_config_from_file
from citygrowth.export import roads_to_geodataframe
from citygrowth.growth.growth_engine import GrowthEngine
from citygrowth.visualization import RoadNetworkVisualizer

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_config(args) -> GrowthConfig:
    """Load configuration from file (if given) and apply command-line overrides."""
    if args.config:
        logger.info(f"Loading configuration from {args.config}")
        config = create_config_from_file(args.config)
    else:
        config = GrowthConfig()

    if args.seed is not None:
        config.growth.seed = args.seed
    if args.max_segments is not None:
        config.growth.max_segments = args.max_segments
    if args.no_streets:
        config.features.streets_enabled = False

    config.validate()
    return config


def main():
    parser = argparse.ArgumentParser(description='Grow a procedural road network')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML or JSON configuration file')
    parser.add_argument('--seed', type=int, default=None,
                        help='Override random seed (0-253, or 0-255 with a single noise field)')
    parser.add_argument('--max-segments', type=int, default=None,
                        help='Override segment budget')
    parser.add_argument('--no-streets', action='store_true',
                        help='Grow primary roads only')
    parser.add_argument('--output-dir', type=str, default='outputs',
                        help='Directory for generated files')
    parser.add_argument('--geojson', action='store_true',
                        help='Also write roads as GeoJSON')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging (overrides the configured log level)')

    args = parser.parse_args()

    config = build_config(args)
    configure_logging(config, verbose=args.verbose)
    config.log_configuration_summary()

    engine = GrowthEngine(config)
    result = engine.run()

    visualizer = RoadNetworkVisualizer(args.output_dir, noise=engine.noise)
    visualizer.plot_growth_result(result, filename=f"roads_seed{config.growth.seed}.png")

    if args.geojson:
        output_path = Path(args.output_dir) / f"roads_seed{config.growth.seed}.geojson"
        roads_to_geodataframe(result.roads).to_file(output_path, driver='GeoJSON')
        logger.info(f"Saved {result.total_roads} roads to {output_path}")


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        logger.info("\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
