# Procedural road network growth
# Frontier expansion over a k-d tree of road junctions

from .growth.geometry_utils import Point, Vector, Segment, intersects
from .core.contracts import RoadCandidate, RoadMeta, ColorTag, Bounds, GrowthResult
from .core.config import GrowthConfig, create_config_from_file, save_config_to_file
from .spatial.spatial_index import SpatialIndex
from .growth.growth_engine import GrowthEngine, SimulationContext

__all__ = [
    'Point',
    'Vector',
    'Segment',
    'intersects',
    'RoadCandidate',
    'RoadMeta',
    'ColorTag',
    'Bounds',
    'GrowthResult',
    'GrowthConfig',
    'create_config_from_file',
    'save_config_to_file',
    'SpatialIndex',
    'GrowthEngine',
    'SimulationContext',
]
