"""
Spatial Operations Module

K-d tree indexing of road junctions for nearest-neighbor queries.
"""

from .spatial_index import SpatialIndex, Neighbor

__all__ = [
    'SpatialIndex',
    'Neighbor',
]
