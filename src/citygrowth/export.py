"""Conversion of grown roads into GIS structures.

Roads become shapely LineStrings in a GeoDataFrame and edges of a networkx
graph whose nodes use canonical coordinate IDs, so junctions that coincide
after rounding collapse onto one node.
"""

import logging
from typing import Iterable, List

import geopandas as gpd
import networkx as nx
import pandas as pd
from shapely.geometry import Point

from citygrowth.core.contracts import RoadCandidate

logger = logging.getLogger(__name__)

ROAD_COLUMNS = ['creation_order', 'ended', 'color', 'is_street', 'length', 'geometry']


def generate_canonical_node_id(x: float, y: float) -> str:
    """
    Generate a canonical node ID from map coordinates.

    Args:
        x: X coordinate
        y: Y coordinate

    Returns:
        Canonical ID string with 0.1 precision (e.g., "100.1_200.5")
    """
    snap_precision = 0.1
    x_rounded = round(x / snap_precision) * snap_precision
    y_rounded = round(y / snap_precision) * snap_precision
    # Avoid "-0.0" IDs for points that round to zero from below
    return f"{x_rounded + 0.0:.1f}_{y_rounded + 0.0:.1f}"


def roads_to_geodataframe(roads: Iterable[RoadCandidate], crs=None) -> gpd.GeoDataFrame:
    """
    Build a GeoDataFrame with one row per road, in acceptance order.

    Zero-length roads (the seed) are kept as degenerate LineStrings so row
    positions match the road list.
    """
    records: List[dict] = []
    for road in roads:
        records.append({
            'creation_order': road.creation_order,
            'ended': road.meta.ended,
            'color': int(road.meta.color),
            'is_street': road.meta.is_street,
            'length': road.segment.length,
            'geometry': road.segment.to_linestring()
        })

    if not records:
        return gpd.GeoDataFrame(pd.DataFrame(columns=ROAD_COLUMNS), geometry='geometry', crs=crs)

    return gpd.GeoDataFrame(records, columns=ROAD_COLUMNS, geometry='geometry', crs=crs)


def roads_to_graph(roads: Iterable[RoadCandidate]) -> nx.Graph:
    """
    Build an undirected street graph from roads.

    Each road contributes an edge between the canonical IDs of its endpoints;
    zero-length roads only contribute a node.
    """
    graph = nx.Graph()

    for road in roads:
        start, end = road.segment.origin, road.segment.end
        u = generate_canonical_node_id(start.x, start.y)
        v = generate_canonical_node_id(end.x, end.y)

        for node_id, point in ((u, start), (v, end)):
            if node_id not in graph.nodes:
                graph.add_node(node_id, geometry=Point(point.x, point.y), x=point.x, y=point.y)

        if u != v and not graph.has_edge(u, v):
            graph.add_edge(
                u, v,
                geometry=road.segment.to_linestring(),
                length=road.segment.length,
                highway='residential' if road.meta.is_street else 'primary',
                creation_order=road.creation_order
            )

    logger.debug(f"Built road graph with {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges")
    return graph
