#!/usr/bin/env python3
"""
Spatial Index Module

2-D k-d tree over (point, segment) pairs. Every accepted road registers its
origin here so the local constraints can find nearby junctions and the
segments that leave them.
"""

import heapq
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from citygrowth.growth.geometry_utils import Point, Segment


# (min_x, min_y, max_x, max_y)
BoundingBox = Tuple[float, float, float, float]

UNBOUNDED_BOX: BoundingBox = (float('-inf'), float('-inf'), float('inf'), float('inf'))


class KdNode:
    """Tree node; owns its left and right subtrees."""

    __slots__ = ("location", "segment", "left", "right", "order")

    def __init__(self, location: Point, segment: Segment, order: int):
        self.location = location
        self.segment = segment
        self.left: Optional['KdNode'] = None
        self.right: Optional['KdNode'] = None
        # Insertion rank of this location, used to break distance ties
        self.order = order


@dataclass(frozen=True)
class Neighbor:
    """A k-nearest query result."""
    point: Point
    segment: Segment
    squared_distance: float

    @property
    def distance(self) -> float:
        return self.squared_distance ** 0.5


def _goes_left(point: Point, node: KdNode, depth: int) -> bool:
    if depth % 2 == 0:
        return point.x < node.location.x
    return point.y < node.location.y


def _trim_box(box: BoundingBox, node: KdNode, depth: int, left: bool) -> BoundingBox:
    """Restrict the parent's box to one side of the node's splitting line."""
    min_x, min_y, max_x, max_y = box
    if depth % 2 == 0:
        if left:
            return (min_x, min_y, node.location.x, max_y)
        return (node.location.x, min_y, max_x, max_y)
    if left:
        return (min_x, min_y, max_x, node.location.y)
    return (min_x, node.location.y, max_x, max_y)


def box_squared_distance(point: Point, box: BoundingBox) -> float:
    """Smallest squared distance from a point to an axis-aligned box."""
    min_x, min_y, max_x, max_y = box
    dx = max(min_x - point.x, 0.0, point.x - max_x)
    dy = max(min_y - point.y, 0.0, point.y - max_y)
    return dx * dx + dy * dy


class SpatialIndex:
    """
    Insert-only k-d tree keyed on road junction points.

    The splitting axis alternates with depth (x at even depth, y at odd).
    Inserting a location that is already stored replaces that node's segment
    instead of adding a node, so ``size`` counts distinct locations. The tree
    is never rebalanced; its shape follows insertion order.
    """

    def __init__(self):
        self.root: Optional[KdNode] = None
        self.size = 0

    def __len__(self) -> int:
        return self.size

    def insert(self, point: Point, segment: Segment):
        """Store a segment under a point, replacing any segment already there."""
        # Counted up front and taken back when the location already exists
        self.size += 1

        if self.root is None:
            self.root = KdNode(point, segment, order=0)
            return

        node = self.root
        depth = 0
        while True:
            if node.location == point:
                node.segment = segment
                self.size -= 1
                return

            if _goes_left(point, node, depth):
                if node.left is None:
                    node.left = KdNode(point, segment, order=self.size - 1)
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = KdNode(point, segment, order=self.size - 1)
                    return
                node = node.right
            depth += 1

    def nearest_to(self, point: Point, k: int) -> List[Neighbor]:
        """
        Find up to k stored points closest to ``point``.

        The side of each splitting line that holds the query is searched
        first. Once k results are held, any subtree whose bounding box lies
        further away than the worst kept result is skipped. The kept set is a
        bounded max-heap, so the result is always the k smallest distances.

        Args:
            point: Query location
            k: Maximum number of neighbors to return

        Returns:
            Neighbors sorted by ascending distance; equal distances keep the
            earliest inserted location first
        """
        if self.root is None or k <= 0:
            return []

        # Max-heap on (distance, order) stored as negated keys
        kept: List[Tuple[float, int, KdNode]] = []
        stack: List[Tuple[KdNode, BoundingBox, int]] = [(self.root, UNBOUNDED_BOX, 0)]

        while stack:
            node, box, depth = stack.pop()

            if len(kept) >= k and box_squared_distance(point, box) > -kept[0][0]:
                continue

            dist = point.squared_distance_to(node.location)
            entry = (-dist, -node.order, node)
            if len(kept) < k:
                heapq.heappush(kept, entry)
            elif (dist, node.order) < (-kept[0][0], -kept[0][1]):
                heapq.heapreplace(kept, entry)

            left_box = _trim_box(box, node, depth, left=True)
            right_box = _trim_box(box, node, depth, left=False)
            if _goes_left(point, node, depth):
                near, near_box, far, far_box = node.left, left_box, node.right, right_box
            else:
                near, near_box, far, far_box = node.right, right_box, node.left, left_box

            # Far side pushed first so the near side is explored first
            if far is not None:
                stack.append((far, far_box, depth + 1))
            if near is not None:
                stack.append((near, near_box, depth + 1))

        ordered = sorted(kept, key=lambda e: (-e[0], -e[1]))
        return [Neighbor(n.location, n.segment, -neg_dist) for neg_dist, _, n in ordered]

    def nearest(self, point: Point) -> Optional[Neighbor]:
        """Closest stored point, or None for an empty index."""
        found = self.nearest_to(point, 1)
        return found[0] if found else None

    def items(self) -> Iterator[Tuple[Point, Segment]]:
        """Walk every stored (point, segment) pair in pre-order."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node.location, node.segment
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    __iter__ = items

    def depth(self) -> int:
        """Height of the tree; 0 when empty."""
        if self.root is None:
            return 0
        height = 0
        stack = [(self.root, 1)]
        while stack:
            node, level = stack.pop()
            height = max(height, level)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, level + 1))
        return height
