"""Frontier queue of pending road candidates."""

import heapq
import itertools
from typing import List, Tuple

from citygrowth.core.contracts import RoadCandidate


class FrontierQueue:
    """Min-priority queue on ``creation_order``.

    Candidates with the same creation order come out in the order they were
    pushed; the insertion counter is part of the heap key so the candidate
    objects themselves are never compared.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int, RoadCandidate]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, candidate: RoadCandidate):
        heapq.heappush(self._heap, (candidate.creation_order, next(self._counter), candidate))

    def pop(self) -> RoadCandidate:
        """Remove and return the earliest created candidate."""
        return heapq.heappop(self._heap)[2]

    def peek(self) -> RoadCandidate:
        return self._heap[0][2]
