"""Candidate priority queue.

A binary heap keyed on ``(f, insertion_counter)``.  The counter makes
equal-``f`` candidates come out in the order they went in, which keeps
search traces reproducible from run to run.
"""

from __future__ import annotations

import heapq

from .models import Candidate


class CandidateQueue:
    """Min-``f`` queue of candidates.  No deduplication, not thread-safe."""

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, Candidate]] = []
        self._counter = 0

    def enqueue(self, candidate: Candidate) -> None:
        heapq.heappush(self._heap, (candidate.f, self._counter, candidate))
        self._counter += 1

    def dequeue(self) -> Candidate | None:
        """Remove and return the lowest-``f`` candidate, or None when empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def peek_many(self, k: int) -> list[Candidate]:
        """The *k* lowest-``f`` candidates in dequeue order, without removing them."""
        if k <= 0:
            return []
        return [entry[2] for entry in heapq.nsmallest(k, self._heap)]

    def clear(self) -> None:
        self._heap.clear()
        self._counter = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
