"""Cost and heuristic policies.

A policy is handed to the solver at construction and supplies every
cost the search needs.  The base ``CostPolicy`` returns zero everywhere,
which makes the search a plain cost-ordered (breadth-first-like)
exploration.  Admissibility of a heuristic is up to the policy; the
solver never checks it.
"""

from __future__ import annotations

from hyperroute.graph.models import Region, RegionPort

from .models import Candidate


class CostPolicy:
    """Zero-cost policy.  Subclass and override what you need."""

    def estimate_cost_to_end(self, port: RegionPort, end_region: Region) -> float:
        """Estimated remaining cost from *port* to *end_region*.

        Work out the unit of your costs first: if ``g`` is distance,
        this is typically the distance from the port to the region centre.
        """
        return 0.0

    def get_port_usage_penalty(self, port: RegionPort) -> float:
        """Extra cost for ports likely to block off other connections.

        The solver does not add this anywhere; policies fold it into
        their region cost when they want it.
        """
        return 0.0

    def compute_increased_region_cost_if_ports_are_used(
        self,
        region: Region,
        entry_port: RegionPort,
        exit_port: RegionPort,
    ) -> float:
        """Cost of crossing *region* from *entry_port* to *exit_port*."""
        return 0.0

    def select_candidates_for_entering_region(
        self,
        candidates: list[Candidate],
    ) -> list[Candidate]:
        """Subset of *candidates* (all entering the same region) to keep."""
        return candidates


class MiddlePortPolicy(CostPolicy):
    """Keeps one canonical entry per neighbouring region: the middle port.

    Bounds the branching factor when regions share many parallel ports.
    """

    def select_candidates_for_entering_region(
        self,
        candidates: list[Candidate],
    ) -> list[Candidate]:
        if len(candidates) <= 1:
            return candidates
        return [candidates[len(candidates) // 2]]
