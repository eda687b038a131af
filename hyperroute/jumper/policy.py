"""Geometric cost policy for jumper graphs.

Costs are distances in mm between port positions.  The heuristic is the
straight-line distance from a port to the destination region's centre.
Ports leading into a through-jumper region carry a fixed usage penalty,
so traces prefer going around or under a jumper over consuming it.
"""

from __future__ import annotations

from hyperroute.graph.models import Region, RegionPort
from hyperroute.solver.policy import CostPolicy

from .models import is_through_jumper, port_point, region_center


THROUGH_JUMPER_PENALTY = 1.0    # mm-equivalent cost of entering a resistor body


class JumperCostPolicy(CostPolicy):
    """Distance-based costs over the ``x``/``y`` payload of jumper ports."""

    def __init__(
        self,
        through_jumper_penalty: float = THROUGH_JUMPER_PENALTY,
    ) -> None:
        self.through_jumper_penalty = through_jumper_penalty

    def estimate_cost_to_end(self, port: RegionPort, end_region: Region) -> float:
        pt = port_point(port)
        center = region_center(end_region)
        if pt is None or center is None:
            return 0.0
        return pt.distance(center)

    def get_port_usage_penalty(self, port: RegionPort) -> float:
        if is_through_jumper(port.region1) or is_through_jumper(port.region2):
            return self.through_jumper_penalty
        return 0.0

    def compute_increased_region_cost_if_ports_are_used(
        self,
        region: Region,
        entry_port: RegionPort,
        exit_port: RegionPort,
    ) -> float:
        a, b = port_point(entry_port), port_point(exit_port)
        distance = a.distance(b) if a is not None and b is not None else 0.0
        return distance + self.get_port_usage_penalty(exit_port)
