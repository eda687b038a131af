"""Small hand-built hypergraphs shared by the solver tests.

Every builder returns a fresh HyperGraph; look regions and ports up
with ``graph.get_region(...)`` / ``graph.get_port(...)``.

Contention graph (used for rip-up)::

    S1 --s1m--+              +--ne1-- E1
              M ----x---- N
    S2 --s2m--+              +--ne2-- E2
              |
              +--md-- D --dd2-- D2 --d2e1-- E1

E2 is reachable only through port ``x``.  E1 has a longer detour
through D and D2.
"""

from __future__ import annotations

from hyperroute.graph.models import Connection, HyperGraph, Region, add_port
from hyperroute.solver.policy import CostPolicy


def build_graph(region_ids: list[str], ports: list[tuple[str, str, str]]) -> HyperGraph:
    """Regions by id, ports as ``(port_id, region1_id, region2_id)``."""
    regions = {rid: Region(region_id=rid) for rid in region_ids}
    graph_ports = [add_port(pid, regions[a], regions[b]) for pid, a, b in ports]
    return HyperGraph(regions=list(regions.values()), ports=graph_ports)


def connect(graph: HyperGraph, cid: str, start: str, end: str,
            network: str | None = None) -> Connection:
    return Connection(
        connection_id=cid,
        start_region=graph.get_region(start),
        end_region=graph.get_region(end),
        mutually_connected_network_id=network,
    )


def make_chain() -> HyperGraph:
    """A -ab- B -bc- C"""
    return build_graph(["A", "B", "C"], [("ab", "A", "B"), ("bc", "B", "C")])


def make_triangle_with_island() -> HyperGraph:
    """Zero-cost cycle A-B-C-A plus an unreachable region Z."""
    return build_graph(
        ["A", "B", "C", "Z"],
        [("ab", "A", "B"), ("bc", "B", "C"), ("ca", "C", "A")],
    )


def make_ring_with_tail() -> HyperGraph:
    """Cycle A-B-C-D-A with E hanging off D."""
    return build_graph(
        ["A", "B", "C", "D", "E"],
        [("ab", "A", "B"), ("bc", "B", "C"), ("cd", "C", "D"),
         ("da", "D", "A"), ("de", "D", "E")],
    )


def make_disconnected() -> HyperGraph:
    """A -ab- B   and   C -cd- D, with no link between the halves."""
    return build_graph(["A", "B", "C", "D"], [("ab", "A", "B"), ("cd", "C", "D")])


def make_contention() -> HyperGraph:
    return build_graph(
        ["S1", "S2", "M", "N", "E1", "E2", "D", "D2"],
        [
            ("s1m", "S1", "M"),
            ("s2m", "S2", "M"),
            ("x", "M", "N"),
            ("md", "M", "D"),
            ("ne1", "N", "E1"),
            ("ne2", "N", "E2"),
            ("dd2", "D", "D2"),
            ("d2e1", "D2", "E1"),
        ],
    )


def make_three_net_contention() -> HyperGraph:
    """Contention graph plus S3 -s3m- M and N -ne3- E3.

    E2 and E3 are both reachable only through port ``x``.
    """
    return build_graph(
        ["S1", "S2", "M", "N", "E1", "E2", "D", "D2", "S3", "E3"],
        [
            ("s1m", "S1", "M"),
            ("s2m", "S2", "M"),
            ("x", "M", "N"),
            ("md", "M", "D"),
            ("ne1", "N", "E1"),
            ("ne2", "N", "E2"),
            ("dd2", "D", "D2"),
            ("d2e1", "D2", "E1"),
            ("s3m", "S3", "M"),
            ("ne3", "N", "E3"),
        ],
    )


def make_dead_end_start() -> HyperGraph:
    """Z -az- A -ab- B -bc- C, where A's first port leads to the dead end Z."""
    return build_graph(
        ["A", "Z", "B", "C"],
        [("az", "A", "Z"), ("ab", "A", "B"), ("bc", "B", "C")],
    )


def make_parallel() -> HyperGraph:
    """S -s- A =p1,p2,p3= B -q- C"""
    return build_graph(
        ["S", "A", "B", "C"],
        [("s", "S", "A"), ("p1", "A", "B"), ("p2", "A", "B"),
         ("p3", "A", "B"), ("q", "B", "C")],
    )


class UnitCostPolicy(CostPolicy):
    """One unit per region crossed."""

    def compute_increased_region_cost_if_ports_are_used(self, region, entry_port, exit_port):
        return 1.0


class CongestionPolicy(UnitCostPolicy):
    """Unit costs plus a heavy penalty for ports held by another network.

    Attach the solver after construction (``policy.solver = solver``).
    """

    PENALTY = 10.0

    def __init__(self) -> None:
        self.solver = None

    def get_port_usage_penalty(self, port):
        solver = self.solver
        if solver is None or solver.current_connection is None:
            return 0.0
        network = solver.current_connection.network_id
        if solver.assignments.conflicts_with(port.port_id, network):
            return self.PENALTY
        return 0.0

    def compute_increased_region_cost_if_ports_are_used(self, region, entry_port, exit_port):
        return 1.0 + self.get_port_usage_penalty(exit_port)
