"""hyperroute — route connections through a region/port hypergraph with rip-up.

Packages:
  graph    Regions, ports, connections; parsing and validation.
  solver   Candidate queue, cost policies, the stepping search engine.
  jumper   Jumper geometry generator, distance policy, visualization.
"""

from hyperroute.graph import (
    Region, RegionPort, Connection, HyperGraph, GraphError,
    add_port, parse_graph, parse_connections,
)
from hyperroute.solver import (
    Candidate, SolvedRoute, SolverConfig,
    CostPolicy, MiddlePortPolicy,
    HyperGraphSolver, solution_to_dict,
)

__version__ = "0.1.0"

__all__ = [
    "Region", "RegionPort", "Connection", "HyperGraph", "GraphError",
    "add_port", "parse_graph", "parse_connections",
    "Candidate", "SolvedRoute", "SolverConfig",
    "CostPolicy", "MiddlePortPolicy",
    "HyperGraphSolver", "solution_to_dict",
]
