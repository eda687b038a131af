"""Solver — routes connections through a hypergraph with rip-up.

Submodules:
  models         Candidate, SolvedRoute, SolverConfig and state constants.
  queue          Stable min-f candidate queue.
  policy         Pluggable heuristic / cost hooks (CostPolicy).
  assignments    Port ownership map with eviction (PortAssignments).
  lifecycle      Step / solve bookkeeping (BaseSolver).
  engine         The per-connection search state machine (HyperGraphSolver).
  serialization  JSON conversion (solution_to_dict).
"""

from .models import (
    Candidate, SolvedRoute, SolverConfig,
    PENDING, SEARCHING, SOLVED, FAILED, PROCESSING, COMPLETE,
    EXHAUSTED_REASON,
)
from .queue import CandidateQueue
from .policy import CostPolicy, MiddlePortPolicy
from .assignments import PortAssignments
from .lifecycle import BaseSolver
from .engine import HyperGraphSolver
from .serialization import solution_to_dict, route_to_dict, candidate_to_dict

__all__ = [
    # Models
    "Candidate", "SolvedRoute", "SolverConfig",
    "PENDING", "SEARCHING", "SOLVED", "FAILED", "PROCESSING", "COMPLETE",
    "EXHAUSTED_REASON",
    # Search plumbing
    "CandidateQueue", "CostPolicy", "MiddlePortPolicy", "PortAssignments",
    # Engine
    "BaseSolver", "HyperGraphSolver",
    # Serialization
    "solution_to_dict", "route_to_dict", "candidate_to_dict",
]
