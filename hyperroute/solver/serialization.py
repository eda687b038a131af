"""Solution serialization — JSON conversion."""

from __future__ import annotations

from .engine import HyperGraphSolver
from .models import Candidate, SolvedRoute


def candidate_to_dict(candidate: Candidate) -> dict:
    """Serialize one search node (diagnostics)."""
    return {
        "port_id": candidate.port.port_id,
        "g": candidate.g,
        "h": candidate.h,
        "f": candidate.f,
        "hops": candidate.hops,
        "rips_required": candidate.rips_required,
        **({"next_region_id": candidate.next_region.region_id}
           if candidate.next_region is not None else {}),
    }


def route_to_dict(route: SolvedRoute) -> dict:
    return {
        "connection_id": route.connection.connection_id,
        "port_ids": route.port_ids,
        "cost": route.cost,
    }


def solution_to_dict(solver: HyperGraphSolver) -> dict:
    """Serialize a solver's results and terminal state to a JSON-safe dict."""
    return {
        "status": solver.status,
        "error": solver.error,
        "iterations": solver.iterations,
        "solved_routes": [route_to_dict(r) for r in solver.solved_routes],
        "assigned_ports": {
            pid: route.connection.connection_id
            for pid, route in solver.assigned_ports.items()
        },
    }
