"""Solver dataclasses and configuration."""

from __future__ import annotations

from dataclasses import dataclass

from hyperroute.config import SOLVER_DEFAULTS
from hyperroute.graph.models import Connection, Region, RegionPort


# ── Search nodes ───────────────────────────────────────────────────


@dataclass(eq=False)
class Candidate:
    """A search-frontier node: the port just crossed plus its costs.

    ``parent`` is the arena index of the candidate this one was expanded
    from (``None`` for the root).  A parent index is always smaller than
    the candidate's own ``index``, so ancestry can never form a cycle.
    """

    port: RegionPort
    g: float = 0.0
    h: float = 0.0
    f: float = 0.0
    hops: int = 0
    rips_required: int = 0
    parent: int | None = None
    index: int = -1                         # slot in the per-connection arena
    last_region: Region | None = None       # region being left
    next_region: Region | None = None       # region being entered
    last_port: RegionPort | None = None     # port used to reach the parent's region


@dataclass(eq=False)
class SolvedRoute:
    """A connection and the ordered candidates from start to destination."""

    connection: Connection
    path: list[Candidate]

    @property
    def port_ids(self) -> list[str]:
        return [c.port.port_id for c in self.path]

    @property
    def cost(self) -> float:
        """Accumulated ``g`` at the destination (0 for an empty path)."""
        return self.path[-1].g if self.path else 0.0


# ── States ─────────────────────────────────────────────────────────

PENDING = "pending"
SEARCHING = "searching"
SOLVED = "solved"
FAILED = "failed"

PROCESSING = "processing"
COMPLETE = "complete"

EXHAUSTED_REASON = "search space exhausted"


# ── Solver configuration ──────────────────────────────────────────


@dataclass
class SolverConfig:
    """All tuneable solver parameters in one place.

    ``rip_cost`` and ``random_rip_fraction`` are reserved extension
    points: they are validated and kept, but the engine ignores them.
    """

    greedy_multiplier: float = SOLVER_DEFAULTS.greedy_multiplier
    ripping_enabled: bool = SOLVER_DEFAULTS.ripping_enabled
    rip_cost: float = SOLVER_DEFAULTS.rip_cost
    random_rip_fraction: float = SOLVER_DEFAULTS.random_rip_fraction
    max_iterations: int = SOLVER_DEFAULTS.max_iterations

    def __post_init__(self) -> None:
        if self.greedy_multiplier < 0:
            raise ValueError(f"greedy_multiplier must be >= 0, got {self.greedy_multiplier}")
        if self.rip_cost < 0:
            raise ValueError(f"rip_cost must be >= 0, got {self.rip_cost}")
        if not 0 <= self.random_rip_fraction <= 1:
            raise ValueError(
                f"random_rip_fraction must be within [0, 1], got {self.random_rip_fraction}"
            )
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be > 0, got {self.max_iterations}")

