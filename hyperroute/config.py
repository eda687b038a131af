"""Shared constants for the hypergraph router.

The solver knobs here are the defaults every ``SolverConfig`` starts
from.  The jumper dimensions describe the physical 0606x2 resistor chip
array that the jumper generator lays regions out around.

All distances are in millimetres.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverDefaults:
    """Default tuning for the routing engine."""

    greedy_multiplier: float = 1.0
    """Weight of the heuristic in ``f = g + h * greedy_multiplier``.
    Values above 1 trade optimality for speed, 0 is pure cost order."""

    ripping_enabled: bool = False
    """Whether a connection may claim ports held by another network
    (evicting the earlier route)."""

    rip_cost: float = 0.0
    """Reserved.  Stored and validated, not used by the engine."""

    random_rip_fraction: float = 0.0
    """Reserved.  Stored and validated, not used by the engine."""

    max_iterations: int = 100_000
    """Step budget for ``BaseSolver.solve``."""


@dataclass(frozen=True)
class JumperDims:
    """Physical dimensions of a 0606x2 resistor chip array."""

    pad_length_mm: float = 0.8
    """Pad extent along the resistor (horizontal)."""

    pad_width_mm: float = 0.45
    """Pad extent across the resistor (vertical)."""

    pitch_mm: float = 0.8
    """Centre-to-centre distance between the two pads of one resistor."""

    row_pitch_mm: float = 0.8
    """Centre-to-centre distance between the two resistor rows."""

    outer_span_mm: float = 2.2
    """Outer edge to outer edge, horizontally."""

    through_jumper_height_mm: float = 0.3
    """Height of the conductive resistor body between its two pads."""

    surround_mm: float = 0.5
    """Thickness of the frame regions around the array."""


# Module-level singletons — importable everywhere.
SOLVER_DEFAULTS = SolverDefaults()
DIMS_0606X2 = JumperDims()
