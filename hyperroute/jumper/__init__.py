"""Jumper graphs — geometry, costs and debug drawing for resistor-array jumpers.

Submodules:
  models     Bounds and payload accessors (region_bounds, port_point, ...).
  generator  generate_single_jumper_x2_regions (0606x2 topology).
  policy     JumperCostPolicy (distance costs, through-jumper penalty).
  visualize  Graphics dicts for graphs / solvers, PNG rendering.
"""

from .models import Bounds, region_bounds, region_center, port_point
from .generator import generate_single_jumper_x2_regions, shared_edge_midpoint
from .policy import JumperCostPolicy, THROUGH_JUMPER_PENALTY
from .visualize import visualize_graph, visualize_solver, render_png

__all__ = [
    # Models
    "Bounds", "region_bounds", "region_center", "port_point",
    # Generator
    "generate_single_jumper_x2_regions", "shared_edge_midpoint",
    # Policy
    "JumperCostPolicy", "THROUGH_JUMPER_PENALTY",
    # Visualization
    "visualize_graph", "visualize_solver", "render_png",
]
