"""Jumper topology generator — regions and ports around a 0606x2 resistor array.

The array is two resistors stacked vertically::

    [P1]--TJ1--[P2]     top row
    [P3]--TJ2--[P4]     bottom row

Regions (13 per array):
  P1..P4   pads
  UJ1/UJ2  underjumper: the free space under each resistor body, between
           its pads.  Deliberately has no ports to the pads; a trace
           passing under the resistor must not touch them.
  TJ1/TJ2  throughjumper: the conductive resistor body, reached only
           through ports at the centres of its two pads
  CG       centre gap between the rows
  T/B/L/R  surrounding frame

Ports sit at the midpoint of the edge two regions share.
"""

from __future__ import annotations

import logging

from hyperroute.config import DIMS_0606X2, JumperDims
from hyperroute.graph.models import HyperGraph, Region, RegionPort, add_port

from .models import Bounds, region_bounds


log = logging.getLogger(__name__)


def generate_single_jumper_x2_regions(
    center: tuple[float, float] = (0.0, 0.0),
    id_prefix: str = "jumperX2",
    *,
    dims: JumperDims = DIMS_0606X2,
) -> HyperGraph:
    """Build the region/port topology of one 0606x2 jumper centred on *center*."""
    cx, cy = center
    half_len = dims.pad_length_mm / 2
    half_w = dims.pad_width_mm / 2

    left_x = cx - dims.pitch_mm / 2
    right_x = cx + dims.pitch_mm / 2
    top_y = cy + dims.row_pitch_mm / 2
    bottom_y = cy - dims.row_pitch_mm / 2

    def pad_bounds(px: float, py: float) -> Bounds:
        return Bounds(px - half_len, px + half_len, py - half_w, py + half_w)

    p1_b = pad_bounds(left_x, top_y)
    p2_b = pad_bounds(right_x, top_y)
    p3_b = pad_bounds(left_x, bottom_y)
    p4_b = pad_bounds(right_x, bottom_y)

    uj1_b = Bounds(p1_b.max_x, p2_b.min_x, top_y - half_w, top_y + half_w)
    uj2_b = Bounds(p3_b.max_x, p4_b.min_x, bottom_y - half_w, bottom_y + half_w)
    cg_b = Bounds(p1_b.min_x, p2_b.max_x, p3_b.max_y, p1_b.min_y)

    tj_half = dims.through_jumper_height_mm / 2
    tj1_b = Bounds(left_x, right_x, top_y - tj_half, top_y + tj_half)
    tj2_b = Bounds(left_x, right_x, bottom_y - tj_half, bottom_y + tj_half)

    s = dims.surround_mm
    main_min_x, main_max_x = p1_b.min_x, p2_b.max_x
    main_min_y, main_max_y = p3_b.min_y, p1_b.max_y

    def region(rid: str, bounds: Bounds, *, pad: bool = False, through: bool = False) -> Region:
        return Region(
            region_id=f"{id_prefix}:{rid}",
            d={"bounds": bounds, "is_pad": pad, "is_through_jumper": through},
        )

    p1 = region("pad1", p1_b, pad=True)
    p2 = region("pad2", p2_b, pad=True)
    p3 = region("pad3", p3_b, pad=True)
    p4 = region("pad4", p4_b, pad=True)
    uj1 = region("underjumper1", uj1_b)
    uj2 = region("underjumper2", uj2_b)
    cg = region("centerGap", cg_b)
    tj1 = region("throughjumper1", tj1_b, through=True)
    tj2 = region("throughjumper2", tj2_b, through=True)
    top = region("T", Bounds(main_min_x - s, main_max_x + s, main_max_y, main_max_y + s))
    bottom = region("B", Bounds(main_min_x - s, main_max_x + s, main_min_y - s, main_min_y))
    left = region("L", Bounds(main_min_x - s, main_min_x, main_min_y, main_max_y))
    right = region("R", Bounds(main_max_x, main_max_x + s, main_min_y, main_max_y))

    regions = [p1, p2, p3, p4, uj1, uj2, cg, tj1, tj2, top, bottom, left, right]
    ports: list[RegionPort] = []

    def edge_port(pid: str, r1: Region, r2: Region) -> None:
        x, y = shared_edge_midpoint(r1, r2)
        ports.append(add_port(f"{id_prefix}:{pid}", r1, r2, {"x": x, "y": y}))

    def center_port(pid: str, r1: Region, r2: Region, x: float, y: float) -> None:
        ports.append(add_port(f"{id_prefix}:{pid}", r1, r2, {"x": x, "y": y}))

    # Frame corners
    edge_port("T-L", top, left)
    edge_port("T-R", top, right)
    edge_port("B-L", bottom, left)
    edge_port("B-R", bottom, right)

    # Top row pads to the frame
    edge_port("T-P1", top, p1)
    edge_port("L-P1", left, p1)
    edge_port("T-P2", top, p2)
    edge_port("R-P2", right, p2)

    # Bottom row pads to the frame
    edge_port("B-P3", bottom, p3)
    edge_port("L-P3", left, p3)
    edge_port("B-P4", bottom, p4)
    edge_port("R-P4", right, p4)

    # Underjumpers: frame only, never the pads
    edge_port("T-UJ1", top, uj1)
    edge_port("B-UJ2", bottom, uj2)

    # Centre gap
    edge_port("L-CG", left, cg)
    edge_port("R-CG", right, cg)
    edge_port("CG-P1", cg, p1)
    edge_port("CG-P2", cg, p2)
    edge_port("CG-P3", cg, p3)
    edge_port("CG-P4", cg, p4)

    # Through the resistor bodies, entered at the pad centres
    center_port("TJ1-P1", tj1, p1, left_x, top_y)
    center_port("TJ1-P2", tj1, p2, right_x, top_y)
    center_port("TJ2-P3", tj2, p3, left_x, bottom_y)
    center_port("TJ2-P4", tj2, p4, right_x, bottom_y)

    log.debug("Generated jumper %s at (%.2f, %.2f): %d regions, %d ports",
              id_prefix, cx, cy, len(regions), len(ports))
    return HyperGraph(regions=regions, ports=ports)


def shared_edge_midpoint(r1: Region, r2: Region) -> tuple[float, float]:
    """Midpoint of the boundary two touching regions share.

    The shared boundary may collapse to a point when one region has zero
    width (the 0606x2 underjumper does).
    """
    b1, b2 = region_bounds(r1), region_bounds(r2)
    if b1 is None or b2 is None:
        raise ValueError(f"Regions {r1.region_id} and {r2.region_id} need bounds")
    shared = b1.intersection(b2)
    if shared is None:
        raise ValueError(
            f"Regions {r1.region_id} and {r2.region_id} do not share an edge"
        )
    return shared.center
