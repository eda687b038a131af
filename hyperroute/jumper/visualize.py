"""Debug visualization for jumper graphs and running solvers.

``visualize_graph`` / ``visualize_solver`` build a JSON-safe graphics
dict::

    {"rects":  [{"center": {"x", "y"}, "width", "height", "fill", "stroke", "label"}],
     "points": [{"x", "y", "color", "label"}],
     "lines":  [{"points": [{"x", "y"}, ...], "stroke_color", "stroke_dash"?}]}

Colours are RGBA tuples.  ``render_png`` rasterizes a graphics dict with
Pillow.  Regions without ``bounds`` and ports without ``x``/``y`` are
skipped, so any graph can be passed in.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from PIL import Image, ImageDraw, ImageFont

from hyperroute.graph.models import Connection, HyperGraph

from .models import is_pad, is_through_jumper, port_point, region_bounds, region_center

if TYPE_CHECKING:
    from hyperroute.solver.engine import HyperGraphSolver


log = logging.getLogger(__name__)


COLORS = {
    'background': (11, 17, 32, 255),
    'pad': (255, 215, 0, 90),
    'pad_outline': (234, 179, 8, 255),
    'through_jumper': (200, 150, 50, 110),
    'through_jumper_outline': (160, 110, 30, 255),
    'region': (148, 163, 184, 40),
    'region_outline': (100, 116, 139, 255),
    'port': (59, 130, 246, 255),
    'region_port_line': (100, 100, 100, 80),
    'connection': (255, 50, 150, 204),
    'connection_label': (200, 0, 100, 255),
    'solved_route': (0, 200, 0, 204),
    'next_candidate': (0, 128, 0, 255),
    'candidate': (128, 128, 128, 64),
    'active_path': (255, 165, 0, 204),
    'text': (248, 250, 252, 255),
}

MAX_CANDIDATES_SHOWN = 10


def _xy(x: float, y: float) -> dict:
    return {"x": x, "y": y}


def _empty() -> dict:
    return {"rects": [], "points": [], "lines": []}


# ── Graph ──────────────────────────────────────────────────────────


def visualize_graph(
    graph: HyperGraph,
    connections: Iterable[Connection] | None = None,
    *,
    hide_region_port_lines: bool = False,
    hide_connection_lines: bool = False,
    hide_port_points: bool = False,
) -> dict:
    """Regions as rects, ports as points, connections as start→end lines."""
    graphics = _empty()

    for region in graph.regions:
        bounds = region_bounds(region)
        if bounds is None:
            continue
        if is_pad(region):
            fill, stroke = COLORS['pad'], COLORS['pad_outline']
        elif is_through_jumper(region):
            fill, stroke = COLORS['through_jumper'], COLORS['through_jumper_outline']
        else:
            fill, stroke = COLORS['region'], COLORS['region_outline']
        cx, cy = bounds.center
        graphics["rects"].append({
            "center": _xy(cx, cy),
            "width": bounds.width,
            "height": bounds.height,
            "fill": fill,
            "stroke": stroke,
            "label": region.region_id,
        })

    for port in graph.ports:
        pt = port_point(port)
        if pt is None:
            continue
        if not hide_port_points:
            graphics["points"].append({
                "x": pt.x, "y": pt.y,
                "color": COLORS['port'],
                "label": port.port_id,
            })
        if hide_region_port_lines:
            continue
        for region in (port.region1, port.region2):
            center = region_center(region)
            if center is None:
                continue
            graphics["lines"].append({
                "points": [_xy(center.x, center.y), _xy(pt.x, pt.y)],
                "stroke_color": COLORS['region_port_line'],
            })

    if connections is not None and not hide_connection_lines:
        for conn in connections:
            line = _connection_line(conn)
            if line is not None:
                graphics["lines"].append(line)

    return graphics


def _connection_line(conn: Connection) -> dict | None:
    start, end = region_center(conn.start_region), region_center(conn.end_region)
    if start is None or end is None:
        return None
    return {
        "points": [_xy(start.x, start.y), _xy(end.x, end.y)],
        "stroke_color": COLORS['connection'],
        "stroke_dash": [10, 5],
    }


# ── Solver state ───────────────────────────────────────────────────


def visualize_solver(solver: HyperGraphSolver) -> dict:
    """Graph plus the solver's active connection, routes, queue and partial path."""
    graphics = visualize_graph(
        solver.graph,
        solver.connections,
        hide_region_port_lines=True,
        hide_connection_lines=True,
        hide_port_points=True,
    )

    conn = solver.current_connection
    if conn is not None:
        line = _connection_line(conn)
        if line is not None:
            graphics["lines"].append(line)
            (x1, y1), (x2, y2) = [(p["x"], p["y"]) for p in line["points"]]
            graphics["points"].append({
                "x": (x1 + x2) / 2, "y": (y1 + y2) / 2,
                "color": COLORS['connection_label'],
                "label": conn.connection_id,
            })

    for route in solver.solved_routes:
        pts = [p for p in (port_point(c.port) for c in route.path) if p is not None]
        if pts:
            graphics["lines"].append({
                "points": [_xy(p.x, p.y) for p in pts],
                "stroke_color": COLORS['solved_route'],
            })

    for i, cand in enumerate(solver.peek_candidates(MAX_CANDIDATES_SHOWN)):
        pt = port_point(cand.port)
        if pt is None:
            continue
        graphics["points"].append({
            "x": pt.x, "y": pt.y,
            "color": COLORS['next_candidate'] if i == 0 else COLORS['candidate'],
            "label": "\n".join([
                cand.port.port_id,
                f"g: {cand.g:.2f}",
                f"h: {cand.h:.2f}",
                f"f: {cand.f:.2f}",
            ]),
        })

    if solver.last_candidate is not None:
        chain = solver.candidate_chain(solver.last_candidate)
        pts = [p for p in (port_point(c.port) for c in chain) if p is not None]
        if len(pts) > 1:
            graphics["lines"].append({
                "points": [_xy(p.x, p.y) for p in pts],
                "stroke_color": COLORS['active_path'],
                "stroke_dash": [5, 3],
            })

    return graphics


# ── Raster output ──────────────────────────────────────────────────


def render_png(
    graphics: dict,
    output_path: str | Path,
    *,
    px_per_mm: float = 200.0,
    margin_mm: float = 0.5,
    labels: bool = False,
) -> Path:
    """Rasterize a graphics dict to PNG.  Returns the written path."""
    xs: list[float] = []
    ys: list[float] = []
    for r in graphics["rects"]:
        xs += [r["center"]["x"] - r["width"] / 2, r["center"]["x"] + r["width"] / 2]
        ys += [r["center"]["y"] - r["height"] / 2, r["center"]["y"] + r["height"] / 2]
    for p in graphics["points"]:
        xs.append(p["x"])
        ys.append(p["y"])
    for line in graphics["lines"]:
        xs += [p["x"] for p in line["points"]]
        ys += [p["y"] for p in line["points"]]
    if not xs:
        xs, ys = [0.0], [0.0]

    min_x, max_x = min(xs) - margin_mm, max(xs) + margin_mm
    min_y, max_y = min(ys) - margin_mm, max(ys) + margin_mm
    width_px = max(1, int((max_x - min_x) * px_per_mm))
    height_px = max(1, int((max_y - min_y) * px_per_mm))

    def to_canvas(x: float, y: float) -> tuple[int, int]:
        # Y-inverted: world y grows upwards
        return (int((x - min_x) * px_per_mm), int((max_y - y) * px_per_mm))

    img = Image.new('RGBA', (width_px, height_px), COLORS['background'])
    draw = ImageDraw.Draw(img, 'RGBA')
    font = ImageFont.load_default()

    for r in graphics["rects"]:
        cx, cy = r["center"]["x"], r["center"]["y"]
        x1, y1 = to_canvas(cx - r["width"] / 2, cy + r["height"] / 2)
        x2, y2 = to_canvas(cx + r["width"] / 2, cy - r["height"] / 2)
        draw.rectangle([(x1, y1), (x2, y2)], fill=tuple(r["fill"]),
                       outline=tuple(r["stroke"]), width=1)

    for line in graphics["lines"]:
        pts = [to_canvas(p["x"], p["y"]) for p in line["points"]]
        if len(pts) > 1:
            draw.line(pts, fill=tuple(line["stroke_color"]), width=2)

    radius = 3
    for p in graphics["points"]:
        px, py = to_canvas(p["x"], p["y"])
        draw.ellipse([(px - radius, py - radius), (px + radius, py + radius)],
                     fill=tuple(p["color"]))
        if labels and p.get("label"):
            draw.multiline_text((px + radius + 1, py), p["label"],
                                fill=COLORS['text'], font=font)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.convert('RGB').save(output_path, 'PNG')
    log.info("Rendered %s (%dx%d px)", output_path, width_px, height_px)
    return output_path
