"""Tests for jumper graphs: generator geometry, distance policy, routing, drawing.

Uses a single 0606x2 jumper centred on the origin:
  - pads 0.8 x 0.45 mm, 0.8 mm pitch in both directions
  - 13 regions, 24 ports
"""

from __future__ import annotations

import json
import math
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from hyperroute.graph import graph_to_dict, parse_graph, validate_graph
from hyperroute.graph.models import Connection, Region
from hyperroute.jumper import (
    Bounds, JumperCostPolicy, THROUGH_JUMPER_PENALTY,
    generate_single_jumper_x2_regions, port_point, region_bounds,
    render_png, shared_edge_midpoint, visualize_graph, visualize_solver,
)
from hyperroute.solver import HyperGraphSolver, SolverConfig


PREFIX = "J"


def _jumper():
    return generate_single_jumper_x2_regions((0.0, 0.0), PREFIX)


def _rid(name: str) -> str:
    return f"{PREFIX}:{name}"


def _xy(graph, pid: str) -> tuple[float, float]:
    pt = port_point(graph.get_port(_rid(pid)))
    return (pt.x, pt.y)


class TestJumperGenerator(unittest.TestCase):

    def setUp(self):
        self.graph = _jumper()

    def test_region_and_port_counts(self):
        self.assertEqual(len(self.graph.regions), 13)
        self.assertEqual(len(self.graph.ports), 24)

    def test_ids_are_prefixed(self):
        ids = [r.region_id for r in self.graph.regions] + [p.port_id for p in self.graph.ports]
        self.assertTrue(all(i.startswith("J:") for i in ids))
        self.assertIsNotNone(self.graph.get_region(_rid("centerGap")))

    def test_graph_is_consistent(self):
        self.assertEqual(validate_graph(self.graph), [])

    def test_underjumpers_do_not_touch_pads(self):
        for name in ("underjumper1", "underjumper2"):
            region = self.graph.get_region(_rid(name))
            self.assertEqual(len(region.ports), 1)
            neighbour = region.ports[0].other_region(region)
            self.assertFalse(neighbour.d["is_pad"])

    def test_through_jumpers_join_their_pads(self):
        tj1 = self.graph.get_region(_rid("throughjumper1"))
        neighbours = {p.other_region(tj1).region_id for p in tj1.ports}
        self.assertEqual(neighbours, {_rid("pad1"), _rid("pad2")})
        self.assertTrue(tj1.d["is_through_jumper"])

    def test_pad_bounds(self):
        b = region_bounds(self.graph.get_region(_rid("pad1")))
        self.assertAlmostEqual(b.min_x, -0.8)
        self.assertAlmostEqual(b.max_x, 0.0)
        self.assertAlmostEqual(b.min_y, 0.175)
        self.assertAlmostEqual(b.max_y, 0.625)

    def test_port_positions(self):
        expected = {
            "T-L": (-1.05, 0.625),
            "T-P1": (-0.4, 0.625),
            "CG-P1": (-0.4, 0.175),
            "L-CG": (-0.8, 0.0),
            "T-UJ1": (0.0, 0.625),
            "B-UJ2": (0.0, -0.625),
            "TJ1-P2": (0.4, 0.4),
        }
        for pid, (x, y) in expected.items():
            with self.subTest(pid=pid):
                px, py = _xy(self.graph, pid)
                self.assertAlmostEqual(px, x)
                self.assertAlmostEqual(py, y)

    def test_offset_center(self):
        graph = generate_single_jumper_x2_regions((10.0, -5.0), PREFIX)
        px, py = _xy(graph, "T-P1")
        self.assertAlmostEqual(px, 9.6)
        self.assertAlmostEqual(py, -4.375)

    def test_shared_edge_requires_contact(self):
        p1 = self.graph.get_region(_rid("pad1"))
        p4 = self.graph.get_region(_rid("pad4"))
        with self.assertRaises(ValueError):
            shared_edge_midpoint(p1, p4)
        with self.assertRaises(ValueError):
            shared_edge_midpoint(p1, Region("bare"))

    def test_bounds_intersection(self):
        a = Bounds(0, 1, 0, 1)
        self.assertEqual(a.intersection(Bounds(1, 2, 0, 1)), Bounds(1, 1, 0, 1))
        self.assertIsNone(a.intersection(Bounds(2, 3, 0, 1)))
        self.assertEqual(Bounds.from_dict(a.to_dict()), a)


class TestJumperPolicy(unittest.TestCase):

    def setUp(self):
        self.graph = _jumper()
        self.policy = JumperCostPolicy()

    def test_heuristic_is_distance_to_region_center(self):
        port = self.graph.get_port(_rid("T-P2"))
        end = self.graph.get_region(_rid("pad2"))
        self.assertAlmostEqual(self.policy.estimate_cost_to_end(port, end), 0.225)

    def test_heuristic_without_geometry_is_zero(self):
        port = self.graph.get_port(_rid("T-P2"))
        self.assertEqual(self.policy.estimate_cost_to_end(port, Region("bare")), 0.0)

    def test_through_jumper_penalty(self):
        tj_port = self.graph.get_port(_rid("TJ1-P1"))
        plain = self.graph.get_port(_rid("T-P1"))
        self.assertEqual(self.policy.get_port_usage_penalty(tj_port), THROUGH_JUMPER_PENALTY)
        self.assertEqual(self.policy.get_port_usage_penalty(plain), 0.0)

    def test_region_cost(self):
        pad1 = self.graph.get_region(_rid("pad1"))
        entry = self.graph.get_port(_rid("T-P1"))
        plain_exit = self.graph.get_port(_rid("CG-P1"))
        tj_exit = self.graph.get_port(_rid("TJ1-P1"))
        self.assertAlmostEqual(
            self.policy.compute_increased_region_cost_if_ports_are_used(pad1, entry, plain_exit),
            0.45,
        )
        self.assertAlmostEqual(
            self.policy.compute_increased_region_cost_if_ports_are_used(pad1, entry, tj_exit),
            0.225 + THROUGH_JUMPER_PENALTY,
        )


class TestJumperRouting(unittest.TestCase):

    def _solve(self, graph, start: str, end: str) -> HyperGraphSolver:
        conn = Connection("c1", graph.get_region(_rid(start)), graph.get_region(_rid(end)))
        solver = HyperGraphSolver(graph, [conn], policy=JumperCostPolicy())
        solver.solve()
        return solver

    def test_adjacent_pads_route_around_the_gap(self):
        solver = self._solve(_jumper(), "pad1", "pad2")
        self.assertTrue(solver.solved)
        route = solver.solved_routes[0]
        # over the top or through the centre gap: the same length either way
        self.assertIn(route.port_ids, (
            [_rid("T-P1"), _rid("T-P2")],
            [_rid("CG-P1"), _rid("CG-P2")],
        ))
        self.assertAlmostEqual(route.cost, 0.8)

    def test_diagonal_pads(self):
        graph = _jumper()
        solver = self._solve(graph, "pad1", "pad4")
        self.assertTrue(solver.solved)
        route = solver.solved_routes[0]
        region = route.connection.start_region
        for cand in route.path:
            self.assertTrue(cand.port.touches(region))
            region = cand.port.other_region(region)
        self.assertIs(region, graph.get_region(_rid("pad4")))
        costs = [c.g for c in route.path]
        self.assertEqual(costs, sorted(costs))

    def test_serialized_graph_routes_the_same(self):
        native = self._solve(_jumper(), "pad1", "pad4")
        data = json.loads(json.dumps(graph_to_dict(_jumper())))
        restored = parse_graph(data)
        self.assertEqual(validate_graph(restored), [])
        parsed = self._solve(restored, "pad1", "pad4")
        self.assertEqual(native.solved_routes[0].port_ids, parsed.solved_routes[0].port_ids)
        self.assertTrue(math.isclose(native.solved_routes[0].cost, parsed.solved_routes[0].cost))


class TestVisualization(unittest.TestCase):

    def test_graph_graphics(self):
        graphics = visualize_graph(_jumper())
        self.assertEqual(len(graphics["rects"]), 13)
        self.assertEqual(len(graphics["points"]), 24)
        self.assertEqual(len(graphics["lines"]), 48)
        json.dumps(graphics)

    def test_graph_graphics_options(self):
        graphics = visualize_graph(_jumper(), hide_port_points=True, hide_region_port_lines=True)
        self.assertEqual(graphics["points"], [])
        self.assertEqual(graphics["lines"], [])

    def test_solver_graphics(self):
        graph = _jumper()
        conn = Connection("c1", graph.get_region(_rid("pad1")), graph.get_region(_rid("pad4")))
        solver = HyperGraphSolver(graph, [conn], policy=JumperCostPolicy(),
                                  config=SolverConfig(greedy_multiplier=1.2))
        solver.step()
        graphics = solver.visualize()
        labels = [p["label"] for p in graphics["points"]]
        self.assertIn("c1", labels)
        self.assertTrue(any("f: " in label for label in labels))
        json.dumps(graphics)

        solver.solve()
        done = visualize_solver(solver)
        green = [line for line in done["lines"] if line["stroke_color"] == (0, 200, 0, 204)]
        self.assertEqual(len(green), 1)

    def test_render_png(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = render_png(visualize_graph(_jumper()), Path(tmp) / "sub" / "jumper.png",
                             labels=True)
            self.assertTrue(out.exists())
            with Image.open(out) as img:
                self.assertEqual(img.format, "PNG")
                self.assertGreater(img.width, 100)
                self.assertGreater(img.height, 100)

    def test_render_empty_graphics(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = render_png({"rects": [], "points": [], "lines": []}, Path(tmp) / "e.png")
            self.assertTrue(out.exists())


if __name__ == "__main__":
    unittest.main()
