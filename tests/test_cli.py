"""Tests for the ``python -m hyperroute`` command line."""

from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from hyperroute.__main__ import build_parser, main


CHAIN_PROBLEM = {
    "graph": {
        "regions": [{"region_id": r} for r in ("A", "B", "C")],
        "ports": [
            {"port_id": "ab", "region1_id": "A", "region2_id": "B"},
            {"port_id": "bc", "region1_id": "B", "region2_id": "C"},
        ],
    },
    "connections": [
        {"connection_id": "c1", "start_region_id": "A", "end_region_id": "C"},
    ],
}


def _run(argv: list[str]) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, data: dict) -> str:
        path = self.tmp / "problem.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    def test_parser_defaults(self):
        args = build_parser().parse_args(["solve", "p.json"])
        self.assertFalse(args.ripping)
        self.assertIsNone(args.greedy_multiplier)
        self.assertIsNone(args.policy)

    def test_solve_prints_solution(self):
        code, out, _ = _run(["solve", self._write(CHAIN_PROBLEM)])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["status"], "complete")
        self.assertEqual(data["solved_routes"][0]["port_ids"], ["ab", "bc"])

    def test_solve_failure_exit_code(self):
        problem = json.loads(json.dumps(CHAIN_PROBLEM))
        problem["config"] = {"max_iterations": 1}
        code, out, _ = _run(["solve", self._write(problem)])
        self.assertEqual(code, 1)
        self.assertEqual(json.loads(out)["status"], "failed")

    def test_cli_overrides_file_config(self):
        problem = json.loads(json.dumps(CHAIN_PROBLEM))
        problem["config"] = {"max_iterations": 1}
        code, _, _ = _run(["solve", self._write(problem), "--max-iterations", "50"])
        self.assertEqual(code, 0)

    def test_invalid_graph(self):
        problem = json.loads(json.dumps(CHAIN_PROBLEM))
        problem["graph"]["ports"][0]["region2_id"] = "Q"
        code, out, err = _run(["solve", self._write(problem)])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("unknown region2_id 'Q'", err)

    def test_invalid_config(self):
        code, _, err = _run(["solve", self._write(CHAIN_PROBLEM), "--greedy-multiplier", "-1"])
        self.assertEqual(code, 2)
        self.assertIn("greedy_multiplier", err)

    def test_unknown_policy_in_file(self):
        problem = dict(CHAIN_PROBLEM, policy="nope")
        code, _, err = _run(["solve", self._write(problem)])
        self.assertEqual(code, 2)
        self.assertIn("Unknown policy", err)

    def test_solve_with_png(self):
        png = self.tmp / "out.png"
        code, _, _ = _run(["solve", self._write(CHAIN_PROBLEM), "--png", str(png)])
        self.assertEqual(code, 0)
        self.assertTrue(png.exists())

    def test_jumper_graph_solves_with_jumper_policy(self):
        code, out, _ = _run(["jumper", "--prefix", "J"])
        self.assertEqual(code, 0)
        graph = json.loads(out)
        self.assertEqual(len(graph["regions"]), 13)

        problem = {
            "graph": graph,
            "connections": [
                {"connection_id": "c1", "start_region_id": "J:pad1", "end_region_id": "J:pad2"},
            ],
        }
        code, out, _ = _run(["solve", self._write(problem), "--policy", "jumper"])
        self.assertEqual(code, 0)
        route = json.loads(out)["solved_routes"][0]
        self.assertIn(route["port_ids"], (["J:T-P1", "J:T-P2"], ["J:CG-P1", "J:CG-P2"]))
        self.assertAlmostEqual(route["cost"], 0.8)


if __name__ == "__main__":
    unittest.main()
