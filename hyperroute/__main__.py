"""
hyperroute — entry point.

Usage:
    python -m hyperroute solve problem.json                 # print solution JSON
    python -m hyperroute solve problem.json --ripping --png out.png
    python -m hyperroute jumper --center 0 0 --prefix J1    # print jumper graph JSON

``problem.json`` holds ``{"graph": {...}, "connections": [...]}`` in the
serialized form described in ``hyperroute.graph.parsing``.  Add
``"policy": "jumper"`` to cost by port distance.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from hyperroute.graph import GraphError, graph_to_dict
from hyperroute.jumper import (
    JumperCostPolicy, generate_single_jumper_x2_regions,
    render_png, visualize_graph, visualize_solver,
)
from hyperroute.solver import (
    CostPolicy, HyperGraphSolver, MiddlePortPolicy, SolverConfig,
    solution_to_dict,
)


log = logging.getLogger("hyperroute")

POLICIES = {
    "zero": CostPolicy,
    "middle": MiddlePortPolicy,
    "jumper": JumperCostPolicy,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hyperroute",
                                description="Route connections through a region/port hypergraph")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("solve", help="Solve a problem file and print the solution")
    s.add_argument("problem", help="Path to problem JSON ({graph, connections})")
    s.add_argument("--greedy-multiplier", type=float, default=None, help="Heuristic weight")
    s.add_argument("--ripping", action="store_true", help="Allow rip-up of other networks")
    s.add_argument("--max-iterations", type=int, default=None, help="Step budget")
    s.add_argument("--policy", choices=sorted(POLICIES), default=None,
                   help="Cost policy (overrides the file's \"policy\")")
    s.add_argument("--png", default=None, help="Write a debug render of the final state")

    j = sub.add_parser("jumper", help="Print a generated 0606x2 jumper graph")
    j.add_argument("--center", type=float, nargs=2, default=(0.0, 0.0), metavar=("X", "Y"))
    j.add_argument("--prefix", default="jumperX2", help="Region/port id prefix")
    j.add_argument("--png", default=None, help="Write a render of the graph")

    return p


def _solve(args: argparse.Namespace) -> int:
    data = json.loads(Path(args.problem).read_text(encoding="utf-8"))

    overrides = {
        k: v for k, v in (
            ("greedy_multiplier", args.greedy_multiplier),
            ("max_iterations", args.max_iterations),
        ) if v is not None
    }
    if args.ripping:
        overrides["ripping_enabled"] = True
    try:
        config = SolverConfig(**{**data.get("config", {}), **overrides})
    except (TypeError, ValueError) as e:
        print(f"Invalid solver config: {e}", file=sys.stderr)
        return 2

    policy_name = args.policy or data.get("policy", "zero")
    if policy_name not in POLICIES:
        print(f"Unknown policy: {policy_name}", file=sys.stderr)
        return 2
    log.debug("Loaded %s (policy=%s)", args.problem, policy_name)

    try:
        solver = HyperGraphSolver(
            data["graph"], data.get("connections", []),
            config=config, policy=POLICIES[policy_name](),
        )
    except GraphError as e:
        print(str(e), file=sys.stderr)
        for problem in e.problems:
            print(f"  - {problem}", file=sys.stderr)
        return 2

    solver.solve()
    print(json.dumps(solution_to_dict(solver), indent=2))

    if args.png:
        render_png(visualize_solver(solver), args.png)
    return 0 if solver.solved else 1


def _jumper(args: argparse.Namespace) -> int:
    graph = generate_single_jumper_x2_regions(tuple(args.center), args.prefix)
    print(json.dumps(graph_to_dict(graph), indent=2))
    if args.png:
        render_png(visualize_graph(graph), args.png)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.cmd == "solve":
        return _solve(args)
    if args.cmd == "jumper":
        return _jumper(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
