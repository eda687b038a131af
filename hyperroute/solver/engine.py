"""Routing engine — routes connections through the hypergraph one at a time.

Algorithm overview:
  1. Take the next connection from the backlog and activate it: fresh
     visited-port set, fresh candidate arena, fresh queue seeded with a
     root candidate crossing the start region's first usable port.
  2. Each step pops the lowest-f candidate (skipping ports already
     visited for this connection).
  3. If the candidate enters the destination region, walk its parent
     indices back to the root, commit the route and claim its ports.
     Routes of one network share ports.  With ripping enabled a port
     held by another network is taken and every route on it is evicted
     in full; their connections go back on the backlog.
  4. Otherwise expand: one successor per other port of the entered
     region, grouped by the region it leads to, filtered by the policy,
     costed with ``f = g + h * greedy_multiplier``.  Expanding the seed
     root also offers the start region's other ports as further roots.
  5. An empty frontier fails the run.  Connections are sequential, so a
     stuck connection blocks the rest of the backlog.

The engine does bounded work per ``step()`` and never re-validates the
graph; structural checks happen in the graph adapter at construction.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from hyperroute.graph.models import Connection, HyperGraph, Region, RegionPort
from hyperroute.graph.parsing import load_connections, load_graph

from .assignments import PortAssignments
from .lifecycle import BaseSolver
from .models import (
    Candidate, SolvedRoute, SolverConfig,
    PENDING, SEARCHING, SOLVED, FAILED, PROCESSING, COMPLETE,
    EXHAUSTED_REASON,
)
from .policy import CostPolicy
from .queue import CandidateQueue


log = logging.getLogger(__name__)


class HyperGraphSolver(BaseSolver):
    """Sequential A*-style router with rip-up over a region/port hypergraph.

    Parameters
    ----------
    graph : HyperGraph | dict
        Native graph or its serialized dict (resolved and validated here).
    connections : iterable of Connection | dict
        Ordered routing requests.  Earlier connections are routed first.
    config : SolverConfig | None
        Tuneable parameters.  Uses defaults when *None*.
    policy : CostPolicy | None
        Heuristic and cost hooks.  Zero costs when *None*.
    """

    def __init__(
        self,
        graph: HyperGraph | dict,
        connections: Iterable[Connection | dict],
        *,
        config: SolverConfig | None = None,
        policy: CostPolicy | None = None,
    ) -> None:
        if config is None:
            config = SolverConfig()
        super().__init__(max_iterations=config.max_iterations)
        self.config = config
        self.policy = policy if policy is not None else CostPolicy()

        self.graph = load_graph(graph)
        self.connections = load_connections(connections, self.graph)

        self.unprocessed_connections: list[Connection] = list(self.connections)
        self.solved_routes: list[SolvedRoute] = []
        self.assignments = PortAssignments(on_evict=self._requeue_evicted)

        self.current_connection: Connection | None = None
        self.current_end_region: Region | None = None
        self.candidate_queue = CandidateQueue()
        self.candidates: list[Candidate] = []         # arena for the active connection
        self.visited_ports: set[str] = set()
        self.last_candidate: Candidate | None = None

        self.activation_counts: dict[str, int] = {}
        self.eviction_count = 0
        self._states: dict[str, str] = {
            c.connection_id: PENDING for c in self.connections
        }

        log.info("Solver: starting — %d regions, %d ports, %d connections",
                 len(self.graph.regions), len(self.graph.ports), len(self.connections))
        log.info("Solver config: greedy=%.2f, ripping=%s, rip_cost=%.2f, "
                 "random_rip_fraction=%.2f, max_iterations=%d",
                 config.greedy_multiplier, config.ripping_enabled,
                 config.rip_cost, config.random_rip_fraction, config.max_iterations)

        self._advance()

    # ── Configuration shortcuts ────────────────────────────────────

    @property
    def greedy_multiplier(self) -> float:
        return self.config.greedy_multiplier

    @property
    def ripping_enabled(self) -> bool:
        return self.config.ripping_enabled

    # ── Read-only state ────────────────────────────────────────────

    @property
    def status(self) -> str:
        if self.failed:
            return FAILED
        if self.solved:
            return COMPLETE
        return PROCESSING

    @property
    def assigned_ports(self) -> Mapping[str, SolvedRoute]:
        return self.assignments.view()

    def connection_state(self, connection_id: str) -> str:
        """``pending``, ``searching``, ``solved`` or ``failed``."""
        return self._states[connection_id]

    def peek_candidates(self, k: int = 10) -> list[Candidate]:
        return self.candidate_queue.peek_many(k)

    def candidate_chain(self, candidate: Candidate) -> list[Candidate]:
        """Ancestry of *candidate* in the active arena, root first."""
        chain: list[Candidate] = []
        cursor: Candidate | None = candidate
        while cursor is not None:
            chain.append(cursor)
            cursor = self.candidates[cursor.parent] if cursor.parent is not None else None
        chain.reverse()
        return chain

    def get_output(self) -> list[SolvedRoute]:
        return list(self.solved_routes)

    def visualize(self) -> dict:
        from hyperroute.jumper.visualize import visualize_solver
        return visualize_solver(self)

    # ── Stepping ───────────────────────────────────────────────────

    def _step(self) -> None:
        connection, end_region = self.current_connection, self.current_end_region
        if connection is None or end_region is None:
            raise RuntimeError("no active connection")

        candidate = self.candidate_queue.dequeue()
        while candidate is not None and candidate.port.port_id in self.visited_ports:
            candidate = self.candidate_queue.dequeue()

        if candidate is None:
            self._fail_current()
            return

        self.last_candidate = candidate
        self.visited_ports.add(candidate.port.port_id)

        if candidate.next_region is end_region:
            self._commit(connection, self.candidate_chain(candidate))
            self._advance()
            return

        next_candidates = self._get_next_candidates(candidate, connection)
        for nxt in next_candidates:
            self.candidate_queue.enqueue(nxt)
        log.debug("  [%s] expanded %s (f=%.3f, hops=%d) -> %d candidates, queue=%d",
                  connection.connection_id, candidate.port.port_id, candidate.f,
                  candidate.hops, len(next_candidates), len(self.candidate_queue))

    def _get_next_candidates(self, current: Candidate, connection: Connection) -> list[Candidate]:
        """Successors of *current*: every other port of the region it enters.

        Expanding the seed root also yields the start region's remaining ports,
        as further roots crossing out of the start region.
        """
        region = current.next_region
        if region is None:
            raise RuntimeError(f"candidate {current.port.port_id} enters no region")
        network_id = connection.network_id

        by_region: dict[Region, list[Candidate]] = {}

        def add(nxt: Candidate) -> None:
            by_region.setdefault(nxt.next_region, []).append(nxt)

        for port in region.ports:
            if port is current.port:
                continue
            rips = self._rips_for(port, network_id, current.rips_required)
            if rips is None:
                continue
            add(Candidate(
                port=port,
                hops=current.hops + 1,
                rips_required=rips,
                parent=current.index,
                last_region=region,
                next_region=port.other_region(region),
                last_port=current.port,
            ))

        if current.index == 0:     # the seed root
            start = connection.start_region
            for port in start.ports:
                if port is current.port:
                    continue
                rips = self._rips_for(port, network_id, 0)
                if rips is None:
                    continue
                add(Candidate(
                    port=port,
                    rips_required=rips,
                    last_region=start,
                    next_region=port.other_region(start),
                ))

        selected: list[Candidate] = []
        for group in by_region.values():
            selected.extend(self.policy.select_candidates_for_entering_region(group))

        for nxt in selected:
            if nxt.parent is not None:
                nxt.g = current.g + self.policy.compute_increased_region_cost_if_ports_are_used(
                    region, current.port, nxt.port,
                )
            nxt.h = self.policy.estimate_cost_to_end(nxt.port, connection.end_region)
            nxt.f = nxt.g + nxt.h * self.greedy_multiplier
            self._add_to_arena(nxt)

        return selected

    def _rips_for(self, port: RegionPort, network_id: str, base: int) -> int | None:
        """Rip count after crossing *port*, or None if the port is off limits."""
        rips = base + (1 if self.assignments.conflicts_with(port.port_id, network_id) else 0)
        if rips > 0 and not self.ripping_enabled:
            return None
        return rips

    # ── Connection transitions ─────────────────────────────────────

    def _advance(self) -> None:
        """Activate the next backlog connection, or complete the run."""
        while self.unprocessed_connections:
            connection = self.unprocessed_connections.pop(0)
            self._activate(connection)
            if connection.start_region is not connection.end_region:
                return
            # Start inside the destination: nothing to cross.
            self._commit(connection, [])

        self.current_connection = None
        self.current_end_region = None
        self.candidate_queue.clear()
        self.solved = True
        log.info("Solver: complete — %d routes, %d ports assigned, "
                 "%d iterations, %d evictions",
                 len(self.solved_routes), len(self.assignments),
                 self.iterations, self.eviction_count)

    def _activate(self, connection: Connection) -> None:
        """Make *connection* active with fresh per-connection search state."""
        cid = connection.connection_id
        self.current_connection = connection
        self.current_end_region = connection.end_region
        self.visited_ports = set()
        self.candidates = []
        self.candidate_queue = CandidateQueue()
        self.last_candidate = None
        self.activation_counts[cid] = self.activation_counts.get(cid, 0) + 1
        self._states[cid] = SEARCHING

        start = connection.start_region
        log.debug("Activating %s (%s -> %s), activation #%d, %d left in backlog",
                  cid, start.region_id, connection.end_region.region_id,
                  self.activation_counts[cid], len(self.unprocessed_connections))

        if not start.ports:
            log.debug("  %s: start region %s has no ports", cid, start.region_id)
            return

        # Seed on the first start port this connection may use; the rest
        # are offered when the seed is expanded.
        for port in start.ports:
            rips = self._rips_for(port, connection.network_id, 0)
            if rips is not None:
                break
        else:
            log.debug("  %s: every start port is held by another network", cid)
            return

        root = Candidate(
            port=port,
            rips_required=rips,
            last_region=start,
            next_region=port.other_region(start),
        )
        self._add_to_arena(root)
        self.candidate_queue.enqueue(root)

    def _commit(self, connection: Connection, path: list[Candidate]) -> SolvedRoute:
        """Record a solved route and claim its ports (possibly ripping others)."""
        route = SolvedRoute(connection=connection, path=path)
        self.solved_routes.append(route)
        self._states[connection.connection_id] = SOLVED

        for candidate in path:
            self.assignments.assign(
                candidate.port.port_id, route,
                ripping_enabled=self.ripping_enabled,
            )

        log.info("Solver: %s routed — %d ports, cost=%.3f, rips=%d",
                 connection.connection_id, len(path), route.cost,
                 path[-1].rips_required if path else 0)
        return route

    def _requeue_evicted(self, route: SolvedRoute) -> None:
        """Eviction callback: drop the route and send its connection back."""
        self.solved_routes = [r for r in self.solved_routes if r is not route]
        connection = route.connection
        self._states[connection.connection_id] = PENDING
        self.unprocessed_connections.append(connection)
        self.eviction_count += 1
        log.info("Solver: %s evicted, re-queued (%d in backlog)",
                 connection.connection_id, len(self.unprocessed_connections))

    def _fail_current(self) -> None:
        connection = self.current_connection
        cid = connection.connection_id if connection is not None else "?"
        self.error = f"Connection {cid}: {EXHAUSTED_REASON}"
        self.failed = True
        if connection is not None:
            self._states[cid] = FAILED
        log.warning("Solver: %s after %d iterations (%d routes kept)",
                    self.error, self.iterations, len(self.solved_routes))

    def _add_to_arena(self, candidate: Candidate) -> None:
        candidate.index = len(self.candidates)
        self.candidates.append(candidate)
