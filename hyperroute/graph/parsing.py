"""Graph parsing — convert raw dicts/JSON into a HyperGraph.

Serialized form::

    {
      "regions": [{"region_id": "A", "port_ids": ["AB"], "d": {...}}, ...],
      "ports":   [{"port_id": "AB", "region1_id": "A", "region2_id": "B",
                   "d": {...}}, ...]
    }

``port_ids`` may be left out of a region, in which case the region owns
every port that names it, in port declaration order.

Connections::

    [{"connection_id": "c1", "start_region_id": "A", "end_region_id": "C",
      "mutually_connected_network_id": "GND"}, ...]

Every id reference is resolved here.  Anything missing or inconsistent
raises ``GraphError`` listing all problems found.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .models import Connection, GraphError, HyperGraph, Region, RegionPort
from .validation import validate_connections, validate_graph


log = logging.getLogger(__name__)


def parse_graph(data: dict) -> HyperGraph:
    """Parse a serialized graph dict into a validated HyperGraph."""
    errors: list[str] = []

    regions: dict[str, Region] = {}
    raw_regions: list[dict] = list(data.get("regions", []))
    for r in raw_regions:
        rid = r["region_id"]
        if rid in regions:
            errors.append(f"Duplicate region_id '{rid}'")
            continue
        regions[rid] = Region(region_id=rid, d=dict(r.get("d") or {}))

    ports: dict[str, RegionPort] = {}
    for p in data.get("ports", []):
        pid = p["port_id"]
        if pid in ports:
            errors.append(f"Duplicate port_id '{pid}'")
            continue
        r1 = regions.get(p["region1_id"])
        r2 = regions.get(p["region2_id"])
        if r1 is None:
            errors.append(f"Port '{pid}': unknown region1_id '{p['region1_id']}'")
        if r2 is None:
            errors.append(f"Port '{pid}': unknown region2_id '{p['region2_id']}'")
        if r1 is None or r2 is None:
            continue
        ports[pid] = RegionPort(port_id=pid, region1=r1, region2=r2, d=dict(p.get("d") or {}))

    # ── Attach ports to their regions ──
    for r in raw_regions:
        region = regions.get(r["region_id"])
        if region is None or region.ports:
            continue
        if "port_ids" not in r:
            region.ports = [p for p in ports.values() if p.touches(region)]
            continue
        for pid in r["port_ids"]:
            port = ports.get(pid)
            if port is None:
                errors.append(f"Region '{region.region_id}': unknown port_id '{pid}'")
                continue
            region.ports.append(port)

    if errors:
        raise GraphError(errors)

    graph = HyperGraph(regions=list(regions.values()), ports=list(ports.values()))
    _check(graph)
    log.debug("Parsed hypergraph: %d regions, %d ports",
              len(graph.regions), len(graph.ports))
    return graph


def parse_connections(data: Iterable[dict], graph: HyperGraph) -> list[Connection]:
    """Parse serialized connections, resolving region ids against *graph*."""
    regions = {r.region_id: r for r in graph.regions}
    errors: list[str] = []
    connections: list[Connection] = []

    for c in data:
        cid = c["connection_id"]
        start = regions.get(c["start_region_id"])
        end = regions.get(c["end_region_id"])
        if start is None:
            errors.append(f"Connection '{cid}': unknown start_region_id '{c['start_region_id']}'")
        if end is None:
            errors.append(f"Connection '{cid}': unknown end_region_id '{c['end_region_id']}'")
        if start is None or end is None:
            continue
        connections.append(Connection(
            connection_id=cid,
            start_region=start,
            end_region=end,
            mutually_connected_network_id=c.get("mutually_connected_network_id"),
        ))

    if errors:
        raise GraphError(errors)
    return connections


# ── Native-or-serialized entry points ─────────────────────────────


def load_graph(graph: HyperGraph | dict) -> HyperGraph:
    """Accept a HyperGraph or its serialized dict; always returns a validated graph."""
    if isinstance(graph, HyperGraph):
        _check(graph)
        return graph
    return parse_graph(graph)


def load_connections(
    connections: Iterable[Connection | dict[str, Any]],
    graph: HyperGraph,
) -> list[Connection]:
    """Accept a mix of Connection objects and serialized dicts."""
    items = list(connections)
    native = [c for c in items if isinstance(c, Connection)]
    errors = validate_connections(native, graph)
    if errors:
        raise GraphError(errors)

    parsed = iter(parse_connections(
        [c for c in items if not isinstance(c, Connection)], graph,
    ))
    result = [c if isinstance(c, Connection) else next(parsed) for c in items]

    errors = validate_connections(result, graph)
    if errors:
        raise GraphError(errors)
    return result


def _check(graph: HyperGraph) -> None:
    errors = validate_graph(graph)
    if errors:
        raise GraphError(errors)
