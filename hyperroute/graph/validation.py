"""Graph validation — structural checks run before any solve."""

from __future__ import annotations

from .models import Connection, HyperGraph


def validate_graph(graph: HyperGraph) -> list[str]:
    """Check a HyperGraph for structural problems. Returns error messages (empty = valid)."""
    errors: list[str] = []

    # ── Region / port IDs must be unique ──
    region_ids: set[str] = set()
    for region in graph.regions:
        if region.region_id in region_ids:
            errors.append(f"Duplicate region_id '{region.region_id}'")
        region_ids.add(region.region_id)

    port_ids: set[str] = set()
    for port in graph.ports:
        if port.port_id in port_ids:
            errors.append(f"Duplicate port_id '{port.port_id}'")
        port_ids.add(port.port_id)

    known_regions = {id(r) for r in graph.regions}
    known_ports = {id(p) for p in graph.ports}

    # ── Each port joins two distinct, known regions that list it ──
    for port in graph.ports:
        if port.region1 is port.region2:
            errors.append(
                f"Port '{port.port_id}': joins region "
                f"'{port.region1.region_id}' to itself"
            )
        for side in (port.region1, port.region2):
            if id(side) not in known_regions:
                errors.append(
                    f"Port '{port.port_id}': references unknown region "
                    f"'{side.region_id}'"
                )
            elif not any(p is port for p in side.ports):
                errors.append(
                    f"Port '{port.port_id}': region '{side.region_id}' "
                    f"does not list it"
                )

    # ── Every port a region lists names that region ──
    for region in graph.regions:
        seen: set[int] = set()
        for port in region.ports:
            if id(port) in seen:
                errors.append(
                    f"Region '{region.region_id}': lists port "
                    f"'{port.port_id}' twice"
                )
            seen.add(id(port))
            if id(port) not in known_ports:
                errors.append(
                    f"Region '{region.region_id}': references unknown port "
                    f"'{port.port_id}'"
                )
            if not port.touches(region):
                errors.append(
                    f"Region '{region.region_id}': lists port '{port.port_id}' "
                    f"which joins '{port.region1.region_id}' and "
                    f"'{port.region2.region_id}'"
                )

    return errors


def validate_connections(connections: list[Connection], graph: HyperGraph) -> list[str]:
    """Check that every connection refers to regions of *graph*."""
    errors: list[str] = []
    known_regions = {id(r) for r in graph.regions}

    seen_ids: set[str] = set()
    for conn in connections:
        if conn.connection_id in seen_ids:
            errors.append(f"Duplicate connection_id '{conn.connection_id}'")
        seen_ids.add(conn.connection_id)
        for label, region in (("start", conn.start_region), ("end", conn.end_region)):
            if id(region) not in known_regions:
                errors.append(
                    f"Connection '{conn.connection_id}': {label} region "
                    f"'{region.region_id}' is not part of the graph"
                )

    return errors
