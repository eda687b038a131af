"""Graph serialization — convert a HyperGraph to JSON-safe dicts."""

from __future__ import annotations

from typing import Any

from .models import Connection, HyperGraph


def graph_to_dict(graph: HyperGraph) -> dict:
    """Convert a HyperGraph to a JSON-serializable dict (inverse of parse_graph)."""
    return {
        "regions": [
            {
                "region_id": r.region_id,
                "port_ids": [p.port_id for p in r.ports],
                **({"d": payload_to_dict(r.d)} if r.d else {}),
            }
            for r in graph.regions
        ],
        "ports": [
            {
                "port_id": p.port_id,
                "region1_id": p.region1.region_id,
                "region2_id": p.region2.region_id,
                **({"d": payload_to_dict(p.d)} if p.d else {}),
            }
            for p in graph.ports
        ],
    }


def connections_to_dict(connections: list[Connection]) -> list[dict]:
    """Serialize connections (inverse of parse_connections)."""
    return [
        {
            "connection_id": c.connection_id,
            "start_region_id": c.start_region.region_id,
            "end_region_id": c.end_region.region_id,
            **({"mutually_connected_network_id": c.mutually_connected_network_id}
               if c.mutually_connected_network_id is not None else {}),
        }
        for c in connections
    ]


def payload_to_dict(d: dict[str, Any]) -> dict[str, Any]:
    """Make an opaque payload JSON-safe.

    Values exposing ``to_dict()`` (e.g. jumper ``Bounds``) are expanded.
    """
    out: dict[str, Any] = {}
    for key, value in d.items():
        if hasattr(value, "to_dict"):
            value = value.to_dict()
        out[key] = value
    return out
