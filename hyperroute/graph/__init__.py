"""Hypergraph model — regions joined by ports, plus routing requests.

Submodules:
  models         Region, RegionPort, Connection, HyperGraph, GraphError.
  validation     Structural checks (ids, bidirectional consistency).
  parsing        Serialized dict -> object graph (parse_graph, load_graph).
  serialization  Object graph -> JSON-safe dict (graph_to_dict).
"""

from .models import (
    Region, RegionPort, Connection, HyperGraph, GraphError,
    RegionId, PortId, ConnectionId,
    add_port,
)
from .validation import validate_graph, validate_connections
from .parsing import parse_graph, parse_connections, load_graph, load_connections
from .serialization import graph_to_dict, connections_to_dict

__all__ = [
    # Models
    "Region", "RegionPort", "Connection", "HyperGraph", "GraphError",
    "RegionId", "PortId", "ConnectionId",
    "add_port",
    # Validation
    "validate_graph", "validate_connections",
    # Parsing
    "parse_graph", "parse_connections", "load_graph", "load_connections",
    # Serialization
    "graph_to_dict", "connections_to_dict",
]
