"""Hypergraph dataclasses — regions, ports, connections.

Regions and ports reference each other directly.  They compare and hash
by identity so they can be used as dict keys and set members while a
solve is running.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


RegionId = str
PortId = str
ConnectionId = str


@dataclass(eq=False)
class Region:
    """A node of the routing hypergraph."""

    region_id: RegionId
    ports: list[RegionPort] = field(default_factory=list)
    d: dict[str, Any] = field(default_factory=dict)     # opaque domain payload

    def __repr__(self) -> str:
        return f"Region({self.region_id!r}, ports={len(self.ports)})"


@dataclass(eq=False)
class RegionPort:
    """The connector between exactly two regions.  Directionless."""

    port_id: PortId
    region1: Region
    region2: Region
    d: dict[str, Any] = field(default_factory=dict)     # position etc.

    def other_region(self, region: Region) -> Region:
        """Return the region on the far side of this port from *region*."""
        return self.region2 if self.region1 is region else self.region1

    def touches(self, region: Region) -> bool:
        return self.region1 is region or self.region2 is region

    def __repr__(self) -> str:
        return (f"RegionPort({self.port_id!r}, "
                f"{self.region1.region_id!r}<->{self.region2.region_id!r})")


@dataclass(eq=False)
class Connection:
    """A routing request between a start and an end region."""

    connection_id: ConnectionId
    start_region: Region
    end_region: Region
    mutually_connected_network_id: str | None = None

    @property
    def network_id(self) -> str:
        """Grouping key for port sharing.

        Connections without an explicit network form a network of one.
        """
        if self.mutually_connected_network_id is not None:
            return self.mutually_connected_network_id
        return self.connection_id

    def __repr__(self) -> str:
        return (f"Connection({self.connection_id!r}, "
                f"{self.start_region.region_id!r}->{self.end_region.region_id!r})")


@dataclass
class HyperGraph:
    """All regions and ports of a routing problem.

    ``get_region`` / ``get_port`` scan the lists on every call, so they
    always see the current contents.  They are for building graphs,
    tests and diagnostics; the solver holds object references and never
    looks ids up.
    """

    regions: list[Region] = field(default_factory=list)
    ports: list[RegionPort] = field(default_factory=list)

    def get_region(self, region_id: RegionId) -> Region | None:
        return self._region_index().get(region_id)

    def get_port(self, port_id: PortId) -> RegionPort | None:
        return self._port_index().get(port_id)

    def _region_index(self) -> dict[RegionId, Region]:
        return {r.region_id: r for r in self.regions}

    def _port_index(self) -> dict[PortId, RegionPort]:
        return {p.port_id: p for p in self.ports}


class GraphError(Exception):
    """Raised when a graph or connection list is structurally invalid."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        summary = "; ".join(self.problems[:5])
        if len(self.problems) > 5:
            summary += f"; ... ({len(self.problems) - 5} more)"
        super().__init__(f"Invalid hypergraph: {summary}")


# ── Construction helpers ──────────────────────────────────────────


def add_port(
    port_id: PortId,
    region1: Region,
    region2: Region,
    d: dict[str, Any] | None = None,
) -> RegionPort:
    """Create a port between two regions and register it with both."""
    port = RegionPort(port_id=port_id, region1=region1, region2=region2, d=d or {})
    region1.ports.append(port)
    region2.ports.append(port)
    return port
