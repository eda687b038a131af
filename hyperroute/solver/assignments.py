"""Assigned-port map — which solved routes currently cross each port.

Every live route on a port is recorded.  All routes on one port belong
to the same network; the first of them is the port's holder, the rest
share it.  ``assign`` and ``evict`` are the only operations that write
the map, so the "one network per port" rule is enforced here and
nowhere else.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping

from .models import SolvedRoute


log = logging.getLogger(__name__)


class PortAssignments:
    """Port-id -> SolvedRoute ownership with rip-up eviction.

    *on_evict* is called with every route that loses its ports, after
    they have been released; the solver uses it to re-queue the route's
    connection.
    """

    def __init__(self, on_evict: Callable[[SolvedRoute], None] | None = None) -> None:
        self._owners: dict[str, SolvedRoute] = {}          # port_id -> holder
        self._routes: dict[str, list[SolvedRoute]] = {}    # port_id -> holder + sharers
        self._on_evict = on_evict
        self.rip_counts: dict[str, int] = {}     # port_id -> times ripped away

    # ── Queries ────────────────────────────────────────────────────

    def get(self, port_id: str) -> SolvedRoute | None:
        return self._owners.get(port_id)

    def routes_on(self, port_id: str) -> list[SolvedRoute]:
        """Every live route crossing *port_id*, holder first."""
        return list(self._routes.get(port_id, ()))

    def conflicts_with(self, port_id: str, network_id: str) -> bool:
        """True if *port_id* is held by a route of a different network."""
        owner = self._owners.get(port_id)
        return owner is not None and owner.connection.network_id != network_id

    def ports_of(self, route: SolvedRoute) -> list[str]:
        """Ports *route* holds or shares."""
        return [pid for pid, routes in self._routes.items()
                if any(r is route for r in routes)]

    def view(self) -> Mapping[str, SolvedRoute]:
        """Read-only live view of port holders."""
        return MappingProxyType(self._owners)

    def __contains__(self, port_id: str) -> bool:
        return port_id in self._owners

    def __len__(self) -> int:
        return len(self._owners)

    # ── Mutators ───────────────────────────────────────────────────

    def assign(self, port_id: str, route: SolvedRoute, *, ripping_enabled: bool) -> bool:
        """Record *route* on *port_id*.

        A free port is taken.  A port held by the same network is shared:
        *route* is recorded next to the current holder.  A port held by
        another network is taken only when ripping is enabled, and every
        route on it is evicted in full.  Returns True if *route* is now
        the port's holder.
        """
        routes = self._routes.get(port_id)
        if not routes:
            self._routes[port_id] = [route]
            self._owners[port_id] = route
            return True
        if any(r is route for r in routes):
            return self._owners[port_id] is route

        owner = routes[0]
        if owner.connection.network_id == route.connection.network_id:
            routes.append(route)
            return False
        if not ripping_enabled:
            log.debug("Port %s held by %s; ripping disabled, not reassigned",
                      port_id, owner.connection.connection_id)
            return False

        self.rip_counts[port_id] = self.rip_counts.get(port_id, 0) + 1
        log.info("Rip-up: %s takes port %s from %s",
                 route.connection.connection_id, port_id,
                 ", ".join(r.connection.connection_id for r in routes))
        for victim in list(routes):
            self.evict(victim)
        self._routes[port_id] = [route]
        self._owners[port_id] = route
        return True

    def evict(self, route: SolvedRoute) -> list[str]:
        """Release every port *route* crosses.  Returns the released port ids.

        A port still crossed by a same-network route passes to that route
        instead of becoming free.
        """
        released = self.ports_of(route)
        for pid in released:
            remaining = [r for r in self._routes[pid] if r is not route]
            if remaining:
                self._routes[pid] = remaining
                self._owners[pid] = remaining[0]
            else:
                del self._routes[pid]
                del self._owners[pid]
        log.debug("Evicted %s: released %d ports",
                  route.connection.connection_id, len(released))
        if self._on_evict is not None:
            self._on_evict(route)
        return released
