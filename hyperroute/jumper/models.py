"""Jumper geometry payloads — what the generator stores in ``Region.d`` / ``RegionPort.d``."""

from __future__ import annotations

from dataclasses import dataclass

from shapely.geometry import Point

from hyperroute.graph.models import Region, RegionPort


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle in mm."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def intersection(self, other: Bounds, tol: float = 1e-9) -> Bounds | None:
        """Overlap of two rectangles (possibly zero-width), or None if apart."""
        min_x = max(self.min_x, other.min_x)
        max_x = min(self.max_x, other.max_x)
        min_y = max(self.min_y, other.min_y)
        max_y = min(self.max_y, other.max_y)
        if min_x > max_x + tol or min_y > max_y + tol:
            return None
        return Bounds(min_x, max(min_x, max_x), min_y, max(min_y, max_y))

    def to_dict(self) -> dict:
        return {
            "min_x": self.min_x, "max_x": self.max_x,
            "min_y": self.min_y, "max_y": self.max_y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Bounds:
        return cls(
            min_x=float(data["min_x"]), max_x=float(data["max_x"]),
            min_y=float(data["min_y"]), max_y=float(data["max_y"]),
        )


# ── Payload accessors ──────────────────────────────────────────────


def region_bounds(region: Region) -> Bounds | None:
    """Bounds of a jumper region (dicts from parsed JSON are converted)."""
    bounds = region.d.get("bounds")
    if bounds is None or isinstance(bounds, Bounds):
        return bounds
    return Bounds.from_dict(bounds)


def region_center(region: Region) -> Point | None:
    bounds = region_bounds(region)
    if bounds is None:
        return None
    return Point(*bounds.center)


def port_point(port: RegionPort) -> Point | None:
    if "x" not in port.d or "y" not in port.d:
        return None
    return Point(float(port.d["x"]), float(port.d["y"]))


def is_through_jumper(region: Region) -> bool:
    return bool(region.d.get("is_through_jumper"))


def is_pad(region: Region) -> bool:
    return bool(region.d.get("is_pad"))
