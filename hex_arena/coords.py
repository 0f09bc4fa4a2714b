"""Axial hex coordinate math.

Pointy-top hexagons addressed by integer ``(q, r)`` with the implied third
cube coordinate ``s = -q - r``. All functions here are pure; the region tests
in :mod:`hex_arena.regions` and the enumeration in
:mod:`hex_arena.generator` are built on top of them.
"""

import math
from dataclasses import dataclass
from typing import Iterator

from hex_arena.types import WorldPosition

SQRT3 = math.sqrt(3.0)


@dataclass(frozen=True)
class AxialCoordinate:
    """Hex grid address.

    Attributes:
        q: Column axis.
        r: Row axis.
    """

    q: int
    r: int

    @property
    def s(self) -> int:
        """Derived cube coordinate (``q + r + s == 0``)."""
        return -self.q - self.r

    def step(self, dq: int, dr: int) -> "AxialCoordinate":
        return AxialCoordinate(self.q + dq, self.r + dr)


ORIGIN = AxialCoordinate(0, 0)


def axial_to_world(q: int, r: int, hex_size: float) -> WorldPosition:
    """Return the ``(x, z)`` center of tile ``(q, r)`` on the ground plane."""
    x = hex_size * (SQRT3 * q + SQRT3 / 2 * r)
    z = hex_size * (3.0 / 2.0 * r)
    return x, z


def hex_distance(a: AxialCoordinate, b: AxialCoordinate) -> int:
    """Number of unit steps between two tiles: ``max(|dq|, |dr|, |ds|)``."""
    dq = a.q - b.q
    dr = a.r - b.r
    ds = -dq - dr
    return max(abs(dq), abs(dr), abs(ds))


def hex_range(radius: int) -> Iterator[AxialCoordinate]:
    """Yield every coordinate within ``radius`` steps of the origin.

    Iteration order is ``q`` ascending, then ``r`` ascending; generation
    relies on it for stable instance ordering inside each layer.
    """
    for q in range(-radius, radius + 1):
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
            yield AxialCoordinate(q, r)


def hex_cell_count(radius: int) -> int:
    """Closed-form tile count of a hexagonal grid of ``radius``."""
    if radius < 0:
        raise ValueError(f"Radius must be non-negative, got {radius}")
    return 3 * radius * (radius + 1) + 1
