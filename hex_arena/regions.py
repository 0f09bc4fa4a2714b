"""Region classification.

Every tile belongs to exactly one region, decided by analytic tests evaluated
in a fixed priority order; the first matching test wins:

1. ``BASE``  - within ``base_radius`` of one of three corner anchors.
2. ``ARENA`` - within ``arena_radius`` of the origin.
3. ``PATH``  - within ``path_width`` of a point on an anchor-to-origin walk.
4. ``EMPTY`` - everything else.

Region radii come from the config scale factors via :func:`resolve_radii`.
Anchor and walk direction tables are fixed and do not depend on config.
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from pyrsistent import pset
from pyrsistent.typing import PSet

from hex_arena.config import GridConfig, validate_config
from hex_arena.coords import ORIGIN, AxialCoordinate, hex_distance, hex_range
from hex_arena.types import RegionKind


# Unit step from each anchor toward the origin, indexed like the anchors.
PATH_STEPS: Tuple[Tuple[int, int], ...] = ((-1, 1), (1, 0), (0, -1))

ARENA_FALLBACK_FACTOR = 0.5
BASE_FALLBACK_FACTOR = 0.3
PATH_FALLBACK_WIDTH = 2


@dataclass(frozen=True)
class Region:
    """Classification of a single tile.

    Attributes:
        kind: Region category.
        index: Anchor index (0..2) for ``BASE``; ``None`` for other kinds.
    """

    kind: RegionKind
    index: Optional[int] = None

    @property
    def name(self) -> str:
        if self.index is None:
            return str(self.kind)
        return f"{self.kind}:{self.index}"


EMPTY = Region(RegionKind.EMPTY)
PATH = Region(RegionKind.PATH)
ARENA = Region(RegionKind.ARENA)


def base_region(index: int) -> Region:
    return Region(RegionKind.BASE, index)


@dataclass(frozen=True)
class ResolvedRadii:
    """Region extents derived from a config, in hex steps."""

    arena_radius: int
    base_radius: int
    path_width: int


def _scaled(radius: int, factor: float, fallback: float) -> int:
    # Fallback applies only when the product is exactly zero.
    product = radius * factor
    if product == 0:
        product = fallback
    return math.floor(product)


def resolve_radii(config: GridConfig) -> ResolvedRadii:
    """Compute ``floor(radius * factor)`` for each region.

    A product of exactly zero falls back to ``radius * 0.5`` (arena),
    ``radius * 0.3`` (base) or the literal ``2`` (path). Small but non-zero
    products are floored as-is and do not trigger the fallback.

    Raises:
        InvalidConfig: If the radius or any scale factor is malformed.
    """
    validate_config(config)
    radius = config.radius
    return ResolvedRadii(
        arena_radius=_scaled(
            radius, config.arena_scale_factor, radius * ARENA_FALLBACK_FACTOR
        ),
        base_radius=_scaled(
            radius, config.base_scale_factor, radius * BASE_FALLBACK_FACTOR
        ),
        path_width=_scaled(radius, config.path_scale_factor, PATH_FALLBACK_WIDTH),
    )


def base_anchors(radius: int) -> Tuple[AxialCoordinate, ...]:
    """Return the three base anchors in index order."""
    return (
        AxialCoordinate(radius, -radius),
        AxialCoordinate(-radius, 0),
        AxialCoordinate(0, radius),
    )


def walk_paths(radius: int) -> Iterator[AxialCoordinate]:
    """Yield the points visited walking each anchor toward the origin.

    Each walk starts at its anchor and stops before the origin or as soon as
    ``|q|`` or ``|r|`` leaves the grid radius. Points are returned anchor by
    anchor, in walk order. Every walk reaches the origin after ``radius`` steps.
    """
    for anchor, (dq, dr) in zip(base_anchors(radius), PATH_STEPS):
        current = anchor
        while (
            current != ORIGIN and abs(current.q) <= radius and abs(current.r) <= radius
        ):
            yield current
            current = current.step(dq, dr)


def path_points(radius: int) -> List[AxialCoordinate]:
    return list(walk_paths(radius))


def base_index_at(
    coord: AxialCoordinate, radius: int, base_radius: int
) -> Optional[int]:
    """Return the first anchor index whose base contains ``coord``."""
    for idx, anchor in enumerate(base_anchors(radius)):
        if hex_distance(coord, anchor) <= base_radius:
            return idx
    return None


def is_in_arena(coord: AxialCoordinate, arena_radius: int) -> bool:
    return hex_distance(coord, ORIGIN) <= arena_radius


def is_on_path(coord: AxialCoordinate, radius: int, path_width: int) -> bool:
    """True if ``coord`` lies within ``path_width`` of any walked path point."""
    return any(
        hex_distance(coord, point) <= path_width for point in walk_paths(radius)
    )


def path_cells(radius: int, path_width: int) -> PSet[AxialCoordinate]:
    """Every coordinate within ``path_width`` of a walked path point.

    Membership in the returned set is equivalent to :func:`is_on_path`, so a
    generation pass builds it once and tests each tile with a set lookup.
    """
    return pset(
        point.step(offset.q, offset.r)
        for point in walk_paths(radius)
        for offset in hex_range(path_width)
    )


def classify(
    q: int,
    r: int,
    config: GridConfig,
    radii: Optional[ResolvedRadii] = None,
    paths: Optional[PSet[AxialCoordinate]] = None,
) -> Region:
    """Classify tile ``(q, r)`` under ``config``.

    Arguments:
        q: Axial column.
        r: Axial row.
        config: Generation config (only ``radius`` and the scale factors are read).
        radii: Precomputed radii; resolved from ``config`` when omitted.
        paths: Precomputed :func:`path_cells`; the walks are scanned when omitted.

    Returns:
        Region: The highest-priority matching region.
    """
    if radii is None:
        radii = resolve_radii(config)
    coord = AxialCoordinate(q, r)

    base_idx = base_index_at(coord, config.radius, radii.base_radius)
    if base_idx is not None:
        return base_region(base_idx)
    if is_in_arena(coord, radii.arena_radius):
        return ARENA
    if paths is not None:
        if coord in paths:
            return PATH
    elif is_on_path(coord, config.radius, radii.path_width):
        return PATH
    return EMPTY
