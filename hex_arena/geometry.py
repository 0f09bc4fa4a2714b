"""Tile mesh templates and the border tint rule.

A tile is a flat, two-layer mesh on the ``y = 0`` plane:

* **fill** - the inner hexagon (corners at ``hex_size * (1 - border_width)``)
  triangulated as a 4-triangle fan;
* **border** - the ring between the inner hexagon and the outer hexagon
  (corners at ``hex_size``), two triangles per edge.

Corners sit at ``60 * i + 30`` degrees, i.e. pointy-top hexagons matching
:func:`hex_arena.coords.axial_to_world`. With this winding the face normal
points down (``-y``); instance transforms flip it with a half turn about X
(see :mod:`hex_arena.generator`).

Templates are shared by every instance of a layer, so they carry the layer's
fill and border colors as per-vertex colors.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import numpy.typing as npt

from hex_arena.types import BLACK, WHITE, Color
from hex_arena.utils.color import lerp_color

FloatArray = npt.NDArray[np.float32]
IndexArray = npt.NDArray[np.uint32]

CORNER_COUNT = 6
# Fan over the inner corners.
FILL_INDICES = (0, 1, 2, 0, 2, 3, 0, 3, 4, 0, 4, 5)


def border_color(fill: Color, border_color_factor: float) -> Color:
    """Derive a border color from ``fill``.

    ``t = |f|``; negative factors interpolate toward black, non-negative ones
    toward white. ``0`` leaves the fill untouched, ``-1`` is pure black and
    ``1`` pure white.
    """
    t = abs(border_color_factor)
    target = BLACK if border_color_factor < 0 else WHITE
    return lerp_color(fill, target, t)


def hex_corners(size: float) -> FloatArray:
    """Return the six corners of a pointy-top hexagon as a ``(6, 3)`` array."""
    corners = np.zeros((CORNER_COUNT, 3), dtype=np.float32)
    for i in range(CORNER_COUNT):
        angle = math.radians(i * 60 + 30)
        corners[i, 0] = size * math.cos(angle)
        corners[i, 2] = size * math.sin(angle)
    return corners


@dataclass(eq=False)
class MeshTemplate:
    """Shape shared by all instances of a layer.

    Attributes:
        positions: ``(V, 3)`` float32 vertex positions.
        indices: Flat triangle list of vertex indices (``len % 3 == 0``).
        colors: Optional ``(V, 3)`` float32 per-vertex colors.
        fill_vertex_count: Leading vertices that belong to the fill face;
            the rest form the border ring.
        outline: Optional boundary vertex indices in polygon order. When set,
            the fill vertices also form a convex polygon in order, so a
            rasterizer can paint the outline and then the fill as two polygons.
    """

    positions: FloatArray
    indices: IndexArray
    colors: Optional[FloatArray] = None
    fill_vertex_count: int = 0
    outline: Optional[IndexArray] = None
    disposed: bool = field(default=False, init=False)

    @property
    def vertex_count(self) -> int:
        self._check_alive()
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        self._check_alive()
        return int(self.indices.shape[0]) // 3

    def fill_triangles(self) -> IndexArray:
        """Triangles (``(T, 3)``) that only reference fill vertices."""
        self._check_alive()
        tris = self.indices.reshape(-1, 3)
        return tris[np.all(tris < self.fill_vertex_count, axis=1)]

    def border_triangles(self) -> IndexArray:
        self._check_alive()
        tris = self.indices.reshape(-1, 3)
        return tris[np.any(tris >= self.fill_vertex_count, axis=1)]

    def dispose(self) -> None:
        """Release vertex buffers. Safe to call more than once."""
        if self.disposed:
            return
        self.positions = np.zeros((0, 3), dtype=np.float32)
        self.indices = np.zeros((0,), dtype=np.uint32)
        self.colors = None
        self.outline = None
        self.disposed = True

    def _check_alive(self) -> None:
        if self.disposed:
            raise RuntimeError("MeshTemplate has been disposed")


def build_tile_template(
    hex_size: float,
    fill_color: Color,
    border_color_factor: float,
    border_width: float,
) -> MeshTemplate:
    """Build the fill + border mesh of one tile.

    Vertex layout: 6 inner corners (fill), then 6 inner and 6 outer corners
    (border ring). The inner corners are duplicated so fill and border can
    carry different vertex colors.

    Arguments:
        hex_size: Outer corner distance from the tile center.
        fill_color: Resolved fill color of the layer.
        border_color_factor: Signed tint factor, see :func:`border_color`.
        border_width: Fraction of ``hex_size`` occupied by the ring. ``0``
            yields a degenerate (zero-area) ring.

    Returns:
        MeshTemplate: 18 vertices, 16 triangles.
    """
    inner = hex_corners(hex_size * (1.0 - border_width))
    outer = hex_corners(hex_size)
    positions = np.concatenate([inner, inner, outer]).astype(np.float32)

    ring_inner = CORNER_COUNT
    ring_outer = 2 * CORNER_COUNT
    ring: List[int] = []
    for i in range(CORNER_COUNT):
        j = (i + 1) % CORNER_COUNT
        ring.extend(
            [
                ring_inner + i,
                ring_outer + i,
                ring_outer + j,
                ring_inner + i,
                ring_outer + j,
                ring_inner + j,
            ]
        )
    indices = np.asarray(list(FILL_INDICES) + ring, dtype=np.uint32)

    edge = border_color(fill_color, border_color_factor)
    colors = np.asarray(
        [fill_color] * CORNER_COUNT + [edge] * (2 * CORNER_COUNT), dtype=np.float32
    )
    return MeshTemplate(
        positions=positions,
        indices=indices,
        colors=colors,
        fill_vertex_count=CORNER_COUNT,
        outline=np.arange(ring_outer, ring_outer + CORNER_COUNT, dtype=np.uint32),
    )
