"""Common type aliases and enumerations.

``Color`` is the single color representation used across the engine: three
linear RGB channels in ``[0, 1]``. Renderers that need 8-bit values convert at
the edge (see :func:`hex_arena.utils.color.to_rgb8`).
"""

from enum import StrEnum, auto
from typing import Tuple


Color = Tuple[float, float, float]
WorldPosition = Tuple[float, float]


class RegionKind(StrEnum):
    """Mutually exclusive tile classifications (reflected in layer names)."""

    EMPTY = auto()
    PATH = auto()
    BASE = auto()
    ARENA = auto()


BLACK: Color = (0.0, 0.0, 0.0)
WHITE: Color = (1.0, 1.0, 1.0)
