"""Color helpers shared by geometry building and preview rendering.

All arithmetic is plain per-channel linear interpolation on ``[0, 1]`` floats;
no gamma / color space conversion happens anywhere in the engine.
"""

from typing import Sequence, Tuple

import numpy as np
import numpy.typing as npt

from hex_arena.types import Color

FloatArray = npt.NDArray[np.float32]


def lerp_color(a: Color, b: Color, t: float) -> Color:
    """Return ``a * (1 - t) + b * t`` channel by channel."""
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"Interpolation amount must lie in [0, 1], got {t}")
    return (
        a[0] * (1.0 - t) + b[0] * t,
        a[1] * (1.0 - t) + b[1] * t,
        a[2] * (1.0 - t) + b[2] * t,
    )


def to_rgb8(color: Color) -> Tuple[int, int, int]:
    """Quantize a ``[0, 1]`` color to 8-bit channels (clamped)."""
    arr: FloatArray = np.clip(np.asarray(color, dtype=np.float32), 0.0, 1.0)
    r, g, b = (np.round(arr * 255.0)).astype(np.uint8).tolist()
    return int(r), int(g), int(b)


def color_array(colors: Sequence[Color]) -> FloatArray:
    """Stack colors into an ``(N, 3)`` float32 buffer."""
    if not colors:
        return np.zeros((0, 3), dtype=np.float32)
    return np.asarray(colors, dtype=np.float32).reshape(-1, 3)
