"""Grid generation configuration.

``GridConfig`` is supplied wholesale by an external control surface (see
``app/``) and stays immutable for the duration of a generation pass. Use
:func:`dataclasses.replace` to derive variations::

    >>> from dataclasses import replace
    >>> cfg = replace(default_config(), radius=8, border_color_factor=0.5)

Range enforcement (``CONFIG_RANGES``) belongs to the control surface. The core
only rejects values that would poison geometry (negative radius, non-finite
floats, malformed colors) via :func:`validate_config`.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Dict, Tuple

from hex_arena.types import Color


DEFAULT_RADIUS = 20
DEFAULT_BASE_SCALE_FACTOR = 0.25
DEFAULT_PATH_SCALE_FACTOR = 0.02
DEFAULT_ARENA_SCALE_FACTOR = 0.3
DEFAULT_BORDER_COLOR_FACTOR = -0.3
DEFAULT_HEX_SIZE = 3.0
DEFAULT_BORDER_WIDTH = 0.15

DEFAULT_MAP_COLOR: Color = (0.533, 0.533, 0.533)
DEFAULT_ARENA_COLOR: Color = (1.0, 1.0, 0.0)
DEFAULT_PATH_COLOR: Color = (1.0, 1.0, 1.0)
DEFAULT_BASE_COLORS: Tuple[Color, Color, Color] = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
)

BASE_COUNT = 3

# (min, max, step) as exposed by the control panel
CONFIG_RANGES: Dict[str, Tuple[float, float, float]] = {
    "radius": (5, 50, 1),
    "base_scale_factor": (0.1, 0.5, 0.01),
    "path_scale_factor": (0.01, 0.1, 0.01),
    "arena_scale_factor": (0.1, 0.5, 0.01),
    "border_color_factor": (-1.0, 1.0, 0.1),
}


class InvalidConfig(ValueError):
    """Raised when a ``GridConfig`` cannot produce well-formed geometry."""


@dataclass(frozen=True)
class GridConfig:
    """Immutable input of one generation pass.

    Attributes:
        radius: Grid extent in tiles from the center.
        base_scale_factor: Base region radius as a fraction of ``radius``.
        path_scale_factor: Path half-width as a fraction of ``radius``.
        arena_scale_factor: Arena region radius as a fraction of ``radius``.
        border_color_factor: Signed border tint strength in ``[-1, 1]``;
            negative darkens toward black, positive lightens toward white.
        map_color: Fill color of background (Empty) tiles.
        arena_color: Fill color of the central arena.
        path_color: Fill color of the connecting paths.
        base_colors: Fill colors of the three bases, in anchor order.
        hex_size: Center-to-corner size of one tile in world units.
        border_width: Fraction of ``hex_size`` taken by the border ring.
        render_empty: If True, background tiles get geometry as well.
    """

    radius: int = DEFAULT_RADIUS
    base_scale_factor: float = DEFAULT_BASE_SCALE_FACTOR
    path_scale_factor: float = DEFAULT_PATH_SCALE_FACTOR
    arena_scale_factor: float = DEFAULT_ARENA_SCALE_FACTOR
    border_color_factor: float = DEFAULT_BORDER_COLOR_FACTOR
    map_color: Color = DEFAULT_MAP_COLOR
    arena_color: Color = DEFAULT_ARENA_COLOR
    path_color: Color = DEFAULT_PATH_COLOR
    base_colors: Tuple[Color, ...] = DEFAULT_BASE_COLORS
    hex_size: float = DEFAULT_HEX_SIZE
    border_width: float = DEFAULT_BORDER_WIDTH
    render_empty: bool = False


def default_config() -> GridConfig:
    return GridConfig()


def _check_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfig(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidConfig(f"{name} must be finite, got {value}")


def _check_color(name: str, color: Color) -> None:
    if not isinstance(color, (tuple, list)) or len(color) != 3:
        raise InvalidConfig(f"{name} must have 3 channels, got {color!r}")
    for channel in color:
        _check_finite(name, channel)


def validate_config(config: GridConfig) -> GridConfig:
    """Reject configurations that would propagate bad values into geometry.

    Arguments:
        config: Candidate configuration.

    Returns:
        GridConfig: The same object, for chaining.

    Raises:
        InvalidConfig: On a negative or non-integer radius, non-finite
            factors, an out-of-range border factor / size / width, or
            malformed colors.
    """
    if isinstance(config.radius, bool) or not isinstance(
        config.radius, numbers.Integral
    ):
        raise InvalidConfig(f"radius must be an integer, got {config.radius!r}")
    if config.radius < 0:
        raise InvalidConfig(f"radius must be non-negative, got {config.radius}")

    for name in (
        "base_scale_factor",
        "path_scale_factor",
        "arena_scale_factor",
        "border_color_factor",
        "hex_size",
        "border_width",
    ):
        _check_finite(name, getattr(config, name))

    if not -1.0 <= config.border_color_factor <= 1.0:
        raise InvalidConfig(
            f"border_color_factor must lie in [-1, 1], got {config.border_color_factor}"
        )
    if config.hex_size <= 0:
        raise InvalidConfig(f"hex_size must be positive, got {config.hex_size}")
    if not 0.0 <= config.border_width < 1.0:
        raise InvalidConfig(
            f"border_width must lie in [0, 1), got {config.border_width}"
        )

    _check_color("map_color", config.map_color)
    _check_color("arena_color", config.arena_color)
    _check_color("path_color", config.path_color)
    if len(config.base_colors) != BASE_COUNT:
        raise InvalidConfig(
            f"base_colors must hold {BASE_COUNT} colors, got {len(config.base_colors)}"
        )
    for idx, color in enumerate(config.base_colors):
        _check_color(f"base_colors[{idx}]", color)
    return config
