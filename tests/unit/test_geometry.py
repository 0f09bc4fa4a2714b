import numpy as np
import pytest

from hex_arena.geometry import (
    border_color,
    build_tile_template,
    hex_corners,
)
from hex_arena.generator import FLIP_MATRIX
from hex_arena.types import BLACK, WHITE, Color
from hex_arena.utils.color import lerp_color, to_rgb8


FILL: Color = (0.2, 0.4, 0.6)


@pytest.mark.parametrize(
    "factor, expected",
    [
        (0.0, FILL),
        (-1.0, BLACK),
        (1.0, WHITE),
        (0.5, (0.6, 0.7, 0.8)),
        (-0.5, (0.1, 0.2, 0.3)),
        (-0.3, (0.14, 0.28, 0.42)),
    ],
)
def test_border_color_law(factor: float, expected: Color) -> None:
    assert border_color(FILL, factor) == pytest.approx(expected)


def test_lerp_color_rejects_out_of_range_amount() -> None:
    with pytest.raises(ValueError):
        lerp_color(FILL, WHITE, 1.5)


def test_to_rgb8_clamps_and_rounds() -> None:
    assert to_rgb8((1.0, 0.5, -0.2)) == (255, 128, 0)


def test_hex_corners_lie_on_circle() -> None:
    corners = hex_corners(3.0)
    assert corners.shape == (6, 3)
    assert np.allclose(np.linalg.norm(corners, axis=1), 3.0)
    assert np.allclose(corners[:, 1], 0.0)
    # pointy-top: first corner at 30 degrees
    assert corners[0, 0] == pytest.approx(3.0 * np.cos(np.radians(30)))


def test_tile_template_layout() -> None:
    template = build_tile_template(3.0, FILL, -0.3, 0.2)
    assert template.vertex_count == 18
    assert template.triangle_count == 16
    assert template.fill_triangles().shape == (4, 3)
    assert template.border_triangles().shape == (12, 3)
    assert template.indices.max() < template.vertex_count

    radii = np.linalg.norm(template.positions, axis=1)
    assert np.allclose(radii[:12], 3.0 * 0.8)
    assert np.allclose(radii[12:], 3.0)


def test_tile_template_outline_is_outer_ring() -> None:
    template = build_tile_template(3.0, FILL, -0.3, 0.2)
    assert template.outline is not None
    assert template.outline.tolist() == [12, 13, 14, 15, 16, 17]
    outer = template.positions[template.outline]
    assert np.allclose(np.linalg.norm(outer, axis=1), 3.0)
    template.dispose()
    assert template.outline is None


def test_tile_template_vertex_colors() -> None:
    template = build_tile_template(3.0, FILL, 1.0, 0.15)
    assert template.colors is not None
    assert np.allclose(template.colors[:6], FILL)
    assert np.allclose(template.colors[6:], WHITE)


def _normals(positions: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    a, b, c = (positions[triangles[:, k]] for k in range(3))
    return np.cross(b - a, c - a)


def test_flip_turns_all_faces_upward() -> None:
    template = build_tile_template(3.0, FILL, 0.0, 0.15)
    tris = template.indices.reshape(-1, 3)
    assert np.all(_normals(template.positions, tris)[:, 1] < 0)

    flipped = template.positions @ FLIP_MATRIX[:3, :3].T
    assert np.all(_normals(flipped, tris)[:, 1] > 0)


def test_template_dispose_is_idempotent() -> None:
    template = build_tile_template(3.0, FILL, 0.0, 0.15)
    template.dispose()
    template.dispose()
    assert template.disposed
    with pytest.raises(RuntimeError):
        _ = template.vertex_count
