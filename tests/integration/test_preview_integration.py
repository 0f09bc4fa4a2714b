import pytest
from PIL import ImageDraw

from hex_arena.generator import generate_grid
from hex_arena.lifecycle import GridLifecycleManager
from hex_arena.renderer.preview import PreviewRenderer, render, world_bounds
from hex_arena.utils.color import to_rgb8
from tests.test_utils import make_config, total_instances


def test_empty_batch_list_renders_background() -> None:
    img = render([], resolution=64, background=(0.0, 0.0, 1.0))
    assert img.size == (64, 64)
    assert img.getpixel((32, 32)) == (0, 0, 255, 255)


def test_center_pixel_is_arena_fill() -> None:
    # the full grid is point-symmetric, so the origin lands on the image center
    config = make_config(8, render_empty=True)
    img = PreviewRenderer(resolution=256).render(generate_grid(config))
    assert img.size == (256, 256)
    assert img.getpixel((128, 128)) == to_rgb8(config.arena_color) + (255,)


def test_bounds_are_centered_on_origin() -> None:
    bounds = world_bounds(generate_grid(make_config(8, render_empty=True)))
    assert bounds is not None
    min_x, min_z, max_x, max_z = bounds
    assert min_x == pytest.approx(-max_x, abs=1e-4)
    assert min_z == pytest.approx(-max_z, abs=1e-4)


def test_disposed_batches_cannot_be_rendered() -> None:
    manager = GridLifecycleManager(make_config(5))
    borrowed = manager.batches
    manager.dispose()
    with pytest.raises(RuntimeError):
        render(borrowed, resolution=32)


def test_single_tile_border_and_fill() -> None:
    # radius 0: the lone origin tile falls inside base 0
    config = make_config(0, border_color_factor=-1.0)
    img = render(generate_grid(config), resolution=200)
    assert img.getpixel((100, 100)) == to_rgb8(config.base_colors[0]) + (255,)
    # just below the top corner, inside the border ring
    assert img.getpixel((100, 11)) == (0, 0, 0, 255)


def test_each_tile_is_painted_with_two_polygons(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls = []
    original = ImageDraw.ImageDraw.polygon

    def counting_polygon(self, xy, *args, **kwargs):
        calls.append(len(xy))
        return original(self, xy, *args, **kwargs)

    monkeypatch.setattr(ImageDraw.ImageDraw, "polygon", counting_polygon)
    batches = generate_grid(make_config(6, render_empty=True))
    render(batches, resolution=64)
    assert len(calls) == 2 * total_instances(batches)
    # flat [x, y, ...] lists of the six hexagon corners
    assert set(calls) == {12}
