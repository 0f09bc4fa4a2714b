from typing import List, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt
from PIL import Image, ImageDraw

from hex_arena.generator import LayerBatch
from hex_arena.types import Color
from hex_arena.utils.color import to_rgb8

FloatArray = npt.NDArray[np.float32]

DEFAULT_RESOLUTION = 640
DEFAULT_BACKGROUND: Color = (0.1, 0.1, 0.1)
DEFAULT_MARGIN = 0.02


def instance_vertices(batch: LayerBatch) -> FloatArray:
    """Apply every instance transform to the batch template.

    Returns:
        FloatArray: ``(N, V, 3)`` world-space vertex positions.
    """
    template = batch.template
    homogeneous = np.concatenate(
        [template.positions, np.ones((template.vertex_count, 1), dtype=np.float32)],
        axis=1,
    )
    world = np.einsum("nij,vj->nvi", batch.transforms, homogeneous)
    return world[..., :3].astype(np.float32)


def _bounds_of(
    vertex_sets: Sequence[FloatArray],
) -> Optional[Tuple[float, float, float, float]]:
    mins: List[FloatArray] = []
    maxs: List[FloatArray] = []
    for verts in vertex_sets:
        flat = verts.reshape(-1, 3)
        if flat.size == 0:
            continue
        mins.append(flat[:, [0, 2]].min(axis=0))
        maxs.append(flat[:, [0, 2]].max(axis=0))
    if not mins:
        return None
    lo = np.min(np.stack(mins), axis=0)
    hi = np.max(np.stack(maxs), axis=0)
    return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])


def world_bounds(
    batches: Sequence[LayerBatch],
) -> Optional[Tuple[float, float, float, float]]:
    """Return ``(min_x, min_z, max_x, max_z)`` over all instance vertices."""
    return _bounds_of([instance_vertices(batch) for batch in batches])


def _layer_colors(batch: LayerBatch, vertex: int) -> List[Tuple[int, int, int]]:
    """8-bit color of ``vertex`` for every instance of ``batch``."""
    template = batch.template
    if template.colors is not None:
        color = to_rgb8(tuple(float(c) for c in template.colors[vertex]))
        return [color] * batch.instance_count
    return [to_rgb8(tuple(float(c) for c in row)) for row in batch.colors]


def _draw_batch(
    draw: ImageDraw.ImageDraw, batch: LayerBatch, points: FloatArray
) -> None:
    """Paint one batch; ``points`` holds ``(N, V, 2)`` pixel coordinates."""
    template = batch.template
    if batch.instance_count == 0:
        return
    if template.outline is not None:
        # Outline polygon first, then the fill polygon inside it.
        fill = np.arange(template.fill_vertex_count)
        layers = [(template.outline, template.outline[0]), (fill, fill[0])]
        for ring, color_vertex in layers:
            flat = points[:, ring].reshape(batch.instance_count, -1).tolist()
            colors = _layer_colors(batch, int(color_vertex))
            for xy, color in zip(flat, colors):
                draw.polygon(xy, fill=color)
        return

    for triangles in (template.border_triangles(), template.fill_triangles()):
        for tri in triangles:
            flat = points[:, tri].reshape(batch.instance_count, -1).tolist()
            colors = _layer_colors(batch, int(tri[0]))
            for xy, color in zip(flat, colors):
                draw.polygon(xy, fill=color)


def render(
    batches: Sequence[LayerBatch],
    resolution: int = DEFAULT_RESOLUTION,
    background: Color = DEFAULT_BACKGROUND,
    margin: float = DEFAULT_MARGIN,
) -> Image.Image:
    """
    Rasterize batches top-down (x to the right, z downward) into a square RGBA image.
    Borders are painted before fills so the fill sits on top.
    """
    img = Image.new("RGBA", (resolution, resolution), to_rgb8(background) + (255,))
    vertex_sets = [instance_vertices(batch) for batch in batches]
    bounds = _bounds_of(vertex_sets)
    if bounds is None:
        return img

    min_x, min_z, max_x, max_z = bounds
    extent = max(max_x - min_x, max_z - min_z) or 1.0
    usable = resolution * (1.0 - 2.0 * margin)
    scale = usable / extent
    offset_x = (resolution - (max_x - min_x) * scale) / 2.0
    offset_y = (resolution - (max_z - min_z) * scale) / 2.0

    draw = ImageDraw.Draw(img)
    for batch, verts in zip(batches, vertex_sets):
        points = np.stack(
            [
                (verts[..., 0] - min_x) * scale + offset_x,
                (verts[..., 2] - min_z) * scale + offset_y,
            ],
            axis=-1,
        )
        _draw_batch(draw, batch, points)
    return img


class PreviewRenderer:
    resolution: int
    background: Color
    margin: float

    def __init__(
        self,
        resolution: int = DEFAULT_RESOLUTION,
        background: Color = DEFAULT_BACKGROUND,
        margin: float = DEFAULT_MARGIN,
    ):
        self.resolution = resolution
        self.background = background
        self.margin = margin

    def render(self, batches: Sequence[LayerBatch]) -> Image.Image:
        return render(
            batches,
            resolution=self.resolution,
            background=self.background,
            margin=self.margin,
        )
