"""Grid generation pipeline.

:func:`generate_grid` is the single entry point: it turns a
:class:`~hex_arena.config.GridConfig` into a list of
:class:`LayerBatch` values ready for instanced drawing. The pipeline is pure
and holds no state between calls:

1. Enumerate every tile within ``config.radius`` (:func:`generate_cells`).
2. Classify each tile (:func:`hex_arena.regions.classify`) and compute its
   world position.
3. Group tiles by region / base index (:func:`group_cells`).
4. For each visible group build one shared mesh template and one batch of
   per-instance transforms and colors (:func:`build_batch`).

Background (``EMPTY``) tiles only get geometry when ``config.render_empty``
is set.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np
import numpy.typing as npt
from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap, PVector

from hex_arena.config import GridConfig, validate_config
from hex_arena.coords import AxialCoordinate, axial_to_world, hex_range
from hex_arena.geometry import MeshTemplate, build_tile_template
from hex_arena.regions import (
    ARENA,
    EMPTY,
    PATH,
    Region,
    base_region,
    classify,
    path_cells,
    resolve_radii,
)
from hex_arena.types import Color, RegionKind, WorldPosition
from hex_arena.utils.color import color_array

logger = logging.getLogger(__name__)

FloatArray = npt.NDArray[np.float32]

# Half turn about X so the template's downward-facing fill points up.
FLIP_MATRIX: FloatArray = np.array(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, -1.0, 0.0, 0.0],
        [0.0, 0.0, -1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ],
    dtype=np.float32,
)

LayerKey = Region


def layer_order(config: GridConfig) -> List[Region]:
    """Draw order of layers: empty, path, bases by index, arena."""
    return (
        [EMPTY, PATH]
        + [base_region(i) for i in range(len(config.base_colors))]
        + [ARENA]
    )


@dataclass(frozen=True)
class Cell:
    """One classified tile.

    Attributes:
        coordinate: Axial address.
        world_position: ``(x, z)`` center on the ground plane.
        region: Assigned region.
    """

    coordinate: AxialCoordinate
    world_position: WorldPosition
    region: Region


@dataclass(eq=False)
class LayerBatch:
    """Instanced draw batch for one region / base variant.

    The template is owned by the batch; positions and colors hold one row per
    instance. Batches are created by :func:`build_batch` and released through
    :meth:`dispose` (normally by
    :class:`~hex_arena.lifecycle.GridLifecycleManager`).

    Attributes:
        region: Region shared by every instance.
        template: Shared tile mesh.
        positions: ``(N, 3)`` float32 instance translations ``(x, 0, z)``.
        colors: ``(N, 3)`` float32 instance fill colors.
    """

    region: Region
    template: MeshTemplate
    positions: FloatArray
    colors: FloatArray
    disposed: bool = field(default=False, init=False)

    @property
    def name(self) -> str:
        return self.region.name

    @property
    def instance_count(self) -> int:
        self._check_alive()
        return int(self.positions.shape[0])

    @property
    def transforms(self) -> FloatArray:
        """``(N, 4, 4)`` instance matrices: translation combined with the flip."""
        self._check_alive()
        matrices = np.repeat(FLIP_MATRIX[np.newaxis, :, :], self.instance_count, axis=0)
        matrices[:, :3, 3] = self.positions
        return matrices

    def dispose(self) -> None:
        """Release the template and instance buffers. Idempotent."""
        if self.disposed:
            return
        self.template.dispose()
        self.positions = np.zeros((0, 3), dtype=np.float32)
        self.colors = np.zeros((0, 3), dtype=np.float32)
        self.disposed = True

    def _check_alive(self) -> None:
        if self.disposed:
            raise RuntimeError(f"LayerBatch '{self.name}' has been disposed")


def region_color(region: Region, config: GridConfig) -> Color:
    """Fill color of ``region``; bases pick from ``base_colors`` by index."""
    if region.kind == RegionKind.BASE:
        assert region.index is not None
        return config.base_colors[region.index]
    if region.kind == RegionKind.ARENA:
        return config.arena_color
    if region.kind == RegionKind.PATH:
        return config.path_color
    return config.map_color


def generate_cells(config: GridConfig) -> PVector[Cell]:
    """Enumerate and classify every tile of the grid."""
    radii = resolve_radii(config)
    paths = path_cells(config.radius, radii.path_width)
    cells: List[Cell] = []
    for coord in hex_range(config.radius):
        cells.append(
            Cell(
                coordinate=coord,
                world_position=axial_to_world(coord.q, coord.r, config.hex_size),
                region=classify(coord.q, coord.r, config, radii, paths),
            )
        )
    return pvector(cells)


def group_cells(cells: PVector[Cell]) -> PMap[LayerKey, PVector[Cell]]:
    """Group cells by region, keeping enumeration order inside each group."""
    groups: Dict[LayerKey, List[Cell]] = {}
    for cell in cells:
        groups.setdefault(cell.region, []).append(cell)
    return pmap({key: pvector(value) for key, value in groups.items()})


def build_batch(region: Region, cells: PVector[Cell], config: GridConfig) -> LayerBatch:
    """Build the shared template and instance buffers for one group."""
    fill = region_color(region, config)
    template = build_tile_template(
        config.hex_size, fill, config.border_color_factor, config.border_width
    )
    positions = np.zeros((len(cells), 3), dtype=np.float32)
    for i, cell in enumerate(cells):
        x, z = cell.world_position
        positions[i, 0] = x
        positions[i, 2] = z
    colors = color_array([fill] * len(cells))
    return LayerBatch(
        region=region, template=template, positions=positions, colors=colors
    )


@dataclass(frozen=True)
class GridSnapshot:
    """Cells and batches produced by one generation pass."""

    config: GridConfig
    cells: PVector[Cell]
    batches: Tuple[LayerBatch, ...]

    @property
    def instance_count(self) -> int:
        return sum(batch.instance_count for batch in self.batches)

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse per-region cell counts plus the instance total, for diagnostics."""
        counts: Dict[str, int] = {}
        for cell in self.cells:
            counts[cell.region.name] = counts.get(cell.region.name, 0) + 1
        return pmap(
            {
                "radius": self.config.radius,
                "cells": len(self.cells),
                "regions": pmap(counts),
                "batches": pmap(
                    {batch.name: batch.instance_count for batch in self.batches}
                ),
                "instances": self.instance_count,
            }
        )


def generate_snapshot(config: GridConfig) -> GridSnapshot:
    """Run the full pipeline and keep the cell set alongside the batches.

    Arguments:
        config: Generation config; validated before any work happens.

    Returns:
        GridSnapshot: Cells plus batches in :func:`layer_order`.

    Raises:
        InvalidConfig: If ``config`` fails :func:`validate_config`.
    """
    validate_config(config)
    cells = generate_cells(config)
    groups = group_cells(cells)

    batches: List[LayerBatch] = []
    for region in layer_order(config):
        if region == EMPTY and not config.render_empty:
            continue
        group = groups.get(region)
        if not group:
            continue
        batches.append(build_batch(region, group, config))

    logger.debug(
        f"Generated {len(cells)} cells (radius={config.radius}) into "
        f"{len(batches)} batches: "
        + ", ".join(f"{b.name}={b.instance_count}" for b in batches)
    )
    return GridSnapshot(config=config, cells=cells, batches=tuple(batches))


def generate_grid(config: GridConfig) -> List[LayerBatch]:
    """Return the instanced layer batches for ``config``."""
    return list(generate_snapshot(config).batches)
