"""Ownership and regeneration of layer batches.

:class:`GridLifecycleManager` is the only owner of the batches it creates.
Renderers borrow the tuple returned by :attr:`GridLifecycleManager.batches`
and must drop it before the next :meth:`~GridLifecycleManager.regenerate` or
:meth:`~GridLifecycleManager.dispose` call, after which the borrowed batches
raise on access.

Every regeneration is a full rebuild; nothing is diffed against the previous
cell set.
"""

import logging
from typing import Optional, Tuple

from pyrsistent import pvector
from pyrsistent.typing import PVector

from hex_arena.config import GridConfig, validate_config
from hex_arena.generator import Cell, GridSnapshot, LayerBatch, generate_snapshot

logger = logging.getLogger(__name__)


class GridLifecycleManager:
    """Holds the current batch set and swaps it on reconfiguration.

    Example:
        >>> with GridLifecycleManager() as grid:
        ...     batches = grid.regenerate(GridConfig(radius=10))
    """

    _snapshot: Optional[GridSnapshot]

    def __init__(self, config: Optional[GridConfig] = None):
        self._snapshot = None
        if config is not None:
            self.regenerate(config)

    @property
    def batches(self) -> Tuple[LayerBatch, ...]:
        if self._snapshot is None:
            return ()
        return self._snapshot.batches

    @property
    def cells(self) -> PVector[Cell]:
        if self._snapshot is None:
            return pvector()
        return self._snapshot.cells

    @property
    def config(self) -> Optional[GridConfig]:
        return None if self._snapshot is None else self._snapshot.config

    @property
    def snapshot(self) -> Optional[GridSnapshot]:
        return self._snapshot

    @property
    def instance_count(self) -> int:
        return sum(batch.instance_count for batch in self.batches)

    def regenerate(self, config: GridConfig) -> Tuple[LayerBatch, ...]:
        """Dispose every owned batch and build a fresh set for ``config``.

        The config is validated first, so a rejected config leaves the current
        batches untouched.

        Raises:
            InvalidConfig: If ``config`` is malformed.
        """
        validate_config(config)
        self.dispose()
        snapshot = generate_snapshot(config)
        self._snapshot = snapshot
        logger.info(
            f"Regenerated grid radius={config.radius}: "
            f"{len(snapshot.batches)} batches, {snapshot.instance_count} instances"
        )
        return snapshot.batches

    def dispose(self) -> None:
        """Release all owned batches. No-op when nothing is owned."""
        snapshot = self._snapshot
        if snapshot is None:
            return
        self._snapshot = None
        for batch in snapshot.batches:
            batch.dispose()
        logger.info(f"Disposed {len(snapshot.batches)} batches")

    def __enter__(self) -> "GridLifecycleManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()
