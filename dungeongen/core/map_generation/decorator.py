"""
Feature Decorator.

Floods parts of the carved floor with water, shaped by fractal noise so
the water forms contiguous pools instead of scattered cells.
"""
import logging
from typing import Iterable, Optional, Set, Tuple

from ..noise import NoiseContext
from .models import CellType, Grid
from .params import WATER_DEPTH_LEVELS, WaterDepth

logger = logging.getLogger(__name__)


def water_threshold(depth: WaterDepth) -> Optional[float]:
    """
    Noise threshold above which floor turns to water.

    Returns:
        The threshold, or None when the level stays dry
    """
    level = WATER_DEPTH_LEVELS[WaterDepth(depth)]
    if level <= 0:
        return None
    return 0.5 * (1 - level)


class FeatureDecorator:
    """Reclassifies FLOOR cells to WATER where the noise field is high."""

    def __init__(
        self,
        noise: NoiseContext,
        threshold: float,
        scale: float = 0.1,
        protected: Optional[Iterable[Tuple[int, int]]] = None
    ):
        """
        Args:
            noise: Seeded noise field owned by the current generation
            threshold: fbm value a cell must exceed to flood
            scale: Grid-to-noise coordinate factor
            protected: Cells that must stay floor (stairs, doors)
        """
        self.noise = noise
        self.threshold = threshold
        self.scale = scale
        self.protected: Set[Tuple[int, int]] = set(protected or ())

    def decorate(self, grid: Grid) -> int:
        """
        Flood the grid in place.

        Returns:
            Number of cells turned to water
        """
        flooded = []
        for x, y in grid.cells_of(CellType.FLOOR):
            if (x, y) in self.protected:
                continue
            if self.noise.fbm(x * self.scale, y * self.scale) > self.threshold:
                flooded.append((x, y))

        for x, y in flooded:
            grid.set(x, y, CellType.WATER)

        logger.debug(f"Flooded {len(flooded)} cells (threshold {self.threshold:.3f})")
        return len(flooded)
