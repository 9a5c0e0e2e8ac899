"""
Edge & Exit Placement.

Digs passages from the carved layout out toward the four map edges,
stopping at the boundary mask.
"""
import logging
from typing import List, Optional

from .masks import BoundaryMask
from .models import CellType, Exit, Grid

logger = logging.getLogger(__name__)


class ExitPlacer:
    """Places up to one peripheral exit per side."""

    def __init__(self, grid: Grid, mask: BoundaryMask):
        self.grid = grid
        self.mask = mask

    def place(self) -> List[Exit]:
        """
        Dig toward each edge from the grid's center lines.

        A ray is cast from the midpoint of each edge inward until it meets
        floor; from there the passage is dug back out for as long as the
        cells stay inside the mask.

        Returns:
            One Exit per side where floor was found
        """
        w, h = self.grid.width, self.grid.height
        rays = [
            ("north", w // 2, 0, 0, 1),
            ("south", w // 2, h - 1, 0, -1),
            ("west", 0, h // 2, 1, 0),
            ("east", w - 1, h // 2, -1, 0),
        ]

        exits = []
        for side, x, y, dx, dy in rays:
            exit_cell = self._attempt_exit(side, x, y, dx, dy)
            if exit_cell is not None:
                exits.append(exit_cell)

        logger.debug(f"Placed {len(exits)} peripheral exits")
        return exits

    def _attempt_exit(self, side: str, x: int, y: int, dx: int, dy: int) -> Optional[Exit]:
        grid = self.grid

        # Raycast inward until floor
        while grid.in_bounds(x, y) and not grid.is_type(x, y, CellType.FLOOR):
            x += dx
            y += dy
        if not grid.in_bounds(x, y):
            return None

        # Dig back outward while inside the mask
        outer_x, outer_y = x, y
        x, y = x - dx, y - dy
        while self.mask.contains(x, y, grid.width, grid.height):
            grid.set(x, y, CellType.FLOOR)
            outer_x, outer_y = x, y
            x, y = x - dx, y - dy

        return Exit(x=outer_x, y=outer_y, side=side)
