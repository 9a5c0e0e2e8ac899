"""
Door Placement.

Puts doors on one-cell corridor chokepoints where a passage enters a room.
"""
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..random_source import LCGRandom
from .models import CellType, Door, DoorDirection, Grid, Room

logger = logging.getLogger(__name__)


class DoorPlacer:
    """Finds room entrances and places doors on them."""

    def __init__(
        self,
        grid: Grid,
        rooms: List[Room],
        rng: LCGRandom,
        density: float = 1.0,
        occupied: Optional[Iterable[Tuple[int, int]]] = None
    ):
        self.grid = grid
        self.rng = rng
        self.density = density
        self.occupied: Set[Tuple[int, int]] = set(occupied or ())

        self._room_at: Dict[Tuple[int, int], str] = {}
        for room in rooms:
            for cell in room.cells():
                self._room_at[cell] = room.id

    def place(self) -> List[Door]:
        """
        Scan the grid for doorways.

        A doorway is a corridor floor cell with floor on exactly one
        opposite pair of sides (west/east or north/south) and a room on at
        least one of those sides. Doors are never 4-adjacent to each other.
        """
        grid = self.grid
        doors: List[Door] = []
        taken: Set[Tuple[int, int]] = set()

        for y in range(1, grid.height - 1):
            for x in range(1, grid.width - 1):
                if not grid.is_type(x, y, CellType.FLOOR):
                    continue
                if (x, y) in self.occupied or (x, y) in self._room_at:
                    continue

                direction = self._doorway_direction(x, y)
                if direction is None:
                    continue
                if not self._connects_to_room(x, y, direction):
                    continue
                if any(n in taken for n in grid.neighbors(x, y)):
                    continue
                if self.rng.random() > self.density:
                    continue

                doors.append(Door(x=x, y=y, direction=direction))
                taken.add((x, y))

        logger.debug(f"Placed {len(doors)} doors (density {self.density})")
        return doors

    def _doorway_direction(self, x: int, y: int) -> Optional[DoorDirection]:
        floor = CellType.FLOOR
        n = self.grid.is_type(x, y - 1, floor)
        s = self.grid.is_type(x, y + 1, floor)
        e = self.grid.is_type(x + 1, y, floor)
        w = self.grid.is_type(x - 1, y, floor)

        if w and e and not n and not s:
            return DoorDirection.VERTICAL
        if n and s and not w and not e:
            return DoorDirection.HORIZONTAL
        return None

    def _connects_to_room(self, x: int, y: int, direction: DoorDirection) -> bool:
        if direction == DoorDirection.VERTICAL:
            sides = ((x - 1, y), (x + 1, y))
        else:
            sides = ((x, y - 1), (x, y + 1))
        return any(cell in self._room_at for cell in sides)
