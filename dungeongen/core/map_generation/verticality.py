"""
Vertical Connectivity.

Places the up and down stairs that link this level to its neighbors.
Stairs land on random floor cells by rejection sampling with an attempt
budget; running out of budget or floor is reported, never papered over.
Candidates are drawn as a single flat cell index, so on a 2^k-cell grid
any width*height consecutive draws visit every cell exactly once.
"""
import logging
import math
from typing import Iterable, List, Optional, Set, Tuple

from ..errors import DungeonGenError, ErrorCode, InvalidConfigurationError, PlacementExhaustedError
from ..random_source import LCGRandom
from .models import CellType, Grid, Stair, StairType

logger = logging.getLogger(__name__)

# Expected draws per hit are width*height/free_floor; allow this many times that
ATTEMPTS_PER_FREE_CELL = 20


class StairPlacer:
    """Rejection-sampling stair placer."""

    def __init__(self, grid: Grid, rng: LCGRandom, occupied: Optional[Iterable[Tuple[int, int]]] = None):
        """
        Args:
            grid: Carved grid to place on
            rng: Random source, advanced in place
            occupied: Cells no stair may take
        """
        self.grid = grid
        self.rng = rng
        self.occupied: Set[Tuple[int, int]] = set(occupied or ())
        self.attempts = 0

    def place(self, up_count: int, down_count: int) -> List[Stair]:
        """
        Place exactly up_count up stairs and down_count down stairs.

        Up stairs are placed first.

        Returns:
            The placed stairs

        Raises:
            InvalidConfigurationError: A count is negative
            PlacementExhaustedError: Not enough floor, or the attempt budget ran out
        """
        for name, count in (("stairs.up", up_count), ("stairs.down", down_count)):
            if count < 0:
                raise InvalidConfigurationError(name, f"Stair count cannot be negative: {count}", count)

        free_floor = sum(1 for cell in self.grid.cells_of(CellType.FLOOR) if cell not in self.occupied)
        requested = up_count + down_count
        if requested > free_floor:
            raise PlacementExhaustedError(
                "stairs",
                f"Requested {requested} stairs but only {free_floor} floor cells are available",
                attempts=0,
                floor_cells=free_floor,
                placed_up=0,
                placed_down=0,
            )

        stairs: List[Stair] = []
        for stair_type, count in ((StairType.UP, up_count), (StairType.DOWN, down_count)):
            for _ in range(count):
                stairs.append(self._place_one(stair_type, free_floor - len(stairs), stairs))

        verify_stairs(self.grid, stairs, up_count, down_count)
        logger.debug(f"Placed {up_count} up / {down_count} down stairs in {self.attempts} attempts")
        return stairs

    def _place_one(self, stair_type: StairType, remaining_free: int, placed: List[Stair]) -> Stair:
        width, height = self.grid.width, self.grid.height
        cell_count = width * height
        # Never less than one full sweep of the grid's index range
        budget = max(cell_count, math.ceil(ATTEMPTS_PER_FREE_CELL * cell_count / remaining_free))

        for _ in range(budget):
            self.attempts += 1
            # One flat draw per candidate; separate x and y draws correlate
            # through the generator's low bits on power-of-two grids
            index = self.rng.randint_below(cell_count)
            x, y = index % width, index // width
            if (x, y) in self.occupied or not self.grid.is_type(x, y, CellType.FLOOR):
                continue

            self.occupied.add((x, y))
            return Stair(x=x, y=y, type=stair_type)

        raise PlacementExhaustedError(
            "stairs",
            f"Gave up placing a {stair_type.value} stair after {self.attempts} attempts",
            attempts=self.attempts,
            floor_cells=remaining_free,
            placed_up=sum(1 for s in placed if s.type == StairType.UP),
            placed_down=sum(1 for s in placed if s.type == StairType.DOWN),
        )


def verify_stairs(grid: Grid, stairs: List[Stair], up_count: int, down_count: int) -> None:
    """Check that stairs sit on distinct floor cells in the requested numbers."""
    positions = [s.position for s in stairs]
    problems = []
    if len(set(positions)) != len(positions):
        problems.append("duplicate positions")
    if any(not grid.is_type(x, y, CellType.FLOOR) for x, y in positions):
        problems.append("stair off floor")
    if sum(1 for s in stairs if s.type == StairType.UP) != up_count:
        problems.append("up count mismatch")
    if sum(1 for s in stairs if s.type == StairType.DOWN) != down_count:
        problems.append("down count mismatch")

    if problems:
        raise DungeonGenError(
            code=ErrorCode.UNKNOWN,
            message=f"Stair placement produced an invalid result: {', '.join(problems)}",
            details={"problems": problems},
            recoverable=False,
        )


def place_stairs(grid: Grid, up_count: int, down_count: int, state: int) -> Tuple[List[Stair], Grid, int]:
    """
    Functional form of StairPlacer.

    Args:
        grid: Carved grid
        up_count: Up stairs wanted
        down_count: Down stairs wanted
        state: Random state to start from

    Returns:
        (stairs, grid, new_state)
    """
    rng = LCGRandom(state)
    stairs = StairPlacer(grid, rng).place(up_count, down_count)
    return stairs, grid, rng.state
