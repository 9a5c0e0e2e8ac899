"""
Core data models for grid-based dungeon generation.

The grid holds one CellType per cell. Stairs, doors and exits are
overlays kept in lists; they never change the cell underneath them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Iterator, Optional, Tuple

from ..errors import OutOfBoundsError, GridFrozenError


class CellType(str, Enum):
    """Kinds of grid cell."""
    WALL = "wall"    # Solid rock, the initial state of every cell
    FLOOR = "floor"
    WATER = "water"  # Organic decoration written over floor


class StairType(str, Enum):
    """Direction of a stair."""
    UP = "up"
    DOWN = "down"


class DoorDirection(str, Enum):
    """Orientation of a door across a corridor."""
    VERTICAL = "vertical"      # Blocks left-right movement
    HORIZONTAL = "horizontal"  # Blocks up-down movement


NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))  # N, E, S, W


class Grid:
    """
    Fixed-size 2D matrix of CellType, indexed as (x, y).

    Any access outside [0, width) x [0, height) raises OutOfBoundsError.
    """

    def __init__(self, width: int, height: int, fill: CellType = CellType.WALL):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid grid dimensions: {width}x{height}")
        self.width = width
        self.height = height
        self._cells: List[List[CellType]] = [[fill for _ in range(width)] for _ in range(height)]
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if a coordinate is addressable."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> CellType:
        """Get the cell type at a position."""
        self._check(x, y)
        return self._cells[y][x]

    def set(self, x: int, y: int, value: CellType) -> None:
        """Set the cell type at a position."""
        self._check(x, y)
        if self._frozen:
            raise GridFrozenError(x, y)
        self._cells[y][x] = value

    def is_type(self, x: int, y: int, cell_type: CellType) -> bool:
        """Bounds-tolerant type check; out-of-range cells never match."""
        return self.in_bounds(x, y) and self._cells[y][x] == cell_type

    def fill_rect(self, x: int, y: int, width: int, height: int, value: CellType) -> None:
        """Set every cell of a rectangle."""
        for yy in range(y, y + height):
            for xx in range(x, x + width):
                self.set(xx, yy, value)

    def is_region_type(self, x: int, y: int, width: int, height: int, cell_type: CellType) -> bool:
        """Check that every cell of a rectangle is in range and of one type."""
        for yy in range(y, y + height):
            for xx in range(x, x + width):
                if not self.is_type(xx, yy, cell_type):
                    return False
        return True

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """4-connected neighbors that lie inside the grid."""
        result = []
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result.append((nx, ny))
        return result

    def count_neighbors(self, x: int, y: int, cell_type: CellType) -> int:
        """Number of 4-connected neighbors of the given type."""
        return sum(1 for nx, ny in self.neighbors(x, y) if self._cells[ny][nx] == cell_type)

    def cells_of(self, cell_type: CellType) -> Iterator[Tuple[int, int]]:
        """Iterate positions holding a cell type, row by row."""
        for y, row in enumerate(self._cells):
            for x, value in enumerate(row):
                if value == cell_type:
                    yield x, y

    def count(self, cell_type: CellType) -> int:
        """Count cells of a type."""
        return sum(row.count(cell_type) for row in self._cells)

    def copy(self) -> "Grid":
        """Writable deep copy."""
        clone = Grid(self.width, self.height)
        clone._cells = [list(row) for row in self._cells]
        return clone

    def freeze(self) -> None:
        """Make the grid read-only."""
        self._frozen = True

    def to_rows(self) -> List[List[str]]:
        """Grid as nested lists of cell type values."""
        return [[cell.value for cell in row] for row in self._cells]


@dataclass
class Room:
    """A rectangular room carved into the grid."""
    id: str
    x: int
    y: int
    width: int
    height: int
    connections: List[str] = field(default_factory=list)

    @property
    def center(self) -> Tuple[int, int]:
        """Get the center point of the room."""
        return (self.x + self.width // 2, self.y + self.height // 2)

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, px: int, py: int) -> bool:
        """Check if a point is inside this room."""
        return (self.x <= px < self.x + self.width and
                self.y <= py < self.y + self.height)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for iy in range(self.y, self.y + self.height):
            for ix in range(self.x, self.x + self.width):
                yield ix, iy

    def intersects(self, other: "Room", buffer: int = 0) -> bool:
        """Overlap test with an optional gap required between the rooms."""
        return (self.x < other.x + other.width + buffer and
                self.x + self.width + buffer > other.x and
                self.y < other.y + other.height + buffer and
                self.y + self.height + buffer > other.y)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "connections": list(self.connections),
        }


@dataclass
class Corridor:
    """A carved passage connecting two rooms."""
    id: str
    room_a_id: str
    room_b_id: str
    points: List[Tuple[int, int]]
    style: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "room_a_id": self.room_a_id,
            "room_b_id": self.room_b_id,
            "points": [list(p) for p in self.points],
            "style": self.style,
        }


@dataclass(frozen=True)
class Door:
    """A door standing on a corridor cell at a room entry."""
    x: int
    y: int
    direction: DoorDirection

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "direction": self.direction.value}


@dataclass(frozen=True)
class Exit:
    """Outermost cell of a passage dug toward the map boundary."""
    x: int
    y: int
    side: str  # "north", "south", "east", "west"

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "side": self.side}


@dataclass(frozen=True)
class Stair:
    """A stair linking this level to the one above or below."""
    x: int
    y: int
    type: StairType

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "type": self.type.value}


@dataclass
class GenerationResult:
    """A complete generated dungeon level, handed to the renderer."""
    grid: Grid
    stairs: List[Stair]
    seed: int
    width: int
    height: int
    mask_type: str
    size: str = "medium"
    grid_size: int = 20
    rooms: List[Room] = field(default_factory=list)
    corridors: List[Corridor] = field(default_factory=list)
    doors: List[Door] = field(default_factory=list)
    exits: List[Exit] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def stairs_of(self, stair_type: StairType) -> List[Stair]:
        """Get all stairs of one direction."""
        return [s for s in self.stairs if s.type == stair_type]

    def get_cell(self, x: int, y: int) -> CellType:
        """Get the cell type at a position."""
        return self.grid.get(x, y)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the renderer."""
        return {
            "seed": self.seed,
            "size": self.size,
            "width": self.width,
            "height": self.height,
            "mask_type": self.mask_type,
            "grid_size": self.grid_size,
            "grid": self.grid.to_rows(),
            "rooms": [r.to_dict() for r in self.rooms],
            "corridors": [c.to_dict() for c in self.corridors],
            "doors": [d.to_dict() for d in self.doors],
            "exits": [e.to_dict() for e in self.exits],
            "stairs": [s.to_dict() for s in self.stairs],
            "stats": dict(self.stats),
        }
