"""
dungeongen - Test Configuration and Fixtures
Shared grids, rooms and generated levels for pytest.
"""
import pytest
from typing import List
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dungeongen.core.random_source import LCGRandom
from dungeongen.core.map_generation.models import CellType, Grid, Room
from dungeongen.core.map_generation.dungeon_generator import generate_dungeon


# ==================== Random Fixtures ====================

@pytest.fixture
def rng() -> LCGRandom:
    """A random source with a fixed seed."""
    return LCGRandom(1234)


# ==================== Grid Fixtures ====================

@pytest.fixture
def two_room_grid():
    """
    Two 4x4 rooms joined by a one-cell-wide corridor along y=3.

    Room A covers x 2..5, room B covers x 10..13, the corridor runs x 6..9.
    """
    grid = Grid(16, 8)
    rooms: List[Room] = [
        Room(id="room-0", x=2, y=2, width=4, height=4),
        Room(id="room-1", x=10, y=2, width=4, height=4),
    ]
    for room in rooms:
        grid.fill_rect(room.x, room.y, room.width, room.height, CellType.FLOOR)
    for x in range(6, 10):
        grid.set(x, 3, CellType.FLOOR)
    return grid, rooms


@pytest.fixture
def centered_room_grid():
    """A 21x21 grid with a single 5x5 room in the middle."""
    grid = Grid(21, 21)
    room = Room(id="room-0", x=8, y=8, width=5, height=5)
    grid.fill_rect(room.x, room.y, room.width, room.height, CellType.FLOOR)
    return grid, room


# ==================== Generated Levels ====================

@pytest.fixture(scope="session")
def medium_level():
    """Medium level with 1 up and 2 down stairs."""
    return generate_dungeon({"size": "medium", "stairs": {"up": 1, "down": 2}})


@pytest.fixture(scope="session")
def round_level():
    """Medium level carved inside the round mask."""
    return generate_dungeon({"size": "medium", "maskType": "round", "seed": 7})
