"""
Procedural Dungeon Level Generation.

Generates grid-based dungeon levels using:
- Boundary masks for the playable silhouette
- Random room placement with spanning-tree corridors
- Rejection-sampled stairs for vertical connectivity
- Coherent noise for organic water features
"""

from .dungeon_generator import DungeonGenerator, generate_dungeon
from .masks import BoundaryMask, build_mask
from .models import (
    CellType,
    Corridor,
    Door,
    DoorDirection,
    Exit,
    GenerationResult,
    Grid,
    Room,
    Stair,
    StairType,
)
from .params import (
    ConnectivityStrategy,
    CorridorStyle,
    DeadEndRemoval,
    DungeonSize,
    GenerationOptions,
    MaskType,
    PlacementStrategy,
    RoomSizeBias,
    SIZE_TIERS,
    SymmetryType,
    WaterDepth,
)
from .verticality import StairPlacer, place_stairs

__all__ = [
    "DungeonGenerator",
    "generate_dungeon",
    "BoundaryMask",
    "build_mask",
    "CellType",
    "Corridor",
    "Door",
    "DoorDirection",
    "Exit",
    "GenerationResult",
    "Grid",
    "Room",
    "Stair",
    "StairType",
    "ConnectivityStrategy",
    "CorridorStyle",
    "DeadEndRemoval",
    "DungeonSize",
    "GenerationOptions",
    "MaskType",
    "PlacementStrategy",
    "RoomSizeBias",
    "SIZE_TIERS",
    "SymmetryType",
    "WaterDepth",
    "StairPlacer",
    "place_stairs",
]
