"""
dungeongen - procedural dungeon floor plans for virtual tabletops.

Typical use:

    from dungeongen import generate_dungeon

    result = generate_dungeon({"size": "medium", "maskType": "round", "stairs": {"up": 1, "down": 2}})
    payload = result.to_dict()
"""

from .core.errors import (
    DungeonGenError,
    ErrorCode,
    GridFrozenError,
    InvalidConfigurationError,
    OutOfBoundsError,
    PlacementExhaustedError,
)
from .core.map_generation import (
    CellType,
    DungeonGenerator,
    GenerationOptions,
    GenerationResult,
    Grid,
    MaskType,
    Stair,
    StairType,
    generate_dungeon,
)
from .core.noise import NoiseContext, fbm, noise2d, seed_noise

__version__ = "0.1.0"

__all__ = [
    "generate_dungeon",
    "DungeonGenerator",
    "GenerationOptions",
    "GenerationResult",
    "Grid",
    "CellType",
    "MaskType",
    "Stair",
    "StairType",
    "NoiseContext",
    "seed_noise",
    "noise2d",
    "fbm",
    "DungeonGenError",
    "ErrorCode",
    "InvalidConfigurationError",
    "PlacementExhaustedError",
    "OutOfBoundsError",
    "GridFrozenError",
]
