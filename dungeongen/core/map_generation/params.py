"""
Dungeon Generation Parameters.

Size tiers, style enums and the validated option model accepted by the
generator. Options may be given with snake_case or camelCase keys.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...config import get_settings
from ..errors import InvalidConfigurationError


class DungeonSize(str, Enum):
    """Named size tiers."""
    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"


class MaskType(str, Enum):
    """Overall silhouette of the playable area."""
    RECTANGLE = "rectangle"
    ROUND = "round"
    CROSS = "cross"
    CAVERNOUS = "cavernous"
    KEEP = "keep"


class SymmetryType(str, Enum):
    NONE = "none"
    BILATERAL = "bilateral"


class WaterDepth(str, Enum):
    """How much of the floor floods."""
    DRY = "dry"
    PUDDLES = "puddles"
    POOLS = "pools"
    LAKES = "lakes"
    FLOODED = "flooded"


WATER_DEPTH_LEVELS: Dict[WaterDepth, float] = {
    WaterDepth.DRY: 0.0,
    WaterDepth.PUDDLES: 0.45,
    WaterDepth.POOLS: 0.65,
    WaterDepth.LAKES: 0.82,
    WaterDepth.FLOODED: 0.90,
}


class CorridorStyle(str, Enum):
    L_PATH = "l_path"
    STRAIGHT = "straight"  # Stepped straight line
    ERRANT = "errant"      # Wandering A*


class ConnectivityStrategy(str, Enum):
    MST = "mst"
    MST_LOOPS = "mst_loops"
    FULL = "full"        # Every pair of rooms
    NEAREST = "nearest"  # Chain through nearest neighbors


class DeadEndRemoval(str, Enum):
    NONE = "none"
    SOME = "some"
    ALL = "all"


class PlacementStrategy(str, Enum):
    STANDARD = "standard"      # Random non-overlapping
    RELAXATION = "relaxation"  # Scatter & separate
    SYMMETRIC = "symmetric"    # Mirrored placement


class RoomSizeBias(str, Enum):
    SMALL = "small"
    BALANCED = "balanced"
    LARGE = "large"


@dataclass(frozen=True)
class SizeTier:
    """Canonical dimensions and room budget for a size tier."""
    width: int
    height: int
    min_rooms: int
    max_rooms: int
    min_room_size: int
    max_room_size: int


SIZE_TIERS: Dict[DungeonSize, SizeTier] = {
    DungeonSize.TINY: SizeTier(width=32, height=32, min_rooms=4, max_rooms=6, min_room_size=4, max_room_size=8),
    DungeonSize.SMALL: SizeTier(width=44, height=44, min_rooms=6, max_rooms=10, min_room_size=4, max_room_size=10),
    DungeonSize.MEDIUM: SizeTier(width=64, height=64, min_rooms=10, max_rooms=20, min_room_size=5, max_room_size=11),
    DungeonSize.LARGE: SizeTier(width=88, height=88, min_rooms=20, max_rooms=35, min_room_size=5, max_room_size=12),
    DungeonSize.XLARGE: SizeTier(width=110, height=110, min_rooms=35, max_rooms=50, min_room_size=6, max_room_size=12),
}

MIN_DIMENSION = 16


def get_size_tier(size: DungeonSize) -> SizeTier:
    """Look up the tier for a size name or enum."""
    try:
        return SIZE_TIERS[DungeonSize(size)]
    except ValueError:
        raise InvalidConfigurationError("size", f"Unknown dungeon size: {size}", size) from None


class StairRequest(BaseModel):
    """Requested vertical connectivity."""
    up: int = Field(default=1, ge=0, description="Stairs leading up")
    down: int = Field(default=1, ge=0, description="Stairs leading down")


class GenerationOptions(BaseModel):
    """Validated generation options."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    size: DungeonSize = Field(
        default_factory=lambda: get_settings().DEFAULT_SIZE,
        validate_default=True,
        description="Size tier"
    )
    mask_type: MaskType = Field(default=MaskType.RECTANGLE, alias="maskType")
    grid_size: int = Field(
        default_factory=lambda: get_settings().GRID_SIZE,
        ge=1,
        alias="gridSize",
        description="Pixels per cell, passed through to the renderer"
    )
    stairs: StairRequest = Field(default_factory=StairRequest)
    seed: Optional[int] = Field(default=None, description="Random seed")
    width: Optional[int] = Field(default=None, ge=MIN_DIMENSION, description="Overrides the tier width")
    height: Optional[int] = Field(default=None, ge=MIN_DIMENSION, description="Overrides the tier height")

    water_depth: WaterDepth = Field(default=WaterDepth.DRY, alias="waterDepth")
    symmetry: SymmetryType = SymmetryType.NONE
    corridor_style: CorridorStyle = Field(default=CorridorStyle.L_PATH, alias="corridorStyle")
    connectivity: ConnectivityStrategy = ConnectivityStrategy.MST_LOOPS
    dead_end_removal: DeadEndRemoval = Field(default=DeadEndRemoval.NONE, alias="deadEndRemoval")
    peripheral_egress: bool = Field(default=False, alias="peripheralEgress")
    door_density: float = Field(default=1.0, ge=0.0, le=1.0, alias="doorDensity")
    room_size_bias: RoomSizeBias = Field(default=RoomSizeBias.BALANCED, alias="roomSizeBias")
    placement_strategy: Optional[PlacementStrategy] = Field(default=None, alias="placementStrategy")

    @field_validator(
        "size", "mask_type", "water_depth", "symmetry", "corridor_style",
        "connectivity", "dead_end_removal", "room_size_bias", "placement_strategy",
        mode="before",
    )
    @classmethod
    def _normalize_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None, **overrides: Any) -> "GenerationOptions":
        """
        Build validated options from a plain dictionary.

        Raises:
            InvalidConfigurationError: on the first rejected field
        """
        # camelCase keys are folded onto field names so later keys win either way
        aliases = {f.alias: name for name, f in cls.model_fields.items() if f.alias}
        data: Dict[str, Any] = {}
        for key, value in list((options or {}).items()) + list(overrides.items()):
            data[aliases.get(key, key)] = value

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            first = exc.errors()[0]
            field_name = ".".join(str(part) for part in first.get("loc", ())) or "options"
            raise InvalidConfigurationError(
                field_name,
                f"Invalid value for '{field_name}': {first.get('msg')}",
                first.get("input"),
            ) from exc

    @property
    def tier(self) -> SizeTier:
        return get_size_tier(self.size)

    @property
    def dimensions(self):
        """(width, height) after applying overrides."""
        tier = self.tier
        return (self.width or tier.width, self.height or tier.height)

    @property
    def resolved_placement(self) -> PlacementStrategy:
        """Explicit strategy, else symmetric when bilateral symmetry is asked for."""
        if self.placement_strategy is not None:
            return self.placement_strategy
        if self.symmetry == SymmetryType.BILATERAL:
            return PlacementStrategy.SYMMETRIC
        return PlacementStrategy.STANDARD
