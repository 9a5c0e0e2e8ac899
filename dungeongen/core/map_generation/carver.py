"""
Layout Carver.

Turns an all-rock grid into rooms joined by corridors, inside the
boundary mask. Runs room placement, corridor routing, dead-end pruning
and peripheral exits in that order.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..errors import PlacementExhaustedError
from ..random_source import LCGRandom
from .connectivity import NetworkConnector, prune_dead_ends
from .exits import ExitPlacer
from .masks import BoundaryMask, mask_area
from .models import CellType, Corridor, Exit, Grid, Room
from .params import GenerationOptions, SizeTier
from .room_placement import RoomPlacer

logger = logging.getLogger(__name__)

MIN_REQUIRED_ROOMS = 2


@dataclass
class CarvedLayout:
    """Output of the carving phase."""
    grid: Grid
    rooms: List[Room] = field(default_factory=list)
    corridors: List[Corridor] = field(default_factory=list)
    exits: List[Exit] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)


def room_budget(tier: SizeTier, coverage: float, rng: LCGRandom):
    """
    Work out how many rooms to aim for and how many are required.

    Both scale with the share of the grid the mask leaves open.

    Returns:
        (target, required)
    """
    required = max(MIN_REQUIRED_ROOMS, int(tier.min_rooms * coverage))
    drawn = rng.randint(tier.min_rooms, tier.max_rooms)
    target = max(required, int(drawn * coverage))
    return target, required


class LayoutCarver:
    """
    Carves one level.

    Starts from a fresh all-WALL grid. Every FLOOR cell it writes lies
    inside the mask.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mask: BoundaryMask,
        rng: LCGRandom,
        options: GenerationOptions
    ):
        self.width = width
        self.height = height
        self.mask = mask
        self.rng = rng
        self.options = options
        self.grid = Grid(width, height)

    def carve(self) -> CarvedLayout:
        """
        Run every carving step.

        Returns:
            CarvedLayout with the carved grid and its metadata

        Raises:
            PlacementExhaustedError: Too few rooms fit inside the mask
        """
        options = self.options
        tier = options.tier

        open_cells = mask_area(self.mask, self.width, self.height)
        coverage = open_cells / (self.width * self.height)
        target, required = room_budget(tier, coverage, self.rng)

        placer = RoomPlacer(
            self.width,
            self.height,
            self.mask,
            self.rng,
            min_size=tier.min_room_size,
            max_size=tier.max_room_size,
            size_bias=options.room_size_bias,
            strategy=options.resolved_placement,
        )
        rooms = placer.place(target)

        if len(rooms) < required:
            raise PlacementExhaustedError(
                "carver",
                f"Only {len(rooms)} of {required} required rooms fit inside the {self.mask.mask_type.value} mask",
                attempts=placer.attempts,
                rooms_placed=len(rooms),
                rooms_required=required,
                mask_cells=open_cells,
                floor_cells=open_cells,
            )

        for room in rooms:
            self.grid.fill_rect(room.x, room.y, room.width, room.height, CellType.FLOOR)

        connector = NetworkConnector(
            self.grid,
            self.mask,
            self.rng,
            strategy=options.connectivity,
            style=options.corridor_style,
        )
        corridors = connector.connect(rooms)

        pruned = prune_dead_ends(self.grid, options.dead_end_removal, self.rng, rooms)

        exits: List[Exit] = []
        if options.peripheral_egress:
            exits = ExitPlacer(self.grid, self.mask).place()

        stats = {
            "mask_cells": open_cells,
            "room_target": target,
            "rooms_required": required,
            "room_attempts": placer.attempts,
            "rooms": len(rooms),
            "corridors": len(corridors),
            "skipped_connections": connector.skipped,
            "pruned_cells": pruned,
            "exits": len(exits),
        }
        logger.debug(f"Carved layout: {stats}")

        return CarvedLayout(grid=self.grid, rooms=rooms, corridors=corridors, exits=exits, stats=stats)
