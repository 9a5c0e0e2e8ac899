"""
Procedural Dungeon Generator.

Runs the full pipeline for one dungeon level:
options -> mask -> carving -> stairs -> doors -> water -> frozen result.
"""
import logging
import time
from typing import Any, Dict, Optional, Union

from ...config import get_settings
from ..noise import NoiseContext
from ..random_source import LCGRandom
from .carver import LayoutCarver
from .decorator import FeatureDecorator, water_threshold
from .doors import DoorPlacer
from .masks import build_mask
from .models import CellType, GenerationResult
from .params import GenerationOptions
from .verticality import StairPlacer

logger = logging.getLogger(__name__)


class DungeonGenerator:
    """
    Generates one dungeon level from validated options.

    Every call to generate() builds its own grid, random source and noise
    field from the seed, so identical options always give identical levels
    and separate generators never share state.
    """

    def __init__(
        self,
        options: Optional[Union[GenerationOptions, Dict[str, Any]]] = None,
        **kwargs: Any
    ):
        """
        Initialize the dungeon generator.

        Args:
            options: GenerationOptions, or a dict of options (snake_case or camelCase)
            **kwargs: Individual options, overriding the dict

        Raises:
            InvalidConfigurationError: Options failed validation
        """
        if isinstance(options, GenerationOptions) and not kwargs:
            self.options = options
        else:
            if isinstance(options, GenerationOptions):
                options = options.model_dump()
            self.options = GenerationOptions.from_options(options, **kwargs)

        self.settings = get_settings()
        self.seed = self.options.seed if self.options.seed is not None else self.settings.DEFAULT_SEED

    def generate(self) -> GenerationResult:
        """
        Generate a dungeon level.

        Returns:
            GenerationResult with a frozen grid

        Raises:
            InvalidConfigurationError: Bad mask or dimensions
            PlacementExhaustedError: Rooms or stairs could not be placed
        """
        options = self.options
        width, height = options.dimensions
        timings: Dict[str, float] = {}

        logger.info(
            f"Generating {options.size.value} dungeon {width}x{height} "
            f"(mask={options.mask_type.value}, seed={self.seed})"
        )

        rng = LCGRandom(self.seed)
        noise = NoiseContext(self.seed)

        started = time.perf_counter()
        mask = build_mask(options.mask_type, width, height, noise)
        layout = LayoutCarver(width, height, mask, rng, options).carve()
        grid = layout.grid
        timings["carve"] = time.perf_counter() - started

        started = time.perf_counter()
        stairs = StairPlacer(grid, rng).place(options.stairs.up, options.stairs.down)
        stair_cells = [s.position for s in stairs]
        timings["stairs"] = time.perf_counter() - started

        started = time.perf_counter()
        doors = DoorPlacer(
            grid,
            layout.rooms,
            rng,
            density=options.door_density,
            occupied=stair_cells,
        ).place()
        timings["doors"] = time.perf_counter() - started

        water_cells = 0
        threshold = water_threshold(options.water_depth)
        if threshold is not None:
            started = time.perf_counter()
            decorator = FeatureDecorator(
                noise,
                threshold,
                scale=self.settings.NOISE_SCALE,
                protected=stair_cells + [(d.x, d.y) for d in doors],
            )
            water_cells = decorator.decorate(grid)
            timings["decorate"] = time.perf_counter() - started

        grid.freeze()

        stats = dict(layout.stats)
        stats.update({
            "stairs_up": options.stairs.up,
            "stairs_down": options.stairs.down,
            "doors": len(doors),
            "water_cells": water_cells,
            "floor_cells": grid.count(CellType.FLOOR),
        })

        logger.debug("Phase timings: " + ", ".join(f"{k}={v * 1000:.1f}ms" for k, v in timings.items()))
        logger.info(
            f"Generated {len(layout.rooms)} rooms, {len(layout.corridors)} corridors, "
            f"{len(stairs)} stairs, {len(doors)} doors, {water_cells} water cells"
        )

        return GenerationResult(
            grid=grid,
            stairs=stairs,
            seed=self.seed,
            width=width,
            height=height,
            mask_type=options.mask_type.value,
            size=options.size.value,
            grid_size=options.grid_size,
            rooms=layout.rooms,
            corridors=layout.corridors,
            doors=doors,
            exits=layout.exits,
            stats=stats,
        )


def generate_dungeon(
    options: Optional[Union[GenerationOptions, Dict[str, Any]]] = None,
    **kwargs: Any
) -> GenerationResult:
    """
    Convenience function to generate a dungeon level.

    Args:
        options: Option dict such as {"size": "medium", "maskType": "round",
            "stairs": {"up": 1, "down": 2}, "seed": 7}
        **kwargs: Individual options, overriding the dict

    Returns:
        GenerationResult with the complete level
    """
    return DungeonGenerator(options, **kwargs).generate()
