"""
Boundary masks.

A mask is a stateless predicate telling the carver whether a cell lies
inside the playable silhouette. Every mask answers False for coordinates
outside the grid.
"""
import math
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, Type

from ..errors import InvalidConfigurationError
from ..noise import NoiseContext
from .params import MaskType


class BoundaryMask(ABC):
    """Predicate over (x, y, width, height)."""

    mask_type: MaskType

    def contains(self, x: int, y: int, width: int, height: int) -> bool:
        """Check if a cell lies inside the play area."""
        if not (0 <= x < width and 0 <= y < height):
            return False
        return self._inside(x, y, width, height)

    @abstractmethod
    def _inside(self, x: int, y: int, width: int, height: int) -> bool:
        """Shape test for an in-range cell."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class RectangleMask(BoundaryMask):
    """The whole bounding box."""

    mask_type = MaskType.RECTANGLE

    def _inside(self, x: int, y: int, width: int, height: int) -> bool:
        return True


class RoundMask(BoundaryMask):
    """A disc centered on the grid, padded 2 cells from the shorter side."""

    mask_type = MaskType.ROUND
    PADDING = 2

    def _inside(self, x: int, y: int, width: int, height: int) -> bool:
        radius = min(width, height) / 2 - self.PADDING
        dx = x - width // 2
        dy = y - height // 2
        return dx * dx + dy * dy <= radius * radius


class CrossMask(BoundaryMask):
    """Two perpendicular arms, each a third of the shorter side wide."""

    mask_type = MaskType.CROSS
    MARGIN = 2

    def _inside(self, x: int, y: int, width: int, height: int) -> bool:
        half_arm = min(width, height) / 3 / 2
        cx = width // 2
        cy = height // 2

        in_horizontal = (math.floor(cy - half_arm) <= y < math.ceil(cy + half_arm) and
                         self.MARGIN <= x < width - self.MARGIN)
        in_vertical = (math.floor(cx - half_arm) <= x < math.ceil(cx + half_arm) and
                       self.MARGIN <= y < height - self.MARGIN)
        return in_horizontal or in_vertical


class KeepMask(BoundaryMask):
    """A central block padded 4 cells from every edge."""

    mask_type = MaskType.KEEP
    PADDING = 4

    def _inside(self, x: int, y: int, width: int, height: int) -> bool:
        pad = self.PADDING
        return pad <= x < width - pad and pad <= y < height - pad


class CavernousMask(BoundaryMask):
    """
    An ellipse with a noise-perturbed rim.

    The normalized elliptical distance of each cell is compared against a
    base radius shifted by fractal noise, which gives an irregular but
    seed-stable outline. A 1-cell border is always excluded.
    """

    mask_type = MaskType.CAVERNOUS
    BORDER = 1
    BASE_RADIUS = 0.8
    ROUGHNESS = 0.25
    NOISE_SCALE = 0.08

    def __init__(self, noise: Optional[NoiseContext] = None):
        self.noise = noise or NoiseContext()
        self._rim: Dict[Tuple[int, int], float] = {}  # memoized per cell

    def _inside(self, x: int, y: int, width: int, height: int) -> bool:
        border = self.BORDER
        if not (border <= x < width - border and border <= y < height - border):
            return False

        rx = width / 2 - border
        ry = height / 2 - border
        dx = (x - width // 2) / rx
        dy = (y - height // 2) / ry
        distance = math.sqrt(dx * dx + dy * dy)

        rim = self._rim.get((x, y))
        if rim is None:
            rim = self.BASE_RADIUS + self.ROUGHNESS * self.noise.fbm(x * self.NOISE_SCALE, y * self.NOISE_SCALE)
            self._rim[(x, y)] = rim
        return distance <= rim

    def __repr__(self) -> str:
        return f"CavernousMask(seed={self.noise.seed_value})"


MASK_CLASSES: Dict[MaskType, Type[BoundaryMask]] = {
    MaskType.RECTANGLE: RectangleMask,
    MaskType.ROUND: RoundMask,
    MaskType.CROSS: CrossMask,
    MaskType.KEEP: KeepMask,
    MaskType.CAVERNOUS: CavernousMask,
}


def build_mask(
    mask_type: MaskType,
    width: int,
    height: int,
    noise: Optional[NoiseContext] = None
) -> BoundaryMask:
    """
    Select the boundary mask for a shape name.

    Args:
        mask_type: One of the MaskType values (enum or string)
        width: Grid width the mask will be used with
        height: Grid height the mask will be used with
        noise: Noise field for noise-driven shapes

    Returns:
        The mask predicate

    Raises:
        InvalidConfigurationError: Unknown shape or non-positive dimensions
    """
    try:
        resolved = MaskType(mask_type)
    except ValueError:
        raise InvalidConfigurationError("mask_type", f"Unknown mask type: {mask_type}", mask_type) from None

    if width <= 0 or height <= 0:
        raise InvalidConfigurationError(
            "dimensions", f"Grid dimensions must be positive, got {width}x{height}", f"{width}x{height}"
        )

    if resolved == MaskType.CAVERNOUS:
        return CavernousMask(noise)
    return MASK_CLASSES[resolved]()


def region_inside(mask: BoundaryMask, x: int, y: int, w: int, h: int, width: int, height: int) -> bool:
    """Check that every cell of a rectangle lies inside the mask."""
    for yy in range(y, y + h):
        for xx in range(x, x + w):
            if not mask.contains(xx, yy, width, height):
                return False
    return True


def mask_area(mask: BoundaryMask, width: int, height: int) -> int:
    """Count the cells inside the mask."""
    return sum(
        1
        for y in range(height)
        for x in range(width)
        if mask.contains(x, y, width, height)
    )
