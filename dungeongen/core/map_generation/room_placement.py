"""
Room Placement.

Proposes rectangular rooms inside the boundary mask. Three strategies are
available: plain random rejection, mirrored placement across the vertical
axis, and scatter-then-separate relaxation.
"""
import logging
import math
from typing import List, Optional, Tuple

from ..random_source import LCGRandom
from .masks import BoundaryMask, region_inside
from .models import Room
from .params import PlacementStrategy, RoomSizeBias

logger = logging.getLogger(__name__)

ROOM_BUFFER = 2       # Empty cells required between rooms
EDGE_MARGIN = 2       # Rooms never touch the outer 2 cells
ATTEMPTS_PER_ROOM = 50
RELAXATION_ITERATIONS = 50


class RoomPlacer:
    """
    Places non-overlapping rooms for one generation run.

    The placer only decides room rectangles; carving them into the grid is
    left to the caller.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mask: BoundaryMask,
        rng: LCGRandom,
        min_size: int,
        max_size: int,
        size_bias: RoomSizeBias = RoomSizeBias.BALANCED,
        strategy: PlacementStrategy = PlacementStrategy.STANDARD
    ):
        self.width = width
        self.height = height
        self.mask = mask
        self.rng = rng
        self.min_size = min_size
        self.max_size = max_size
        self.size_bias = size_bias
        self.strategy = strategy

        self.rooms: List[Room] = []
        self.attempts = 0

    def place(self, target: int) -> List[Room]:
        """
        Place up to target rooms.

        Args:
            target: Number of rooms wanted

        Returns:
            The placed rooms, with ids assigned in placement order
        """
        max_attempts = target * ATTEMPTS_PER_ROOM

        if self.strategy == PlacementStrategy.SYMMETRIC:
            self._place_symmetric(target, max_attempts)
        elif self.strategy == PlacementStrategy.RELAXATION:
            self._place_relaxation(target)
            # Top up anything the separation pass had to discard
            self._place_standard(target, max_attempts)
        else:
            self._place_standard(target, max_attempts)

        for index, room in enumerate(self.rooms):
            room.id = f"room-{index}"

        logger.debug(
            f"Placed {len(self.rooms)}/{target} rooms ({self.strategy.value}) "
            f"in {self.attempts} attempts"
        )
        return self.rooms

    def sample_size(self) -> Tuple[int, int]:
        """Draw a room size according to the size bias."""
        low, high = self.min_size, self.max_size
        spread = high - low

        if self.size_bias == RoomSizeBias.SMALL:
            w = math.floor(self.rng.random() * spread * 0.3) + low
            h = math.floor(self.rng.random() * spread * 0.3) + low
        elif self.size_bias == RoomSizeBias.LARGE:
            w = math.floor(self.rng.random() * spread * 0.5 + (high - spread * 0.5))
            h = math.floor(self.rng.random() * spread * 0.5 + (high - spread * 0.5))
        else:
            w = self.rng.randint(low, high)
            h = self.rng.randint(low, high)

        return w, h

    def is_valid_placement(self, x: int, y: int, w: int, h: int, pending: Optional[List[Room]] = None) -> bool:
        """
        Check a candidate rectangle against the mask and the placed rooms.

        Args:
            pending: Rooms accepted in the same step but not yet committed
        """
        if not region_inside(self.mask, x, y, w, h, self.width, self.height):
            return False

        candidate = Room(id="", x=x, y=y, width=w, height=h)
        for other in self.rooms + (pending or []):
            if candidate.intersects(other, ROOM_BUFFER):
                return False
        return True

    def _random_origin(self, span: int, w: int) -> Optional[int]:
        bound = span - w - 2 * EDGE_MARGIN
        if bound <= 0:
            return None
        return self.rng.randint_below(bound) + EDGE_MARGIN

    def _place_standard(self, target: int, max_attempts: int) -> None:
        while len(self.rooms) < target and self.attempts < max_attempts:
            self.attempts += 1
            w, h = self.sample_size()
            x = self._random_origin(self.width, w)
            y = self._random_origin(self.height, h)
            if x is None or y is None:
                continue

            if self.is_valid_placement(x, y, w, h):
                self.rooms.append(Room(id="", x=x, y=y, width=w, height=h))

    def _place_symmetric(self, target: int, max_attempts: int) -> None:
        half_width = (self.width - 2) // 2

        while len(self.rooms) < target and self.attempts < max_attempts:
            self.attempts += 1
            w, h = self.sample_size()

            # Left half, mirrored onto the right
            bound = half_width - w - 2
            y = self._random_origin(self.height, h)
            if bound <= 0 or y is None:
                continue
            x = self.rng.randint_below(bound) + EDGE_MARGIN
            mirror_x = self.width - x - w

            if not self.is_valid_placement(x, y, w, h):
                continue

            primary = Room(id="", x=x, y=y, width=w, height=h)
            if not self.is_valid_placement(mirror_x, y, w, h, pending=[primary]):
                continue

            self.rooms.append(primary)
            self.rooms.append(Room(id="", x=mirror_x, y=y, width=w, height=h))

    def _place_relaxation(self, target: int) -> None:
        # Scatter without overlap checks
        scattered: List[Room] = []
        for _ in range(target):
            self.attempts += 1
            w, h = self.sample_size()
            x = self._random_origin(self.width, w)
            y = self._random_origin(self.height, h)
            if x is None or y is None:
                continue
            scattered.append(Room(id="", x=x, y=y, width=w, height=h))

        # Push overlapping pairs apart
        for _ in range(RELAXATION_ITERATIONS):
            moved = False
            for i, first in enumerate(scattered):
                for second in scattered[i + 1:]:
                    if not first.intersects(second, 1):
                        continue

                    (ax, ay), (bx, by) = first.center, second.center
                    dx, dy = ax - bx, ay - by
                    distance = math.sqrt(dx * dx + dy * dy)
                    if distance == 0:
                        first.x += 1
                        self._clamp(first)
                        continue

                    push_x = math.floor(dx / distance + 0.5)
                    push_y = math.floor(dy / distance + 0.5)
                    first.x += push_x
                    first.y += push_y
                    second.x -= push_x
                    second.y -= push_y
                    self._clamp(first)
                    self._clamp(second)
                    moved = True
            if not moved:
                break

        # Keep the survivors that fit the mask and the buffer rule
        for room in scattered:
            if self.is_valid_placement(room.x, room.y, room.width, room.height):
                self.rooms.append(room)

    def _clamp(self, room: Room) -> None:
        room.x = max(EDGE_MARGIN, min(room.x, self.width - room.width - EDGE_MARGIN))
        room.y = max(EDGE_MARGIN, min(room.y, self.height - room.height - EDGE_MARGIN))
