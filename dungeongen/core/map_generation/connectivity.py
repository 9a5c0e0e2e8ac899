"""
Connectivity & Corridor Routing.

Chooses which rooms to link (minimum spanning tree, optional loops, full
graph or nearest-neighbor chain) and digs the corridors between them.
Every corridor cell must lie inside the boundary mask; a route that
leaves the mask is replaced by an alternative or dropped.
"""
import heapq
import logging
from typing import Dict, List, Optional, Tuple

from ..random_source import LCGRandom
from .masks import BoundaryMask
from .models import CellType, Corridor, Grid, NEIGHBOR_OFFSETS, Room
from .params import ConnectivityStrategy, CorridorStyle, DeadEndRemoval

logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Edge = Tuple[int, int, int]  # (distance, room index a, room index b)

LOOP_CHANCE = 0.3
LOOP_FRACTION = 0.2
ERRANT_NOISE = 0.2
FLOOR_STEP_COST = 1
DIG_STEP_COST = 5


def manhattan(a: Point, b: Point) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def l_path(start: Point, end: Point, horizontal_first: bool) -> List[Point]:
    """Cells of an L-shaped path between two points, without duplicates."""
    (x1, y1), (x2, y2) = start, end
    points: List[Point] = []

    def add(p: Point) -> None:
        if not points or points[-1] != p:
            points.append(p)

    step_x = 1 if x2 >= x1 else -1
    step_y = 1 if y2 >= y1 else -1
    if horizontal_first:
        for x in range(x1, x2 + step_x, step_x):
            add((x, y1))
        for y in range(y1, y2 + step_y, step_y):
            add((x2, y))
    else:
        for y in range(y1, y2 + step_y, step_y):
            add((x1, y))
        for x in range(x1, x2 + step_x, step_x):
            add((x, y2))
    return points


def stepped_line(start: Point, end: Point) -> List[Point]:
    """
    Bresenham line with 4-connected steps.

    Where the classic algorithm moves diagonally an extra cell is inserted,
    so consecutive points always share an edge.
    """
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    points = [(x0, y0)]
    while (x0, y0) != (x1, y1):
        e2 = 2 * err
        moved_x = False
        if e2 > -dy:
            err -= dy
            x0 += sx
            moved_x = True
        if e2 < dx:
            if moved_x:
                points.append((x0, y0))
            err += dx
            y0 += sy
        points.append((x0, y0))
    return points


class NetworkConnector:
    """Links rooms with corridors for one generation run."""

    def __init__(
        self,
        grid: Grid,
        mask: BoundaryMask,
        rng: LCGRandom,
        strategy: ConnectivityStrategy = ConnectivityStrategy.MST_LOOPS,
        style: CorridorStyle = CorridorStyle.L_PATH
    ):
        self.grid = grid
        self.mask = mask
        self.rng = rng
        self.strategy = strategy
        self.style = style
        self.skipped = 0

    def connect(self, rooms: List[Room]) -> List[Corridor]:
        """
        Select room pairs and carve a corridor for each.

        Returns:
            The committed corridors, in carving order
        """
        if len(rooms) < 2:
            return []

        corridors: List[Corridor] = []
        for _, a, b in self.select_edges(rooms):
            room_a, room_b = rooms[a], rooms[b]
            points = self.route(room_a, room_b)
            if points is None:
                self.skipped += 1
                logger.warning(f"No in-bounds route between {room_a.id} and {room_b.id}, connection skipped")
                continue

            for x, y in points:
                self.grid.set(x, y, CellType.FLOOR)
            room_a.connections.append(room_b.id)
            room_b.connections.append(room_a.id)
            corridors.append(Corridor(
                id=f"corridor-{len(corridors)}",
                room_a_id=room_a.id,
                room_b_id=room_b.id,
                points=points,
                style=self.style.value,
            ))

        logger.debug(f"Carved {len(corridors)} corridors ({self.strategy.value}/{self.style.value}), skipped {self.skipped}")
        return corridors

    def build_edges(self, rooms: List[Room]) -> List[Edge]:
        """All room pairs, shortest center-to-center distance first."""
        edges = []
        for i in range(len(rooms)):
            for j in range(i + 1, len(rooms)):
                edges.append((manhattan(rooms[i].center, rooms[j].center), i, j))
        edges.sort(key=lambda e: e[0])
        return edges

    def select_edges(self, rooms: List[Room]) -> List[Edge]:
        """Pick the edges to carve according to the connectivity strategy."""
        if self.strategy == ConnectivityStrategy.NEAREST:
            return self._nearest_chain(rooms)

        edges = self.build_edges(rooms)

        # Kruskal over the sorted edges
        parent = list(range(len(rooms)))

        def find(i: int) -> int:
            while parent[i] != i:
                parent[i] = parent[parent[i]]
                i = parent[i]
            return i

        selected: List[Edge] = []
        rest: List[Edge] = []
        for edge in edges:
            root_a, root_b = find(edge[1]), find(edge[2])
            if root_a != root_b:
                parent[root_a] = root_b
                selected.append(edge)
            else:
                rest.append(edge)

        if self.strategy == ConnectivityStrategy.FULL:
            selected.extend(rest)
        elif self.strategy == ConnectivityStrategy.MST_LOOPS:
            max_loops = max(2, int(len(rooms) * LOOP_FRACTION))
            loops = 0
            for edge in rest:
                if loops >= max_loops:
                    break
                if self.rng.chance(LOOP_CHANCE):
                    selected.append(edge)
                    loops += 1

        return selected

    def _nearest_chain(self, rooms: List[Room]) -> List[Edge]:
        chain: List[Edge] = []
        current = 0
        remaining = set(range(1, len(rooms)))
        while remaining:
            nearest = min(remaining, key=lambda i: (manhattan(rooms[current].center, rooms[i].center), i))
            chain.append((manhattan(rooms[current].center, rooms[nearest].center), current, nearest))
            remaining.remove(nearest)
            current = nearest
        return chain

    def route(self, room_a: Room, room_b: Room) -> Optional[List[Point]]:
        """
        Find an in-mask path between two room centers.

        Returns:
            The path cells, or None when no route stays inside the mask
        """
        start, end = room_a.center, room_b.center

        if self.style == CorridorStyle.ERRANT:
            return self.astar(start, end, ERRANT_NOISE)

        horizontal_first = self.rng.chance(0.5)
        if self.style == CorridorStyle.STRAIGHT:
            candidates = [stepped_line(start, end)]
        else:
            candidates = []
        candidates.append(l_path(start, end, horizontal_first))
        candidates.append(l_path(start, end, not horizontal_first))

        for points in candidates:
            if self._inside(points):
                return points
        return self.astar(start, end)

    def astar(self, start: Point, end: Point, noise_factor: float = 0.0) -> Optional[List[Point]]:
        """
        A* over in-mask cells, preferring existing floor to fresh rock.

        Args:
            noise_factor: Random extra step cost that makes paths wander

        Returns:
            Path from start to end inclusive, or None if unreachable
        """
        width, height = self.grid.width, self.grid.height
        counter = 0
        frontier: List[Tuple[float, int, Point]] = [(0.0, counter, start)]
        came_from: Dict[Point, Optional[Point]] = {start: None}
        cost_so_far: Dict[Point, float] = {start: 0.0}

        while frontier:
            _, _, current = heapq.heappop(frontier)
            if current == end:
                break

            cx, cy = current
            for dx, dy in NEIGHBOR_OFFSETS:
                nxt = (cx + dx, cy + dy)
                nx, ny = nxt
                if not (0 < nx < width - 1 and 0 < ny < height - 1):
                    continue
                if not self.mask.contains(nx, ny, width, height):
                    continue

                step = FLOOR_STEP_COST if self.grid.is_type(nx, ny, CellType.FLOOR) else DIG_STEP_COST
                if noise_factor > 0:
                    step += self.rng.random() * noise_factor * 10

                new_cost = cost_so_far[current] + step
                if nxt not in cost_so_far or new_cost < cost_so_far[nxt]:
                    cost_so_far[nxt] = new_cost
                    came_from[nxt] = current
                    counter += 1
                    heapq.heappush(frontier, (new_cost + manhattan(nxt, end), counter, nxt))
        else:
            return None

        path = []
        node: Optional[Point] = end
        while node is not None:
            path.append(node)
            node = came_from[node]
        path.reverse()
        return path

    def _inside(self, points: List[Point]) -> bool:
        width, height = self.grid.width, self.grid.height
        return all(self.mask.contains(x, y, width, height) for x, y in points)


def prune_dead_ends(
    grid: Grid,
    mode: DeadEndRemoval,
    rng: LCGRandom,
    rooms: Optional[List[Room]] = None
) -> int:
    """
    Fill corridor tips back in with rock.

    A tip is a floor cell with at most one floor neighbor. 'some' makes a
    single pass removing each tip with 50% chance, 'all' repeats until no
    tip is left. Room cells are never removed.

    Returns:
        Number of cells filled
    """
    mode = DeadEndRemoval(mode)
    if mode == DeadEndRemoval.NONE:
        return 0

    protected = set()
    for room in rooms or []:
        protected.update(room.cells())

    removed_total = 0
    removed = True
    while removed:
        removed = False
        for y in range(1, grid.height - 1):
            for x in range(1, grid.width - 1):
                if not grid.is_type(x, y, CellType.FLOOR) or (x, y) in protected:
                    continue
                if grid.count_neighbors(x, y, CellType.FLOOR) > 1:
                    continue

                if mode == DeadEndRemoval.ALL or rng.chance(0.5):
                    grid.set(x, y, CellType.WALL)
                    removed_total += 1
                    removed = True

        if mode == DeadEndRemoval.SOME:
            break

    logger.debug(f"Pruned {removed_total} dead-end cells ({mode.value})")
    return removed_total
