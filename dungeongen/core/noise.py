"""
Coherent Noise Engine.

Classic 2D gradient (Perlin) noise and fractal Brownian motion, used for
water features, cavernous boundaries and other organic randomness.

Each NoiseContext owns its permutation table, so concurrent generations
never share state. The module-level seed_noise/noise2d/fbm functions work
on a single process-wide default context for callers that want the simple
surface.
"""
import math
from typing import Tuple

from .random_source import LCGRandom

DEFAULT_NOISE_SEED = 42

# Gradient directions (3D set, only the x/y components are used in 2D)
GRAD3: Tuple[Tuple[int, int, int], ...] = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)


def _fade(t: float) -> float:
    """Quintic fade curve: 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _grad(hash_value: int, x: float, y: float) -> float:
    g = GRAD3[hash_value & 11]
    return g[0] * x + g[1] * y


def build_permutation(seed: int) -> Tuple[int, ...]:
    """
    Build the 512-entry permutation table for a seed.

    Shuffles 0..255 with the LCG (Fisher-Yates from the top index down),
    then duplicates the result so corner lookups never wrap.
    """
    p = list(range(256))
    LCGRandom(seed).shuffle(p)
    return tuple(p[i & 255] for i in range(512))


class NoiseContext:
    """
    Seeded gradient noise field.

    The permutation table is immutable once built; re-seeding swaps in a
    whole new table.
    """

    def __init__(self, seed: int = DEFAULT_NOISE_SEED):
        self._seed = seed
        self._perm = build_permutation(seed)

    @property
    def seed_value(self) -> int:
        return self._seed

    @property
    def permutation(self) -> Tuple[int, ...]:
        return self._perm

    def seed(self, value: int) -> None:
        """Replace the permutation table with one derived from value."""
        perm = build_permutation(value)
        self._seed = value
        self._perm = perm

    def noise2d(self, x: float, y: float) -> float:
        """
        2D Perlin noise.

        Returns:
            Noise value, roughly in [-1, 1]
        """
        perm = self._perm

        # Unit grid cell
        floor_x = math.floor(x)
        floor_y = math.floor(y)
        xi = floor_x & 255
        yi = floor_y & 255

        # Relative position in cell
        xf = x - floor_x
        yf = y - floor_y

        u = _fade(xf)
        v = _fade(yf)

        # Hash corners
        aa = perm[perm[xi] + yi]
        ab = perm[perm[xi] + yi + 1]
        ba = perm[perm[xi + 1] + yi]
        bb = perm[perm[xi + 1] + yi + 1]

        x1 = _lerp(_grad(aa, xf, yf), _grad(ba, xf - 1, yf), u)
        x2 = _lerp(_grad(ab, xf, yf - 1), _grad(bb, xf - 1, yf - 1), u)

        return _lerp(x1, x2, v)

    def fbm(
        self,
        x: float,
        y: float,
        octaves: int = 4,
        lacunarity: float = 2.0,
        persistence: float = 0.5
    ) -> float:
        """
        Fractal Brownian motion: several octaves of noise summed together.

        Args:
            x: X coordinate
            y: Y coordinate
            octaves: Number of noise layers
            lacunarity: Frequency multiplier per octave
            persistence: Amplitude multiplier per octave

        Returns:
            Noise value normalized by the total amplitude
        """
        if octaves < 1:
            raise ValueError(f"Invalid octave count: {octaves}")

        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0

        for _ in range(octaves):
            value += amplitude * self.noise2d(x * frequency, y * frequency)
            max_value += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return value / max_value


# Process-wide default context
_default_context = NoiseContext(DEFAULT_NOISE_SEED)


def get_default_context() -> NoiseContext:
    """Get the process-wide noise context."""
    return _default_context


def seed_noise(seed: int) -> None:
    """Re-seed the process-wide noise context."""
    _default_context.seed(seed)


def noise2d(x: float, y: float) -> float:
    """2D Perlin noise from the process-wide context."""
    return _default_context.noise2d(x, y)


def fbm(
    x: float,
    y: float,
    octaves: int = 4,
    lacunarity: float = 2.0,
    persistence: float = 0.5
) -> float:
    """Fractal noise from the process-wide context."""
    return _default_context.fbm(x, y, octaves, lacunarity, persistence)
