"""Tests for the coherent noise engine."""
import pytest
from dungeongen.core import noise
from dungeongen.core.noise import NoiseContext, build_permutation
from dungeongen.core.random_source import LCGRandom


def sample_points(count: int, seed: int = 2718):
    """Deterministic spread of coordinates, including negatives."""
    rng = LCGRandom(seed)
    return [(rng.random() * 512 - 256, rng.random() * 512 - 256) for _ in range(count)]


class TestPermutation:
    """Tests for permutation table construction."""

    def test_table_length(self):
        """The table is 512 entries long."""
        assert len(build_permutation(42)) == 512

    def test_first_half_is_permutation(self):
        """The first 256 entries hold each of 0..255 once."""
        perm = build_permutation(42)
        assert sorted(perm[:256]) == list(range(256))

    def test_second_half_duplicates_first(self):
        """The table repeats after 256 entries."""
        perm = build_permutation(1234)
        assert perm[256:] == perm[:256]

    def test_seed_changes_table(self):
        """Different seeds give different tables."""
        assert build_permutation(1) != build_permutation(2)

    def test_known_table_for_seed_42(self):
        """Seed 42 shuffles to a fixed table."""
        perm = build_permutation(42)
        assert perm[:8] == (146, 120, 128, 198, 98, 54, 5, 213)
        assert perm[252:256] == (150, 65, 239, 27)
        assert perm[256:264] == perm[:8]

    def test_table_is_immutable(self):
        """The table is a tuple."""
        assert isinstance(NoiseContext(5).permutation, tuple)


class TestNoise2D:
    """Tests for single-octave noise."""

    def test_determinism(self):
        """Same seed and coordinate always give the same value."""
        noise.seed_noise(42)
        first = [noise.noise2d(x, y) for x, y in sample_points(100)]
        second = [noise.noise2d(x, y) for x, y in sample_points(100)]
        assert first == second

    def test_determinism_across_contexts(self):
        """Independent contexts with one seed agree exactly."""
        a = NoiseContext(99)
        b = NoiseContext(99)
        for x, y in sample_points(200):
            assert a.noise2d(x, y) == b.noise2d(x, y)

    def test_zero_on_lattice_points(self):
        """Gradient noise vanishes on integer coordinates."""
        ctx = NoiseContext(42)
        for x in range(-5, 5):
            for y in range(-5, 5):
                assert ctx.noise2d(float(x), float(y)) == 0.0

    def test_bounds(self):
        """10,000 samples stay within [-1.01, 1.01]."""
        ctx = NoiseContext(42)
        for x, y in sample_points(10000):
            assert -1.01 <= ctx.noise2d(x, y) <= 1.01

    def test_not_constant(self):
        """Noise varies across the plane."""
        ctx = NoiseContext(42)
        values = {round(ctx.noise2d(x, y), 6) for x, y in sample_points(100)}
        assert len(values) > 50

    def test_seeds_differ(self):
        """Different seeds give different fields."""
        a = NoiseContext(1)
        b = NoiseContext(2)
        points = sample_points(50)
        assert [a.noise2d(x, y) for x, y in points] != [b.noise2d(x, y) for x, y in points]

    @pytest.mark.parametrize("x,y,expected", [
        (0.5, 0.5, -0.125),
        (1.25, 2.75, 0.16968441009521484),
        (3.7, 1.2, -0.097552643840000036),
        (10.5, 20.25, 0.396484375),
    ])
    def test_known_values_for_seed_42(self, x, y, expected):
        """Exact values from the gradient noise formulas."""
        assert NoiseContext(42).noise2d(x, y) == expected

    def test_continuity(self):
        """Nearby points give nearby values."""
        ctx = NoiseContext(42)
        for x, y in sample_points(100):
            assert abs(ctx.noise2d(x, y) - ctx.noise2d(x + 0.001, y)) < 0.05


class TestFBM:
    """Tests for fractal Brownian motion."""

    def test_bounds_default_parameters(self):
        """fbm with defaults stays within [-1.01, 1.01]."""
        ctx = NoiseContext(42)
        for x, y in sample_points(10000, seed=31):
            assert -1.01 <= ctx.fbm(x, y) <= 1.01

    def test_single_octave_equals_noise(self):
        """One octave is plain noise."""
        ctx = NoiseContext(7)
        for x, y in sample_points(50):
            assert ctx.fbm(x, y, octaves=1) == ctx.noise2d(x, y)

    @pytest.mark.parametrize("x,y,expected", [
        (1.25, 2.75, -0.04283498128255208),
        (3.7, 1.2, -0.22429901550933332),
    ])
    def test_known_values_for_seed_42(self, x, y, expected):
        """Four default octaves give exact values."""
        assert NoiseContext(42).fbm(x, y) == expected

    def test_invalid_octaves(self):
        """Zero octaves should raise ValueError."""
        with pytest.raises(ValueError):
            NoiseContext(7).fbm(0.5, 0.5, octaves=0)

    def test_module_fbm_uses_default_context(self):
        """Module-level fbm reads the process-wide context."""
        noise.seed_noise(17)
        assert noise.fbm(1.3, 2.7) == NoiseContext(17).fbm(1.3, 2.7)


class TestSeeding:
    """Tests for re-seeding behavior."""

    def test_idempotent_seeding(self):
        """Seeding twice with 42 equals seeding once."""
        noise.seed_noise(42)
        once = [noise.noise2d(x, y) for x, y in sample_points(200)]

        noise.seed_noise(42)
        noise.seed_noise(42)
        twice = [noise.noise2d(x, y) for x, y in sample_points(200)]

        assert once == twice

    def test_reseed_restores_field(self):
        """Returning to a seed restores its field."""
        ctx = NoiseContext(42)
        before = ctx.noise2d(10.5, 3.25)
        ctx.seed(1000)
        ctx.seed(42)
        assert ctx.noise2d(10.5, 3.25) == before
        assert ctx.seed_value == 42

    def test_default_context_isolated_from_instances(self):
        """Re-seeding the default context leaves owned contexts alone."""
        ctx = NoiseContext(42)
        before = ctx.noise2d(4.2, 8.8)
        noise.seed_noise(555)
        assert ctx.noise2d(4.2, 8.8) == before
        noise.seed_noise(42)

    def test_default_context_seed(self):
        """The default context starts from seed 42."""
        assert noise.DEFAULT_NOISE_SEED == 42
        assert noise.get_default_context() is noise.get_default_context()
