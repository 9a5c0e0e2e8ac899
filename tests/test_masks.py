"""Tests for boundary masks."""
import pytest
from dungeongen.core.errors import InvalidConfigurationError
from dungeongen.core.noise import NoiseContext
from dungeongen.core.map_generation.masks import (
    CavernousMask,
    CrossMask,
    KeepMask,
    RectangleMask,
    RoundMask,
    build_mask,
    mask_area,
    region_inside,
)
from dungeongen.core.map_generation.params import MaskType


W, H = 64, 64


class TestBuildMask:
    """Tests for mask selection."""

    @pytest.mark.parametrize("name,cls", [
        ("rectangle", RectangleMask),
        ("round", RoundMask),
        ("cross", CrossMask),
        ("keep", KeepMask),
        ("cavernous", CavernousMask),
    ])
    def test_selects_shape(self, name, cls):
        """Each name maps to its mask class."""
        mask = build_mask(name, W, H)
        assert isinstance(mask, cls)
        assert mask.mask_type == MaskType(name)

    def test_accepts_enum(self):
        """Enum members are accepted as well as names."""
        assert isinstance(build_mask(MaskType.ROUND, W, H), RoundMask)

    def test_unknown_mask_fails(self):
        """Unknown shapes never fall back to rectangle."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            build_mask("hexagon", W, H)
        assert exc_info.value.field == "mask_type"

    def test_non_positive_dimensions_fail(self):
        """Zero or negative dimensions are rejected."""
        with pytest.raises(InvalidConfigurationError):
            build_mask("rectangle", 0, 10)
        with pytest.raises(InvalidConfigurationError):
            build_mask("rectangle", 10, -1)

    def test_cavernous_uses_given_noise(self):
        """The cavernous mask keeps the noise context it was given."""
        ctx = NoiseContext(5)
        mask = build_mask("cavernous", W, H, ctx)
        assert mask.noise is ctx


class TestShapes:
    """Tests for the individual shape predicates."""

    @pytest.mark.parametrize("mask_type", list(MaskType))
    def test_out_of_range_never_inside(self, mask_type):
        """Coordinates off the grid are never inside."""
        mask = build_mask(mask_type, W, H)
        for x, y in [(-1, 10), (10, -1), (W, 10), (10, H), (-5, -5)]:
            assert not mask.contains(x, y, W, H)

    @pytest.mark.parametrize("mask_type", list(MaskType))
    def test_center_inside(self, mask_type):
        """Every shape includes the grid center."""
        mask = build_mask(mask_type, W, H)
        assert mask.contains(W // 2, H // 2, W, H)

    def test_rectangle_covers_everything(self):
        """The rectangle mask is the full bounding box."""
        assert mask_area(RectangleMask(), W, H) == W * H
        assert RectangleMask().contains(0, 0, W, H)
        assert RectangleMask().contains(W - 1, H - 1, W, H)

    def test_round_matches_circle(self):
        """The round mask is the padded disc around the center."""
        mask = RoundMask()
        radius = min(W, H) / 2 - 2
        for y in range(H):
            for x in range(W):
                expected = (x - W // 2) ** 2 + (y - H // 2) ** 2 <= radius ** 2
                assert mask.contains(x, y, W, H) == expected

    def test_round_excludes_corners(self):
        """Grid corners lie outside the disc."""
        mask = RoundMask()
        assert not mask.contains(0, 0, W, H)
        assert not mask.contains(W - 1, H - 1, W, H)

    def test_cross_arms(self):
        """The cross reaches the margins along its arms only."""
        mask = CrossMask()
        assert mask.contains(2, H // 2, W, H)
        assert mask.contains(W - 3, H // 2, W, H)
        assert mask.contains(W // 2, 2, W, H)
        assert not mask.contains(1, H // 2, W, H)
        assert not mask.contains(5, 5, W, H)
        assert not mask.contains(W - 6, H - 6, W, H)

    def test_keep_padding(self):
        """The keep excludes a 4-cell band on every side."""
        mask = KeepMask()
        assert not mask.contains(3, 30, W, H)
        assert mask.contains(4, 30, W, H)
        assert mask.contains(W - 5, 30, W, H)
        assert not mask.contains(W - 4, 30, W, H)
        assert mask_area(mask, W, H) == (W - 8) * (H - 8)

    def test_cavernous_border(self):
        """The cavernous outline never touches the outer cells."""
        mask = CavernousMask(NoiseContext(3))
        for i in range(W):
            assert not mask.contains(i, 0, W, H)
            assert not mask.contains(0, i, W, H)
            assert not mask.contains(i, H - 1, W, H)
            assert not mask.contains(W - 1, i, W, H)

    def test_cavernous_stable_for_seed(self):
        """The same seed gives the same cave outline."""
        a = CavernousMask(NoiseContext(21))
        b = CavernousMask(NoiseContext(21))
        cells_a = [(x, y) for y in range(H) for x in range(W) if a.contains(x, y, W, H)]
        cells_b = [(x, y) for y in range(H) for x in range(W) if b.contains(x, y, W, H)]
        assert cells_a == cells_b

    def test_cavernous_irregular(self):
        """The noisy rim differs from a plain ellipse for some seed."""
        areas = {mask_area(CavernousMask(NoiseContext(seed)), W, H) for seed in (1, 2, 3, 4)}
        assert len(areas) > 1

    def test_masks_are_reusable(self):
        """A mask answers for any grid size it is asked about."""
        mask = KeepMask()
        assert mask.contains(10, 10, 20, 20)
        assert not mask.contains(10, 10, 12, 12)


class TestRegionHelpers:
    """Tests for region_inside and mask_area."""

    def test_region_inside(self):
        """A region is inside only if every cell is."""
        mask = KeepMask()
        assert region_inside(mask, 4, 4, 5, 5, W, H)
        assert not region_inside(mask, 2, 4, 5, 5, W, H)

    def test_mask_area_round(self):
        """The disc covers roughly pi r^2 cells."""
        area = mask_area(RoundMask(), W, H)
        assert 0.6 * W * H < area < 0.75 * W * H
