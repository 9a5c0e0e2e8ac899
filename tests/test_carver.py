"""Tests for the layout carver."""
import pytest
from dungeongen.core.errors import PlacementExhaustedError
from dungeongen.core.random_source import LCGRandom
from dungeongen.core.map_generation.carver import LayoutCarver, room_budget
from dungeongen.core.map_generation.dungeon_generator import generate_dungeon
from dungeongen.core.map_generation.masks import build_mask
from dungeongen.core.map_generation.models import CellType
from dungeongen.core.map_generation.params import GenerationOptions, get_size_tier


def carve(options_dict, seed=1):
    options = GenerationOptions.from_options(options_dict)
    width, height = options.dimensions
    mask = build_mask(options.mask_type, width, height)
    return LayoutCarver(width, height, mask, LCGRandom(seed), options).carve(), mask


class TestRoomBudget:
    """Tests for room targets."""

    def test_full_coverage(self):
        """An open grid aims within the tier's room range."""
        tier = get_size_tier("medium")
        rng = LCGRandom(3)
        for _ in range(50):
            target, required = room_budget(tier, 1.0, rng)
            assert required == tier.min_rooms
            assert tier.min_rooms <= target <= tier.max_rooms

    def test_scaled_by_coverage(self):
        """Half coverage halves the requirement."""
        tier = get_size_tier("medium")
        target, required = room_budget(tier, 0.5, LCGRandom(3))
        assert required == 5
        assert required <= target <= tier.max_rooms // 2

    def test_minimum_two_rooms(self):
        tier = get_size_tier("tiny")
        _, required = room_budget(tier, 0.1, LCGRandom(3))
        assert required == 2


class TestLayoutCarver:
    """Tests for the carving phase."""

    def test_floor_inside_mask(self):
        layout, mask = carve({"size": "medium", "maskType": "cross"})
        for x, y in layout.grid.cells_of(CellType.FLOOR):
            assert mask.contains(x, y, 64, 64)

    def test_rooms_are_floor(self):
        layout, _ = carve({"size": "small"})
        for room in layout.rooms:
            assert layout.grid.is_region_type(room.x, room.y, room.width, room.height, CellType.FLOOR)

    def test_meets_required_rooms(self):
        layout, _ = carve({"size": "small", "maskType": "round"})
        assert len(layout.rooms) >= layout.stats["rooms_required"]
        assert layout.stats["room_attempts"] <= layout.stats["room_target"] * 50

    def test_stats(self):
        layout, _ = carve({"size": "small", "peripheralEgress": True})
        assert layout.stats["rooms"] == len(layout.rooms)
        assert layout.stats["corridors"] == len(layout.corridors)
        assert layout.stats["exits"] == len(layout.exits)

    def test_no_exits_unless_requested(self):
        layout, _ = carve({"size": "small"})
        assert layout.exits == []

    def test_too_small_for_required_rooms(self):
        """A keep on a 16x16 grid fits one medium room, not two."""
        with pytest.raises(PlacementExhaustedError) as exc_info:
            generate_dungeon({"width": 16, "height": 16, "maskType": "keep"})

        details = exc_info.value.details
        assert details["phase"] == "carver"
        assert details["rooms_required"] == 2
        assert details["rooms_placed"] < 2
        assert details["attempts"] > 0
        assert details["floor_cells"] == details["mask_cells"] == 64
