"""
Tests for grid generation.

Tests:
- Room counts and fixed placement
- Trap rejection sampling
- Ambient event assignment
- Determinism under a seed
"""

import random

import pytest

from ..engine_core.state import Position, PuzzleType, RoomKind
from ..games.treasure_hunt.grid import generate_grid, _place_traps
from ..games.treasure_hunt.puzzles import CATALOG_PUZZLES
from ..games.treasure_hunt.rules import (
    FINAL_POSITION,
    GRID_SIZE,
    RELIC_POSITIONS,
    START_POSITION,
    TRAP_COUNT,
)


class ScriptedRandom(random.Random):
    """Random source whose randrange calls return a fixed script."""

    def __init__(self, script):
        super().__init__(0)
        self.script = list(script)

    def randrange(self, *args, **kwargs):
        return self.script.pop(0)


class TestGridStructure:
    """Tests for room counts and placement."""

    def test_room_counts_over_many_seeds(self):
        """Every grid has 1 start, 3 relics, 1 final room and TRAP_COUNT traps."""
        for seed in range(200):
            grid = generate_grid(random.Random(seed))
            assert grid.size == GRID_SIZE
            assert grid.count(RoomKind.START) == 1
            assert grid.count(RoomKind.RELIC) == 3
            assert grid.count(RoomKind.FINAL) == 1
            assert grid.count(RoomKind.TRAP) == TRAP_COUNT
            assert grid.count(RoomKind.EMPTY) == GRID_SIZE * GRID_SIZE - 5 - TRAP_COUNT

    def test_fixed_positions(self):
        """Start, relics and final room are always in the same place."""
        grid = generate_grid(random.Random(3))

        assert grid.positions_of(RoomKind.START) == [START_POSITION]
        assert grid.positions_of(RoomKind.FINAL) == [FINAL_POSITION]
        for relic_id, pos in RELIC_POSITIONS.items():
            room = grid.room_at(pos)
            assert room.kind == RoomKind.RELIC
            assert room.relic_id == relic_id

    def test_relics_cover_every_puzzle_type(self):
        """The three relic rooms gate one catalog puzzle of each type."""
        grid = generate_grid(random.Random(11))
        types = [
            CATALOG_PUZZLES[grid.room_at(pos).relic_id].puzzle_type
            for pos in grid.positions_of(RoomKind.RELIC)
        ]
        assert sorted(t.value for t in types) == sorted(t.value for t in PuzzleType)

    def test_relic_rooms_get_random_puzzle_type(self):
        """Each relic room gets a puzzle type, and all types show up across seeds."""
        seen = set()
        for seed in range(50):
            grid = generate_grid(random.Random(seed))
            for pos in grid.positions_of(RoomKind.RELIC):
                room = grid.room_at(pos)
                assert room.puzzle_type in set(PuzzleType)
                assert room.puzzle_ref is not None
                seen.add(room.puzzle_type)
        assert seen == set(PuzzleType)

    def test_only_start_is_discovered(self):
        """A new grid shows only the start room."""
        grid = generate_grid(random.Random(5))
        for pos, room in grid.cells():
            assert room.discovered == (pos == START_POSITION)
        assert grid.discovered_count == 1


class TestTrapPlacement:
    """Tests for rejection-sampled trap placement."""

    def test_occupied_cells_are_redrawn(self):
        """Draws landing on non-empty cells are rejected, never overwritten."""
        script = [
            2, 2,  # start
            0, 0,  # relic 1
            4, 4,  # final
            1, 1,
            1, 1,  # already a trap
            3, 3,
            4, 0,  # relic 2
            1, 3,
            3, 1,
        ]
        rng = ScriptedRandom(script)
        grid = generate_grid(rng)

        assert rng.script == []
        assert sorted((p.x, p.y) for p in grid.positions_of(RoomKind.TRAP)) == [
            (1, 1), (1, 3), (3, 1), (3, 3),
        ]
        assert grid.room_at(START_POSITION).kind == RoomKind.START
        assert grid.room_at(FINAL_POSITION).kind == RoomKind.FINAL
        assert grid.room_at(Position(0, 0)).kind == RoomKind.RELIC
        assert grid.room_at(Position(4, 0)).kind == RoomKind.RELIC

    def test_too_many_traps_fails(self):
        """Asking for more traps than empty cells is an error, not an endless loop."""
        grid = generate_grid(random.Random(0))
        rows = [list(row) for row in grid.rooms]
        with pytest.raises(ValueError):
            _place_traps(rows, random.Random(0), GRID_SIZE * GRID_SIZE)


class TestAmbientEvents:
    """Tests for ambient event assignment."""

    def test_events_only_on_empty_rooms(self):
        """Only empty rooms carry events."""
        for seed in range(100):
            grid = generate_grid(random.Random(seed))
            for _, room in grid.cells():
                if room.event is not None:
                    assert room.kind == RoomKind.EMPTY

    def test_some_rooms_get_events(self):
        """Events are assigned to a fraction of the empty rooms."""
        with_event = 0
        empty = 0
        for seed in range(100):
            grid = generate_grid(random.Random(seed))
            for _, room in grid.cells():
                if room.kind == RoomKind.EMPTY:
                    empty += 1
                    if room.event is not None:
                        with_event += 1
        assert 0 < with_event < empty
        # EVENT_CHANCE is 0.3
        assert 0.2 < with_event / empty < 0.4


class TestDeterminism:
    """Tests for seeded generation."""

    def test_same_seed_same_grid(self):
        assert generate_grid(random.Random(99)) == generate_grid(random.Random(99))

    def test_different_seeds_vary(self):
        """Trap layouts differ across seeds."""
        layouts = {
            tuple(generate_grid(random.Random(seed)).positions_of(RoomKind.TRAP))
            for seed in range(20)
        }
        assert len(layouts) > 1
