"""
Pytest fixtures for Relic Hunt tests.
"""

import random

import pytest

from ..engine_core.engine import GameEngine
from ..engine_core.state import (
    GameState,
    Grid,
    Position,
    PuzzleType,
    Room,
    RoomKind,
)
from ..games.treasure_hunt.rules import (
    FINAL_POSITION,
    GRID_SIZE,
    RELIC_POSITIONS,
    START_POSITION,
)
from ..games.treasure_hunt.setup import create_player


def build_grid(overrides: dict | None = None) -> Grid:
    """
    Build a quiet grid: fixed start, relics and final room, everything
    else empty with no events. overrides maps (x, y) -> Room.
    """
    rows = [[Room() for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]
    rows[START_POSITION.y][START_POSITION.x] = Room(kind=RoomKind.START, discovered=True)
    for relic_id, pos in RELIC_POSITIONS.items():
        rows[pos.y][pos.x] = Room(
            kind=RoomKind.RELIC,
            relic_id=relic_id,
            puzzle_type=PuzzleType.RIDDLE,
        )
    rows[FINAL_POSITION.y][FINAL_POSITION.x] = Room(kind=RoomKind.FINAL)

    for (x, y), room in (overrides or {}).items():
        rows[y][x] = room
    return Grid.from_rows(rows)


def build_state(overrides: dict | None = None, **player_fields) -> GameState:
    """Build a GameState on a quiet grid with selected player fields replaced."""
    player = create_player()
    if player_fields:
        player = player._copy_with(**player_fields)
    return GameState(game_id="test_game", grid=build_grid(overrides), player=player)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def quiet_state() -> GameState:
    """Fresh game on a grid without traps or events."""
    return build_state()


@pytest.fixture
def make_engine():
    """Factory for engines continuing from a hand-built state."""
    def _make(overrides: dict | None = None, seed: int = 7, **player_fields) -> GameEngine:
        state = build_state(overrides, **player_fields)
        return GameEngine.from_state(state, rng=random.Random(seed))
    return _make


@pytest.fixture
def quiet_engine(make_engine) -> GameEngine:
    """Engine on a grid without traps or events."""
    return make_engine()


@pytest.fixture
def seeded_engine() -> GameEngine:
    """Engine with a randomly generated but reproducible grid."""
    return GameEngine(random_seed=42)


def walk(engine: GameEngine, *directions: str):
    """Apply a sequence of moves, returning the final player snapshot."""
    player = engine.player
    for direction in directions:
        player = engine.move(direction)
    return player


def position(engine: GameEngine) -> Position:
    return engine.player.position
