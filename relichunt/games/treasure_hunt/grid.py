"""
Treasure Hunt Grid - Generates the room layout for a new game.

Placement is fixed for the start, relic and final rooms. Randomness
is consumed in this order:
1. Puzzle type for each relic chest (relic id order)
2. Trap positions (x then y per draw, rejection sampled)
3. Ambient events for the remaining empty rooms (row by row)

Pass a seeded random.Random to get a reproducible grid.
"""

from __future__ import annotations
import logging
import random

from ...engine_core.state import Grid, Position, PuzzleType, Room, RoomKind
from .events import EVENT_TABLE
from .rules import (
    EVENT_CHANCE,
    FINAL_POSITION,
    GRID_SIZE,
    RELIC_POSITIONS,
    START_POSITION,
    TRAP_COUNT,
)

logger = logging.getLogger(__name__)

PUZZLE_TYPES = tuple(PuzzleType)


def generate_grid(rng: random.Random) -> Grid:
    """
    Generate a fresh grid.

    Args:
        rng: Random source (seed it for deterministic layouts)

    Returns:
        Grid with one start, three relics, one final room, TRAP_COUNT
        traps and ambient events on some of the empty rooms
    """
    rows = [[Room() for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]

    _place(rows, START_POSITION, Room(kind=RoomKind.START, discovered=True))

    for relic_id, position in RELIC_POSITIONS.items():
        _place(rows, position, Room(
            kind=RoomKind.RELIC,
            relic_id=relic_id,
            puzzle_type=rng.choice(PUZZLE_TYPES),
        ))

    _place(rows, FINAL_POSITION, Room(kind=RoomKind.FINAL))

    _place_traps(rows, rng, TRAP_COUNT)
    _assign_events(rows, rng)

    grid = Grid.from_rows(rows)
    logger.debug(
        "Generated grid: traps at %s",
        [(p.x, p.y) for p in grid.positions_of(RoomKind.TRAP)],
    )
    return grid


def _place(rows: list[list[Room]], position: Position, room: Room) -> None:
    rows[position.y][position.x] = room


def _place_traps(rows: list[list[Room]], rng: random.Random, count: int) -> None:
    """Place traps on empty cells, redrawing whenever the cell is taken."""
    size = len(rows)
    empty_cells = sum(1 for row in rows for room in row if room.kind == RoomKind.EMPTY)
    if count > empty_cells:
        raise ValueError(f"Cannot place {count} traps on {empty_cells} empty cells")

    for _ in range(count):
        while True:
            x = rng.randrange(size)
            y = rng.randrange(size)
            if rows[y][x].kind == RoomKind.EMPTY:
                break
        rows[y][x] = Room(kind=RoomKind.TRAP)


def _assign_events(rows: list[list[Room]], rng: random.Random) -> None:
    """Attach an ambient event to each remaining empty room with EVENT_CHANCE."""
    for row in rows:
        for x, room in enumerate(row):
            if room.kind == RoomKind.EMPTY and rng.random() < EVENT_CHANCE:
                event = rng.choice(EVENT_TABLE)
                row[x] = Room(kind=RoomKind.EMPTY, event=event.event_type)
