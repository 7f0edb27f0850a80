"""
Game State - Immutable containers for the grid and the player.

Design principles:
- Immutable: rooms, grid and player are frozen, all mutations return new state
- Snapshots are safe to hand to renderers, nothing can write through them
- Explicit mode: one GameMode instead of independent flags
- Tagged puzzle references instead of identity comparison
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator


class RoomKind(Enum):
    """What a room holds. Fixed at generation time."""
    EMPTY = "empty"
    RELIC = "relic"
    TRAP = "trap"
    FINAL = "final"
    START = "start"


class PuzzleType(Enum):
    """Puzzle styles."""
    RIDDLE = "riddle"
    SCRAMBLE = "scramble"
    QUIZ = "quiz"


class EventType(Enum):
    """Ambient events that can be attached to empty rooms."""
    HEAL = "heal"
    DAMAGE = "damage"
    NOTHING = "nothing"
    HINT = "hint"


class GameMode(Enum):
    """Where the player is in the game's state machine."""
    EXPLORING = "exploring"
    PUZZLE_ACTIVE = "puzzle_active"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (GameMode.WON, GameMode.LOST)


class PuzzleKind(Enum):
    """Tag for the puzzle currently in play."""
    CATALOG = "catalog"
    FINAL = "final"
    BONUS = "bonus"


@dataclass(frozen=True)
class PuzzleRef:
    """
    Reference to a puzzle.

    Catalog puzzles carry the relic id they gate. The scripted
    final and bonus puzzles carry no id.
    """
    kind: PuzzleKind
    relic_id: int | None = None

    @classmethod
    def catalog(cls, relic_id: int) -> PuzzleRef:
        return cls(kind=PuzzleKind.CATALOG, relic_id=relic_id)

    @classmethod
    def final(cls) -> PuzzleRef:
        return cls(kind=PuzzleKind.FINAL)

    @classmethod
    def bonus(cls) -> PuzzleRef:
        return cls(kind=PuzzleKind.BONUS)


@dataclass(frozen=True)
class Reward:
    """Reward granted on victory."""
    gold: int
    experience: int
    title: str


@dataclass(frozen=True)
class Position:
    """Grid coordinate. x is the column, y the row (0 is the top)."""
    x: int
    y: int

    def moved(self, dx: int, dy: int, size: int) -> Position:
        """Return the position shifted by (dx, dy), clamped per axis to the grid."""
        return Position(
            x=min(size - 1, max(0, self.x + dx)),
            y=min(size - 1, max(0, self.y + dy)),
        )


@dataclass(frozen=True)
class Room:
    """
    One grid cell.

    relic_id and puzzle_type are only set on relic rooms, event only
    on empty rooms. discovered flips to True once and never back.
    """
    kind: RoomKind = RoomKind.EMPTY
    discovered: bool = False
    relic_id: int | None = None
    puzzle_type: PuzzleType | None = None
    event: EventType | None = None

    @property
    def puzzle_ref(self) -> PuzzleRef | None:
        """Catalog puzzle gating this room's relic, if any."""
        if self.kind != RoomKind.RELIC or self.relic_id is None:
            return None
        return PuzzleRef.catalog(self.relic_id)

    def discover(self) -> Room:
        """Return the room marked as discovered."""
        if self.discovered:
            return self
        return replace(self, discovered=True)


@dataclass(frozen=True)
class Grid:
    """
    A square grid of rooms, indexed rooms[y][x].

    Rooms are stored as nested tuples so the grid can be shared by
    reference without anyone mutating it.
    """
    rooms: tuple[tuple[Room, ...], ...]

    def __post_init__(self):
        size = len(self.rooms)
        if size == 0 or any(len(row) != size for row in self.rooms):
            raise ValueError("Grid must be a non-empty square")

    @property
    def size(self) -> int:
        return len(self.rooms)

    def room_at(self, position: Position) -> Room:
        return self.rooms[position.y][position.x]

    def with_room(self, position: Position, room: Room) -> Grid:
        """Return new grid with one room replaced."""
        row = self.rooms[position.y]
        new_row = row[:position.x] + (room,) + row[position.x + 1:]
        return Grid(
            rooms=self.rooms[:position.y] + (new_row,) + self.rooms[position.y + 1:]
        )

    def discover(self, position: Position) -> Grid:
        """Return new grid with the room at position discovered."""
        room = self.room_at(position)
        if room.discovered:
            return self
        return self.with_room(position, room.discover())

    def cells(self) -> Iterator[tuple[Position, Room]]:
        """Iterate (position, room) row by row."""
        for y, row in enumerate(self.rooms):
            for x, room in enumerate(row):
                yield Position(x, y), room

    def positions_of(self, kind: RoomKind) -> list[Position]:
        return [pos for pos, room in self.cells() if room.kind == kind]

    def count(self, kind: RoomKind) -> int:
        return len(self.positions_of(kind))

    @property
    def discovered_count(self) -> int:
        return sum(1 for _, room in self.cells() if room.discovered)

    @classmethod
    def from_rows(cls, rows: list[list[Room]]) -> Grid:
        """Freeze a mutable list-of-lists into a Grid."""
        return cls(rooms=tuple(tuple(row) for row in rows))


@dataclass(frozen=True)
class PlayerState:
    """
    Everything about the player, including the UI-facing fields.

    The engine replaces this object on every change, it is never
    mutated in place.
    """
    position: Position
    health: int
    max_health: int
    title: str
    story: str = ""
    relics_collected: int = 0
    gold: int = 0
    experience: int = 0

    mode: GameMode = GameMode.EXPLORING
    active_puzzle: PuzzleRef | None = None
    claimed_relics: frozenset[int] = frozenset()
    answer_draft: str = ""

    # Victory summary
    show_rewards: bool = False
    final_reward: Reward | None = None

    @property
    def won(self) -> bool:
        return self.mode == GameMode.WON

    @property
    def lost(self) -> bool:
        return self.mode == GameMode.LOST

    @property
    def is_terminal(self) -> bool:
        return self.mode.is_terminal

    @property
    def puzzle_active(self) -> bool:
        return self.mode == GameMode.PUZZLE_ACTIVE

    @property
    def current_relic_id(self) -> int | None:
        """Relic gated by the active puzzle, if it is a catalog puzzle."""
        if self.active_puzzle and self.active_puzzle.kind == PuzzleKind.CATALOG:
            return self.active_puzzle.relic_id
        return None

    def has_claimed(self, relic_id: int) -> bool:
        return relic_id in self.claimed_relics

    def _copy_with(self, **kwargs) -> PlayerState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    grid: Grid
    player: PlayerState

    # Successful moves so far
    move_count: int = 0

    # History (for replay and debugging)
    action_history: tuple[Any, ...] = ()

    # Seed the grid was generated from, if one was given
    random_seed: int | None = None

    # Metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def mode(self) -> GameMode:
        return self.player.mode

    @property
    def current_room(self) -> Room:
        return self.grid.room_at(self.player.position)

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        return self._copy_with(player=player)

    def with_grid(self, grid: Grid) -> GameState:
        """Return new state with updated grid."""
        return self._copy_with(grid=grid)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            game_id=kwargs.get("game_id", self.game_id),
            grid=kwargs.get("grid", self.grid),
            player=kwargs.get("player", self.player),
            move_count=kwargs.get("move_count", self.move_count),
            action_history=kwargs.get("action_history", self.action_history),
            random_seed=kwargs.get("random_seed", self.random_seed),
            metadata=kwargs.get("metadata", self.metadata),
        )
