"""
Engine Core - Game state management and rule resolution.

The engine is the runtime that:
1. Builds a GameState (grid + player) for a new game
2. Applies actions via the reducer
3. Resolves room entry and puzzle answers
4. Exposes read-only snapshots for rendering

The reducer and GameEngine are imported from their own modules
(engine_core.reducer, engine_core.engine) since they depend on the
game data in games.treasure_hunt.
"""

from .state import (
    GameState,
    PlayerState,
    Grid,
    Room,
    RoomKind,
    Position,
    PuzzleRef,
    PuzzleKind,
    PuzzleType,
    EventType,
    GameMode,
    Reward,
)
from .action import Action, ActionType, ActionPayload, ActionResult, Direction

__all__ = [
    "GameState",
    "PlayerState",
    "Grid",
    "Room",
    "RoomKind",
    "Position",
    "PuzzleRef",
    "PuzzleKind",
    "PuzzleType",
    "EventType",
    "GameMode",
    "Reward",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Direction",
]
