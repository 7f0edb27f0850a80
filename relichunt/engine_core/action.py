"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player actions (move, answer, dismiss)
2. Answer drafting (typing, picking a quiz option)

All state changes flow through actions. Starting and resetting a game
builds fresh state instead and is handled by the engine.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Direction(Enum):
    """Movement directions. y grows downwards."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class ActionType(Enum):
    """Types of actions in the system."""
    MOVE = "move"
    SUBMIT_ANSWER = "submit_answer"
    UPDATE_ANSWER = "update_answer"
    SELECT_OPTION = "select_option"
    DISMISS_PUZZLE = "dismiss_puzzle"
    DISMISS_REWARDS = "dismiss_rewards"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    """
    direction: Direction | None = None
    text: str | None = None
    option_index: int | None = None

    # Generic params
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)
    timestamp: float | None = None

    @classmethod
    def move(cls, direction: Direction) -> Action:
        """Factory for move action."""
        return cls(
            action_type=ActionType.MOVE,
            payload=ActionPayload(direction=direction),
        )

    @classmethod
    def submit_answer(cls, text: str | None = None) -> Action:
        """Factory for answer submission. None submits the current draft."""
        return cls(
            action_type=ActionType.SUBMIT_ANSWER,
            payload=ActionPayload(text=text),
        )

    @classmethod
    def update_answer(cls, text: str) -> Action:
        return cls(
            action_type=ActionType.UPDATE_ANSWER,
            payload=ActionPayload(text=text),
        )

    @classmethod
    def select_option(cls, index: int) -> Action:
        return cls(
            action_type=ActionType.SELECT_OPTION,
            payload=ActionPayload(option_index=index),
        )

    @classmethod
    def dismiss_puzzle(cls) -> Action:
        return cls(action_type=ActionType.DISMISS_PUZZLE)

    @classmethod
    def dismiss_rewards(cls) -> Action:
        return cls(action_type=ActionType.DISMISS_REWARDS)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Rejected actions are not errors: success is False, the reason is in
    error and new_state is the unchanged input state.
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)  # Human-readable changes

    @classmethod
    def failure(cls, state: Any, error: str) -> ActionResult:
        """Create a result for an ignored action."""
        return cls(success=False, new_state=state, error=error)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
