"""
Game Engine - Owns one game's state and exposes its entry points.

Entry points:
    new_game()            Build a fresh grid and player
    move(direction)       Move one room and resolve what is in it
    submit_answer(text)   Answer the open puzzle
    reset()               Throw everything away and start over

Supporting entry points taken by a front end:
    update_answer(text), select_option(index),
    dismiss_puzzle(), dismiss_rewards()

Every entry point runs to completion before returning. Invalid input is
a no-op: the returned snapshot is simply unchanged. Snapshots (Grid,
PlayerState) are frozen, so handing them out never exposes the engine's
state to mutation.
"""

from __future__ import annotations
import logging
import random

from .state import GameState, Grid, PlayerState
from .action import Action, ActionResult, Direction
from .reducer import Reducer
from ..games.treasure_hunt.puzzles import Puzzle, get_puzzle
from ..games.treasure_hunt.setup import setup_treasure_hunt

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Single-player treasure hunt engine.

    Usage:
        engine = GameEngine(random_seed=42)
        grid, player = engine.new_game()
        player = engine.move("left")
        if player.puzzle_active:
            player = engine.submit_answer("echo")
    """

    def __init__(
        self,
        random_seed: int | None = None,
        rng: random.Random | None = None,
        state: GameState | None = None,
    ):
        self._random_seed = random_seed
        self._rng = rng or random.Random(random_seed)
        self._reducer = Reducer(rng=self._rng)
        self.last_result: ActionResult | None = None
        if state is None:
            state = setup_treasure_hunt(self._rng, random_seed=random_seed)
            logger.info("Created game %s (seed=%s)", state.game_id, random_seed)
        self._state = state

    @classmethod
    def from_state(cls, state: GameState, rng: random.Random | None = None) -> GameEngine:
        """Create an engine that continues from an existing state."""
        return cls(
            random_seed=state.random_seed,
            rng=rng or random.Random(state.random_seed),
            state=state,
        )

    # =========================================================================
    # Snapshots
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def grid(self) -> Grid:
        """Read-only grid snapshot."""
        return self._state.grid

    @property
    def player(self) -> PlayerState:
        """Read-only player snapshot."""
        return self._state.player

    @property
    def current_puzzle(self) -> Puzzle | None:
        """Definition of the open puzzle, if any."""
        ref = self._state.player.active_puzzle
        return get_puzzle(ref) if ref else None

    # =========================================================================
    # Entry points
    # =========================================================================

    def new_game(self, random_seed: int | None = None) -> tuple[Grid, PlayerState]:
        """
        Start a new game with a freshly generated grid.

        Args:
            random_seed: Reseed the random source first (None keeps drawing
                from the current one, so every game gets a different grid)
        """
        return self._restart(random_seed, returning=False)

    def reset(self, random_seed: int | None = None) -> tuple[Grid, PlayerState]:
        """Discard the current game entirely and start again."""
        return self._restart(random_seed, returning=True)

    def move(self, direction: Direction | str) -> PlayerState:
        """Move one room. Ignored in a terminal state or while a puzzle is open."""
        if isinstance(direction, str):
            direction = direction.strip().lower()
        try:
            direction = Direction(direction)
        except ValueError:
            logger.warning("Ignoring unknown direction %r", direction)
            self.last_result = ActionResult.failure(self._state, f"Unknown direction {direction!r}")
            return self.player
        return self._dispatch(Action.move(direction))

    def submit_answer(self, text: str | None = None) -> PlayerState:
        """Answer the open puzzle. None submits the current answer draft."""
        return self._dispatch(Action.submit_answer(text))

    def update_answer(self, text: str) -> PlayerState:
        return self._dispatch(Action.update_answer(text))

    def select_option(self, index: int) -> PlayerState:
        """Pick a quiz option as the answer draft."""
        return self._dispatch(Action.select_option(index))

    def dismiss_puzzle(self) -> PlayerState:
        return self._dispatch(Action.dismiss_puzzle())

    def dismiss_rewards(self) -> PlayerState:
        return self._dispatch(Action.dismiss_rewards())

    # =========================================================================
    # Internals
    # =========================================================================

    def _dispatch(self, action: Action) -> PlayerState:
        result = self._reducer.apply(self._state, action)
        self.last_result = result
        if result.success:
            self._state = result.new_state
        return self.player

    def _restart(self, random_seed: int | None, returning: bool) -> tuple[Grid, PlayerState]:
        self._random_seed = random_seed
        if random_seed is not None:
            self._rng.seed(random_seed)

        self._state = setup_treasure_hunt(
            self._rng,
            random_seed=self._random_seed,
            returning=returning,
        )
        self.last_result = None
        logger.info("Started game %s", self._state.game_id)
        return self.grid, self.player
