"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply().

Design principles:
- (state, action) -> ActionResult, the input state is never modified
- Validates before applying; rejected actions are no-ops, not errors
- Room entry is resolved inside the move that caused it
- Randomness (trap damage, flavor text) comes from the injected rng
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import random

from .state import (
    EventType,
    GameMode,
    GameState,
    PlayerState,
    PuzzleKind,
    PuzzleRef,
    Room,
    RoomKind,
)
from .action import Action, ActionType, ActionResult
from ..games.treasure_hunt import narrative
from ..games.treasure_hunt.events import EMPTY_ROOM_MESSAGES, get_event
from ..games.treasure_hunt.puzzles import FINAL_REWARD, get_puzzle
from ..games.treasure_hunt.rules import (
    RELIC_HEAL,
    RELICS_REQUIRED,
    TRAP_DAMAGE,
    TRAP_DAMAGE_SPREAD,
    WRONG_ANSWER_LOSS_THRESHOLD,
    WRONG_ANSWER_PENALTY,
    relic_experience,
    relic_gold,
)

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the random source - all game state is in GameState.
    """
    rng: random.Random

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state, or the unchanged state
        and a reason if the action was ignored.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            logger.debug("Ignored %s: %s", action.action_type.value, validation_error)
            return ActionResult.failure(state, validation_error)

        handler = self._get_handler(action.action_type)
        result = handler(state, action)

        if result.success:
            result.new_state = result.new_state._copy_with(
                action_history=result.new_state.action_history + (action,),
            )
        return result

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """
        Check that an action is allowed in the current mode.

        Returns the reason if not allowed, None if allowed.
        """
        mode = state.mode

        if action.action_type == ActionType.DISMISS_REWARDS:
            if not state.player.show_rewards:
                return "No rewards to dismiss"
            return None

        if mode.is_terminal:
            return f"Game is over ({mode.value}) - reset to play again"

        if action.action_type == ActionType.MOVE:
            if mode == GameMode.PUZZLE_ACTIVE:
                return "Cannot move while a puzzle is open"
            if action.payload.direction is None:
                return "Move needs a direction"
            return None

        # Everything else acts on the open puzzle
        if mode != GameMode.PUZZLE_ACTIVE:
            return "No puzzle is open"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.MOVE: self._handle_move,
            ActionType.SUBMIT_ANSWER: self._handle_submit_answer,
            ActionType.UPDATE_ANSWER: self._handle_update_answer,
            ActionType.SELECT_OPTION: self._handle_select_option,
            ActionType.DISMISS_PUZZLE: self._handle_dismiss_puzzle,
            ActionType.DISMISS_REWARDS: self._handle_dismiss_rewards,
        }
        return handlers[action_type]

    # =========================================================================
    # Movement and room entry
    # =========================================================================

    def _handle_move(self, state: GameState, action: Action) -> ActionResult:
        """Move one room, clamped to the grid, then resolve the room entered."""
        direction = action.payload.direction
        dx, dy = direction.delta
        player = state.player
        target = player.position.moved(dx, dy, state.grid.size)

        if target == player.position:
            return ActionResult.failure(state, f"Wall blocks movement {direction.value}")

        new_state = state._copy_with(
            player=player._copy_with(position=target),
            move_count=state.move_count + 1,
        )
        changes = [f"Moved {direction.value} to ({target.x}, {target.y})"]

        new_state, entry_changes = self._enter_room(new_state)
        changes.extend(entry_changes)
        return ActionResult.success_with_state(new_state, changes=changes)

    def _enter_room(self, state: GameState) -> tuple[GameState, list[str]]:
        """
        Resolve the effects of entering the player's current room.

        First entry marks the room discovered and resolves it by kind.
        Later entries only re-evaluate the final room's gate and
        re-open a relic puzzle that was dismissed unsolved.
        """
        position = state.player.position
        room = state.grid.room_at(position)

        if room.discovered:
            if room.kind == RoomKind.FINAL:
                return self._resolve_final(state)
            if room.kind == RoomKind.RELIC:
                return self._resolve_relic(state, room)
            return state, []

        state = state.with_grid(state.grid.discover(position))
        logger.debug("Discovered %s room at (%d, %d)", room.kind.value, position.x, position.y)

        if room.kind == RoomKind.RELIC:
            return self._resolve_relic(state, room)
        if room.kind == RoomKind.TRAP:
            return self._resolve_trap(state)
        if room.kind == RoomKind.FINAL:
            return self._resolve_final(state)
        if room.kind == RoomKind.EMPTY:
            return self._resolve_empty(state, room)
        return state, []

    def _resolve_relic(self, state: GameState, room: Room) -> tuple[GameState, list[str]]:
        player = state.player
        if room.relic_id is None or player.has_claimed(room.relic_id):
            return state, []

        new_player = player._copy_with(
            mode=GameMode.PUZZLE_ACTIVE,
            active_puzzle=room.puzzle_ref,
            answer_draft="",
            story=narrative.RELIC_FOUND,
        )
        return state.with_player(new_player), [f"Relic {room.relic_id} puzzle opened"]

    def _resolve_trap(self, state: GameState) -> tuple[GameState, list[str]]:
        damage = TRAP_DAMAGE + self.rng.randrange(TRAP_DAMAGE_SPREAD)
        player = state.player
        health = max(0, player.health - damage)
        changes = [f"Trap dealt {damage} damage"]

        if health == 0:
            new_player = player._copy_with(
                health=0,
                mode=GameMode.LOST,
                story=narrative.TRAP_DEATH,
            )
            changes.append("Game over")
            logger.info("Game %s lost to a trap", state.game_id)
        else:
            new_player = player._copy_with(
                health=health,
                story=narrative.trap_triggered(damage),
            )
        return state.with_player(new_player), changes

    def _resolve_final(self, state: GameState) -> tuple[GameState, list[str]]:
        player = state.player
        if player.relics_collected >= RELICS_REQUIRED:
            new_player = player._copy_with(
                mode=GameMode.PUZZLE_ACTIVE,
                active_puzzle=PuzzleRef.final(),
                answer_draft="",
                story=narrative.FINAL_OPEN,
            )
            return state.with_player(new_player), ["Final puzzle opened"]

        new_player = player._copy_with(
            story=narrative.final_sealed(player.relics_collected, RELICS_REQUIRED),
        )
        return state.with_player(new_player), ["Final chest is sealed"]

    def _resolve_empty(self, state: GameState, room: Room) -> tuple[GameState, list[str]]:
        player = state.player

        if room.event is None:
            story = self.rng.choice(EMPTY_ROOM_MESSAGES)
            return state.with_player(player._copy_with(story=story)), []

        event = get_event(room.event)
        changes = [f"Event: {event.event_type.value}"]

        if event.event_type == EventType.HEAL:
            health = min(player.max_health, player.health + event.value)
            new_player = player._copy_with(health=health, story=event.message)
        elif event.event_type == EventType.DAMAGE:
            health = max(0, player.health - event.value)
            if health == 0:
                new_player = player._copy_with(
                    health=0,
                    mode=GameMode.LOST,
                    story=narrative.EVENT_DEATH,
                )
                changes.append("Game over")
                logger.info("Game %s lost to a room event", state.game_id)
            else:
                new_player = player._copy_with(health=health, story=event.message)
        else:
            new_player = player._copy_with(story=event.message)

        return state.with_player(new_player), changes

    # =========================================================================
    # Puzzles
    # =========================================================================

    def _handle_submit_answer(self, state: GameState, action: Action) -> ActionResult:
        """
        Check an answer against the open puzzle.

        The draft is cleared after every attempt, right or wrong.
        """
        player = state.player
        text = action.payload.text
        if text is None:
            text = player.answer_draft

        ref = player.active_puzzle
        puzzle = get_puzzle(ref)
        player = player._copy_with(answer_draft="")

        if not puzzle.is_correct(text):
            return self._wrong_answer(state, player)

        if ref.kind == PuzzleKind.CATALOG:
            return self._claim_relic(state, player, ref.relic_id)

        if ref.kind == PuzzleKind.FINAL:
            new_player = player._copy_with(
                active_puzzle=PuzzleRef.bonus(),
                story=narrative.FINAL_SOLVED,
            )
            return ActionResult.success_with_state(
                state.with_player(new_player),
                changes=["Final puzzle solved", "Bonus puzzle opened"],
            )

        new_player = player._copy_with(
            mode=GameMode.WON,
            active_puzzle=None,
            gold=player.gold + FINAL_REWARD.gold,
            experience=player.experience + FINAL_REWARD.experience,
            title=FINAL_REWARD.title,
            story=narrative.VICTORY,
            show_rewards=True,
            final_reward=FINAL_REWARD,
        )
        logger.info("Game %s won", state.game_id)
        return ActionResult.success_with_state(
            state.with_player(new_player),
            changes=[
                "Bonus puzzle solved",
                f"Gained {FINAL_REWARD.gold} gold and {FINAL_REWARD.experience} XP",
                f"Title: {FINAL_REWARD.title}",
            ],
        )

    def _claim_relic(
        self,
        state: GameState,
        player: PlayerState,
        relic_id: int,
    ) -> ActionResult:
        gold = relic_gold(relic_id)
        experience = relic_experience(relic_id)
        collected = player.relics_collected + 1

        new_player = player._copy_with(
            relics_collected=collected,
            claimed_relics=player.claimed_relics | {relic_id},
            gold=player.gold + gold,
            experience=player.experience + experience,
            health=min(player.max_health, player.health + RELIC_HEAL),
            mode=GameMode.EXPLORING,
            active_puzzle=None,
            story=narrative.relic_claimed(gold, experience, collected, RELICS_REQUIRED),
        )
        logger.debug("Relic %d claimed (%d/%d)", relic_id, collected, RELICS_REQUIRED)
        return ActionResult.success_with_state(
            state.with_player(new_player),
            changes=[
                f"Claimed relic {relic_id}",
                f"Gained {gold} gold and {experience} XP",
            ],
        )

    def _wrong_answer(self, state: GameState, player: PlayerState) -> ActionResult:
        """
        Apply the wrong-answer penalty.

        Health at or below the loss threshold after the penalty ends the
        game, even if it is not zero.
        """
        health = max(0, player.health - WRONG_ANSWER_PENALTY)
        changes = [f"Wrong answer: lost {WRONG_ANSWER_PENALTY} health"]

        if health <= WRONG_ANSWER_LOSS_THRESHOLD:
            new_player = player._copy_with(
                health=health,
                mode=GameMode.LOST,
                active_puzzle=None,
                story=narrative.WRONG_ANSWER_FATAL,
            )
            changes.append("Game over")
            logger.info("Game %s lost on a wrong answer", state.game_id)
        else:
            new_player = player._copy_with(
                health=health,
                story=narrative.WRONG_ANSWER.format(penalty=WRONG_ANSWER_PENALTY),
            )
        return ActionResult.success_with_state(state.with_player(new_player), changes=changes)

    def _handle_update_answer(self, state: GameState, action: Action) -> ActionResult:
        new_player = state.player._copy_with(answer_draft=action.payload.text or "")
        return ActionResult.success_with_state(state.with_player(new_player))

    def _handle_select_option(self, state: GameState, action: Action) -> ActionResult:
        """Pick a quiz option as the answer draft."""
        puzzle = get_puzzle(state.player.active_puzzle)
        index = action.payload.option_index
        if not puzzle.options:
            return ActionResult.failure(state, "Puzzle has no options")
        if index is None or not 0 <= index < len(puzzle.options):
            return ActionResult.failure(state, f"No option {index}")

        option = puzzle.options[index]
        new_player = state.player._copy_with(answer_draft=option.lower())
        return ActionResult.success_with_state(
            state.with_player(new_player),
            changes=[f"Selected {option}"],
        )

    def _handle_dismiss_puzzle(self, state: GameState, action: Action) -> ActionResult:
        """Close the open puzzle without answering it."""
        new_player = state.player._copy_with(
            mode=GameMode.EXPLORING,
            active_puzzle=None,
            answer_draft="",
            story=narrative.PUZZLE_DISMISSED,
        )
        return ActionResult.success_with_state(
            state.with_player(new_player),
            changes=["Puzzle dismissed"],
        )

    def _handle_dismiss_rewards(self, state: GameState, action: Action) -> ActionResult:
        new_player = state.player._copy_with(show_rewards=False)
        return ActionResult.success_with_state(state.with_player(new_player))


def apply_action(state: GameState, action: Action, rng: random.Random) -> ActionResult:
    """Convenience function to apply an action."""
    return Reducer(rng=rng).apply(state, action)
