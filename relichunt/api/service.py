"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Formats engine snapshots for the client

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from .schemas import (
    # Requests
    CreateGameRequest,
    MoveRequest,
    AnswerRequest,
    SelectOptionRequest,
    ResetRequest,
    # Responses
    GameResponse,
    ErrorResponse,
    # Shared
    GridInfo,
    RoomInfo,
    PlayerInfo,
    PuzzleInfo,
    RewardInfo,
    # Enums
    ErrorCode,
    GameModeValue,
    SessionStatus,
)
from ..engine_core.engine import GameEngine
from ..engine_core.state import Grid, PlayerState
from ..games.treasure_hunt.rules import RELICS_REQUIRED
from ..session import SessionManager, Session, SessionState

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Start a game
        response = service.create_game(CreateGameRequest())

        # Play
        response = service.move(response.session_id, MoveRequest(direction="left"))
        response = service.submit_answer(session_id, AnswerRequest(answer="echo"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a new game session."""
        session = self.session_manager.create_session(random_seed=request.random_seed)
        return self._session_to_response(session)

    def get_game(self, session_id: str) -> GameResponse | ErrorResponse:
        """Get the current snapshot of a game."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._session_to_response(session, include_result=False)

    def move(self, session_id: str, request: MoveRequest) -> GameResponse | ErrorResponse:
        return self._with_session(
            session_id, lambda engine: engine.move(request.direction.value)
        )

    def submit_answer(
        self,
        session_id: str,
        request: AnswerRequest,
    ) -> GameResponse | ErrorResponse:
        return self._with_session(
            session_id, lambda engine: engine.submit_answer(request.answer)
        )

    def select_option(
        self,
        session_id: str,
        request: SelectOptionRequest,
    ) -> GameResponse | ErrorResponse:
        return self._with_session(
            session_id, lambda engine: engine.select_option(request.index)
        )

    def dismiss_puzzle(self, session_id: str) -> GameResponse | ErrorResponse:
        return self._with_session(session_id, lambda engine: engine.dismiss_puzzle())

    def dismiss_rewards(self, session_id: str) -> GameResponse | ErrorResponse:
        return self._with_session(session_id, lambda engine: engine.dismiss_rewards())

    def reset(self, session_id: str, request: ResetRequest) -> GameResponse | ErrorResponse:
        """Discard the session's game and start a new one."""
        return self._with_session(
            session_id, lambda engine: engine.reset(random_seed=request.random_seed)
        )

    def end_session(self, session_id: str, reason: str = "ended") -> bool:
        """End a session."""
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _with_session(
        self,
        session_id: str,
        operation: Callable[[GameEngine], object],
    ) -> GameResponse | ErrorResponse:
        """Look up a session, run an engine operation on it, return the snapshot."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        operation(session.engine)
        session.touch()
        return self._session_to_response(session)

    def _session_to_response(
        self,
        session: Session,
        include_result: bool = True,
    ) -> GameResponse:
        engine = session.engine
        result = engine.last_result if include_result else None

        return GameResponse(
            session_id=session.session_id,
            game_id=engine.state.game_id,
            status=_session_status(session),
            grid=grid_to_info(engine.grid, engine.player),
            player=player_to_info(engine),
            applied=result.success if result else True,
            reason=result.error if result else None,
            changes=list(result.state_changes) if result else [],
            move_count=engine.state.move_count,
        )


def _not_found(session_id: str) -> ErrorResponse:
    logger.debug("Session %s not found", session_id)
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


def _session_status(session: Session) -> SessionStatus:
    if session.state == SessionState.GAME_OVER:
        return SessionStatus.GAME_OVER
    return SessionStatus.ACTIVE


def grid_to_info(grid: Grid, player: PlayerState) -> GridInfo:
    """Convert a grid snapshot, hiding undiscovered rooms."""
    rows = []
    for y, row in enumerate(grid.rooms):
        infos = []
        for x, room in enumerate(row):
            here = player.position.x == x and player.position.y == y
            if not room.discovered:
                infos.append(RoomInfo(x=x, y=y, discovered=False, is_player_here=here))
                continue
            infos.append(RoomInfo(
                x=x,
                y=y,
                discovered=True,
                kind=room.kind.value,
                relic_id=room.relic_id,
                puzzle_type=room.puzzle_type.value if room.puzzle_type else None,
                relic_claimed=room.relic_id is not None and player.has_claimed(room.relic_id),
                event=room.event.value if room.event else None,
                is_player_here=here,
            ))
        rows.append(infos)

    return GridInfo(size=grid.size, rooms=rows, discovered_count=grid.discovered_count)


def player_to_info(engine: GameEngine) -> PlayerInfo:
    """Convert the player snapshot, including the open puzzle's public fields."""
    player = engine.player
    puzzle_info = None
    puzzle = engine.current_puzzle
    if puzzle and player.active_puzzle:
        puzzle_info = PuzzleInfo(
            kind=player.active_puzzle.kind.value,
            puzzle_type=puzzle.puzzle_type.value,
            question=puzzle.question,
            options=list(puzzle.options),
            hint=puzzle.hint,
            relic_id=player.active_puzzle.relic_id,
        )

    reward = player.final_reward
    return PlayerInfo(
        x=player.position.x,
        y=player.position.y,
        health=player.health,
        max_health=player.max_health,
        relics_collected=player.relics_collected,
        relics_required=RELICS_REQUIRED,
        claimed_relics=sorted(player.claimed_relics),
        gold=player.gold,
        experience=player.experience,
        title=player.title,
        story=player.story,
        mode=GameModeValue(player.mode.value),
        won=player.won,
        lost=player.lost,
        puzzle=puzzle_info,
        answer_draft=player.answer_draft,
        show_rewards=player.show_rewards,
        final_reward=(
            RewardInfo(gold=reward.gold, experience=reward.experience, title=reward.title)
            if reward else None
        ),
    )
