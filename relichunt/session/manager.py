"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Client starts a session -> new GameEngine with a fresh grid
2. During the game the client moves, answers puzzles, dismisses dialogs
3. Client resets -> same session, brand new grid and player
4. Client ends the session -> engine dropped, ALL state deleted

PERSISTENCE RULES:
- Nothing is persisted, sessions live in memory only
- Sessions never share state; each owns its own engine and random source
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import time
import uuid

from ..engine_core.engine import GameEngine

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Won or lost, waiting for reset or end
    ENDED = "ended"  # Client ended the session
    ABANDONED = "abandoned"  # Cleaned up as stale


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The engine holding the game state
    - Session metadata

    The session is destroyed when the client ends it.
    """
    session_id: str
    engine: GameEngine
    created_at: float
    last_active_at: float = 0.0

    state: SessionState = SessionState.ACTIVE

    # Session metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if the session can still be played (including after game over)."""
        return self.state in {SessionState.ACTIVE, SessionState.GAME_OVER}

    def touch(self):
        """Record activity and sync the session state with the game."""
        self.last_active_at = time.time()
        if self.state in {SessionState.ENDED, SessionState.ABANDONED}:
            return
        if self.engine.player.is_terminal:
            self.state = SessionState.GAME_OVER
        else:
            self.state = SessionState.ACTIVE


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up ended or stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self, random_seed: int | None = None) -> Session:
        """
        Create a new game session.

        Args:
            random_seed: Seed for a reproducible grid

        Returns:
            New Session with a game ready to play
        """
        session_id = str(uuid.uuid4())
        now = time.time()

        session = Session(
            session_id=session_id,
            engine=GameEngine(random_seed=random_seed),
            created_at=now,
            last_active_at=now,
        )

        self._sessions[session_id] = session
        logger.info("Created session %s", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "ended") -> bool:
        """
        End a session and drop it.

        Returns True if the session existed.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        if reason == "stale":
            session.state = SessionState.ABANDONED
        else:
            session.state = SessionState.ENDED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_idle_seconds: float = 3600) -> int:
        """
        End sessions idle for longer than max_idle_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.last_active_at > max_idle_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
