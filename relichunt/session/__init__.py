"""
Session Module - Manages ephemeral game sessions.

A session represents one player's game:
- Created when a client starts playing
- Holds the game engine
- Survives resets (the engine rebuilds its state)
- Destroyed when the client ends it or it goes stale

Sessions are EPHEMERAL:
- No persistence to database
- Independent of each other
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
