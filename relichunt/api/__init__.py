"""
API Module - Front-end interface.

Exposes the engine via REST API. A front end:
1. Starts a game session
2. Sends moves and answers
3. Renders the snapshot returned by every call
4. Resets or ends the session

All state is session-scoped and in-memory.
"""

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
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "MoveRequest",
    "AnswerRequest",
    "SelectOptionRequest",
    "ResetRequest",
    # Responses
    "GameResponse",
    "ErrorResponse",
    # Shared
    "GridInfo",
    "RoomInfo",
    "PlayerInfo",
    "PuzzleInfo",
    "RewardInfo",
    # Service
    "APIService",
    "create_app",
]
