"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a front end and the engine.
Rooms that have not been discovered are sent without their contents,
and puzzle answers are never sent.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"


class GameModeValue(str, Enum):
    """Player mode values."""
    EXPLORING = "exploring"
    PUZZLE_ACTIVE = "puzzle_active"
    WON = "won"
    LOST = "lost"


class DirectionValue(str, Enum):
    """Movement directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class RoomInfo(BaseModel):
    """A grid cell as seen by the player."""
    x: int
    y: int
    discovered: bool
    kind: Optional[str] = Field(None, description="empty, relic, trap, final, start; null until discovered")
    relic_id: Optional[int] = None
    puzzle_type: Optional[str] = None
    relic_claimed: bool = False
    event: Optional[str] = None
    is_player_here: bool = False


class GridInfo(BaseModel):
    """The whole grid, row by row."""
    size: int
    rooms: list[list[RoomInfo]]
    discovered_count: int = 0


class PuzzleInfo(BaseModel):
    """The open puzzle. The answer is not included."""
    kind: str = Field(description="catalog, final, bonus")
    puzzle_type: str = Field(description="riddle, scramble, quiz")
    question: str
    options: list[str] = Field(default_factory=list)
    hint: Optional[str] = None
    relic_id: Optional[int] = None


class RewardInfo(BaseModel):
    """Victory reward summary."""
    gold: int
    experience: int
    title: str


class PlayerInfo(BaseModel):
    """Player information for display."""
    x: int
    y: int
    health: int
    max_health: int
    relics_collected: int
    relics_required: int
    claimed_relics: list[int] = Field(default_factory=list)
    gold: int = 0
    experience: int = 0
    title: str
    story: str
    mode: GameModeValue
    won: bool = False
    lost: bool = False
    puzzle: Optional[PuzzleInfo] = None
    answer_draft: str = ""
    show_rewards: bool = False
    final_reward: Optional[RewardInfo] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game session."""
    random_seed: Optional[int] = Field(None, description="Seed for a reproducible grid")


class MoveRequest(BaseModel):
    """Request to move one room."""
    direction: DirectionValue


class AnswerRequest(BaseModel):
    """Request to answer the open puzzle."""
    answer: Optional[str] = Field(
        None, description="Answer text; omit to submit the current draft"
    )


class SelectOptionRequest(BaseModel):
    """Request to pick a quiz option as the answer draft."""
    index: int = Field(..., ge=0)


class ResetRequest(BaseModel):
    """Request to reset the game."""
    random_seed: Optional[int] = Field(None, description="Reseed before generating the new grid")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameResponse(BaseModel):
    """Game snapshot returned by every game endpoint."""
    session_id: str
    game_id: str
    status: SessionStatus
    grid: GridInfo
    player: PlayerInfo
    applied: bool = Field(True, description="False if the action was ignored")
    reason: Optional[str] = Field(None, description="Why the action was ignored")
    changes: list[str] = Field(default_factory=list)
    move_count: int = 0
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
