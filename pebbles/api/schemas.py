"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between the host and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- UNINITIALIZED_STATE: Session has no game yet
- MALFORMED_INPUT: Pebble count out of range
- ENTROPY_SOURCE_FAILURE: Randomness unavailable for this command
- VALIDATION_ERROR: Request body failed schema validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class PlayerSide(str, Enum):
    """Players."""
    HUMAN = "human"
    AUTOMATED = "automated"


class Difficulty(str, Enum):
    """Opponent difficulty."""
    EASY = "easy"
    HARD = "hard"


class EventKind(str, Enum):
    """Events emitted in reply to actions."""
    WON = "won"
    COUNTER_TURN = "counter_turn"


class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNINITIALIZED_STATE = "UNINITIALIZED_STATE"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    ENTROPY_SOURCE_FAILURE = "ENTROPY_SOURCE_FAILURE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class GameConfigRequest(BaseModel):
    """Parameters for a new game."""
    difficulty: Difficulty = Field(Difficulty.EASY, description="Opponent difficulty")
    total_pebbles: int = Field(..., ge=1, description="Pile size at game start")
    max_per_turn: int = Field(..., ge=1, description="Most pebbles removable in one turn")


class InitRequest(GameConfigRequest):
    """Request to create a session and start its game."""


class RestartRequest(GameConfigRequest):
    """Request to replace the current game with a fresh one."""


class TurnRequest(BaseModel):
    """The human's move."""
    pebbles: int = Field(..., description="Pebbles to remove, 1..max_per_turn")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class EventInfo(BaseModel):
    """An event emitted by the engine."""
    type: EventKind
    player: Optional[PlayerSide] = Field(None, description="Winner, for won events")
    amount: Optional[int] = Field(None, description="Pebbles removed, for counter_turn events")


class GameStateResponse(BaseModel):
    """Complete game state snapshot."""
    session_id: str
    status: SessionStatus
    difficulty: Difficulty
    total_pebbles: int
    max_per_turn: int
    remaining: int
    first_player: PlayerSide
    winner: Optional[PlayerSide] = None
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    created_at: float = 0.0
    game_state: Optional[GameStateResponse] = None
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """
    Response to turn, give-up and restart.

    event is null for restart and for turns on a finished game.
    """
    session_id: str
    event: Optional[EventInfo] = None
    game_state: GameStateResponse
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing sessions."""
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
