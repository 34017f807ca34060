"""
API Module - HTTP interface for hosting games.

The host:
1. Creates a session (Init)
2. Sends turns, give-ups and restarts
3. Reads events and state snapshots

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    InitRequest,
    RestartRequest,
    TurnRequest,
    # Responses
    ActionResponse,
    EventInfo,
    GameStateResponse,
    SessionResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
    EventKind,
    PlayerSide,
    Difficulty,
    SessionStatus,
)
from .service import APIService, SessionNotFoundError
from .app import create_app

__all__ = [
    # Requests
    "InitRequest",
    "RestartRequest",
    "TurnRequest",
    # Responses
    "ActionResponse",
    "EventInfo",
    "GameStateResponse",
    "SessionResponse",
    "ErrorResponse",
    # Enums
    "ErrorCode",
    "EventKind",
    "PlayerSide",
    "Difficulty",
    "SessionStatus",
    # Service
    "APIService",
    "SessionNotFoundError",
    "create_app",
]
