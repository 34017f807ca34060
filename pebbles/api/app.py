"""
FastAPI Application - REST API for hosting pebbles games.

Endpoints:
    POST   /api/v1/sessions                 Init: create session, start game
    GET    /api/v1/sessions                 List sessions
    GET    /api/v1/sessions/{id}            Get session status
    DELETE /api/v1/sessions/{id}            End session
    GET    /api/v1/sessions/{id}/state      Query game state
    POST   /api/v1/sessions/{id}/turn       Human turn (+ automated reply)
    POST   /api/v1/sessions/{id}/give-up    Concede
    POST   /api/v1/sessions/{id}/restart    Fresh game in the same session

Turn replies:
    - won: the human's move emptied the pile
    - counter_turn: the automated player moved; if that emptied the pile,
      the winner is visible in game_state only
    - null: the game was already over

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional
import logging
import os
import random

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .service import APIService
from .schemas import (
    # Request models
    InitRequest,
    RestartRequest,
    TurnRequest,
    # Response models
    ActionResponse,
    SessionResponse,
    GameStateResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)
from ..engine_core.errors import PebblesError
from ..session import SessionManager
from ..bots.entropy import SeededEntropy, SystemEntropy

# Environment configuration
PEBBLES_ENV = os.getenv("PEBBLES_ENV", "development")
PEBBLES_LOG_LEVEL = os.getenv("PEBBLES_LOG_LEVEL")
PEBBLES_SEED = os.getenv("PEBBLES_SEED")
PEBBLES_SESSION_TTL = os.getenv("PEBBLES_SESSION_TTL")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

API_VERSION = "1.0.0"

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.UNINITIALIZED_STATE: 409,
    ErrorCode.MALFORMED_INPUT: 422,
    ErrorCode.ENTROPY_SOURCE_FAILURE: 503,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INTERNAL_ERROR: 500,
}

log = logging.getLogger("pebbles.api")


def _parse_log_level(name: Optional[str]) -> Optional[int]:
    """Numeric level for a level name; None if unset or unknown."""
    if not name:
        return None
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        log.warning("ignoring unknown PEBBLES_LOG_LEVEL %r", name)
        return None
    return level


def _parse_int(name: str, value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        log.warning("ignoring non-integer %s %r", name, value)
        return None


def default_service(
    seed: Optional[int] = None,
    max_idle_seconds: Optional[int] = None,
) -> APIService:
    """
    Service wired from the environment.

    With a seed (PEBBLES_SEED) every session gets its own SeededEntropy,
    seeded from one generator, so a restarted server replays the same
    sequence of games.
    """
    if seed is None:
        seed = _parse_int("PEBBLES_SEED", PEBBLES_SEED)
    if max_idle_seconds is None:
        max_idle_seconds = _parse_int("PEBBLES_SESSION_TTL", PEBBLES_SESSION_TTL) or 3600

    if seed is not None:
        seed_rng = random.Random(seed)
        manager = SessionManager(
            entropy_factory=lambda: SeededEntropy(seed_rng.getrandbits(64))
        )
    else:
        manager = SessionManager(entropy_factory=SystemEntropy)
    return APIService(session_manager=manager, max_idle_seconds=max_idle_seconds)


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    # Only an explicit PEBBLES_LOG_LEVEL overrides the level set by the caller
    level = _parse_log_level(PEBBLES_LOG_LEVEL)
    if level is not None:
        logging.getLogger("pebbles").setLevel(level)

    app = FastAPI(
        title="Pebbles Game API",
        description="""
Pebble-removal game against an automated opponent.

## Game Flow

1. `POST /api/v1/sessions` starts a game. If the automated player wins the
   coin flip it has already moved when the response arrives.
2. `POST /turn` removes pebbles; the reply is `won` if you emptied the pile,
   otherwise `counter_turn` with the automated player's move.
3. `POST /give-up` hands the win to the automated player.
4. `POST /restart` starts over without an automated opening move.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `UNINITIALIZED_STATE` | Session has no game |
| `MALFORMED_INPUT` | Pebble count out of range |
| `ENTROPY_SOURCE_FAILURE` | Randomness unavailable |
| `VALIDATION_ERROR` | Request body invalid |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or default_service()
    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=ERROR_STATUS[error_code],
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(PebblesError)
    async def handle_engine_error(request: Request, exc: PebblesError) -> JSONResponse:
        details = None
        if getattr(exc, "field", None) is not None:
            details = {"field": exc.field, "value": exc.value}
        return make_error_response(ErrorCode(exc.error_code), exc.message, details)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            details={"errors": [
                {"loc": list(err.get("loc", [])), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        status_code=201,
        responses={422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Create a session and start a game",
    )
    async def create_session(body: InitRequest) -> SessionResponse:
        """
        Start a new game.

        The coin flip decides who moves first; an automated first move is
        already reflected in `game_state.remaining`.
        """
        return api_service.create_session(body)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> SessionResponse:
        return api_service.get_session(session_id)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a session and drop its state."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> GameStateResponse:
        return api_service.get_game_state(session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/turn",
        response_model=ActionResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Session not found"},
            422: {"model": ErrorResponse, "description": "Pebble count out of range"},
            503: {"model": ErrorResponse, "description": "Randomness unavailable"},
        },
        tags=["Game"],
        summary="Remove pebbles",
    )
    async def take_turn(session_id: str, body: TurnRequest) -> ActionResponse:
        """
        Remove pebbles from the pile.

        **Request Body:**
        ```json
        {"pebbles": 2}
        ```
        """
        return api_service.take_turn(session_id, body)

    @app.post(
        "/api/v1/sessions/{session_id}/give-up",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Concede the game",
    )
    async def give_up(session_id: str) -> ActionResponse:
        return api_service.give_up(session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start over with new parameters",
    )
    async def restart(session_id: str, body: RestartRequest) -> ActionResponse:
        """Replace the game. The response never carries an event."""
        return api_service.restart(session_id, body)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="pebbles-engine",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Pebbles Game API",
            "version": API_VERSION,
            "env": PEBBLES_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn pebbles.api.app:app
app = create_app()
