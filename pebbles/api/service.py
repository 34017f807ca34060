"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session commands
2. Manages sessions
3. Formats responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Engine errors propagate as PebblesError subclasses.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    GameConfigRequest,
    InitRequest,
    RestartRequest,
    TurnRequest,
    # Responses
    ActionResponse,
    EventInfo,
    GameStateResponse,
    SessionResponse,
    # Enums
    Difficulty,
    EventKind,
    PlayerSide,
    SessionStatus,
)
from ..engine_core.state import DifficultyLevel, GameConfig, GameState
from ..engine_core.action import Event
from ..engine_core.errors import PebblesError
from ..session import SessionManager, GameSession


class SessionNotFoundError(PebblesError):
    """Raised when a session id is unknown."""

    error_code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


def to_config(request: GameConfigRequest) -> GameConfig:
    return GameConfig(
        difficulty=DifficultyLevel(request.difficulty.value),
        total_pebbles=request.total_pebbles,
        max_per_turn=request.max_per_turn,
    )


def to_event_info(event: Event | None) -> EventInfo | None:
    if event is None:
        return None
    return EventInfo(
        type=EventKind(event.event_type.value),
        player=PlayerSide(event.player.value) if event.player else None,
        amount=event.amount,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session = service.create_session(InitRequest(total_pebbles=15, max_per_turn=3))
        response = service.take_turn(session.session_id, TurnRequest(pebbles=2))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Sessions idle longer than this are dropped on the next Init
    max_idle_seconds: int = 3600

    def create_session(self, request: InitRequest) -> SessionResponse:
        """Create a session and start its game."""
        self.session_manager.cleanup_stale_sessions(self.max_idle_seconds)
        session = self.session_manager.create_session(to_config(request))
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse:
        return self._session_to_response(self._require_session(session_id))

    def get_game_state(self, session_id: str) -> GameStateResponse:
        session = self._require_session(session_id)
        return self._state_to_response(session, session.query())

    def take_turn(self, session_id: str, request: TurnRequest) -> ActionResponse:
        session = self._require_session(session_id)
        event = session.apply_turn(request.pebbles)
        return self._action_response(session, event)

    def give_up(self, session_id: str) -> ActionResponse:
        session = self._require_session(session_id)
        event = session.give_up()
        return self._action_response(session, event)

    def restart(self, session_id: str, request: RestartRequest) -> ActionResponse:
        session = self._require_session(session_id)
        session.restart(to_config(request))
        return self._action_response(session, None)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_sessions()

    def _require_session(self, session_id: str) -> GameSession:
        session = self.session_manager.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def _action_response(self, session: GameSession, event: Event | None) -> ActionResponse:
        return ActionResponse(
            session_id=session.session_id,
            event=to_event_info(event),
            game_state=self._state_to_response(session, session.query()),
        )

    def _session_to_response(self, session: GameSession) -> SessionResponse:
        game_state = None
        if session.game_state is not None:
            game_state = self._state_to_response(session, session.query())
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            created_at=session.created_at,
            game_state=game_state,
        )

    def _state_to_response(self, session: GameSession, state: GameState) -> GameStateResponse:
        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            difficulty=Difficulty(state.config.difficulty.value),
            total_pebbles=state.config.total_pebbles,
            max_per_turn=state.config.max_per_turn,
            remaining=state.remaining,
            first_player=PlayerSide(state.first_player.value),
            winner=PlayerSide(state.winner.value) if state.winner else None,
        )
