"""
Session Manager - Owns live games.

LIFECYCLE:
1. Host sends Init -> session created, game started (coin flip,
   automated opening move if the automated player goes first)
2. During game:
   - Turn: human move, automated reply, one event
   - GiveUp: automated player wins
   - Restart: fresh game in the same session, no event
   - Query: snapshot of the state at any time
3. Host ends the session -> state dropped

PERSISTENCE RULES:
- In-memory only, nothing survives the process
- One game per session; the session is the only writer

COMMAND RULES:
- Commands run to completion one at a time
- A failed command leaves the committed state untouched
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import time
import uuid

from ..engine_core.state import GameConfig, GameState
from ..engine_core.action import Action, ActionResult, ActionType, Event
from ..engine_core.errors import PebblesError, UninitializedStateError
from ..engine_core.reducer import Reducer
from ..bots.entropy import EntropySource, SystemEntropy

log = logging.getLogger("pebbles.session")


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # No game started yet
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Winner decided
    ABANDONED = "abandoned"  # Ended before completion


@dataclass
class GameSession:
    """
    A single game and its command history.

    The session exclusively owns game_state; query() hands out copies.

    Usage:
        session = GameSession()
        session.start(GameConfig(DifficultyLevel.HARD, 15, 3))
        event = session.apply_turn(2)
        print(session.query().remaining)
    """
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)
    entropy: EntropySource = field(default_factory=SystemEntropy)

    state: SessionState = SessionState.CREATED
    game_state: GameState | None = None

    # Accepted commands of the current game, oldest first
    action_history: list[Action] = field(default_factory=list)

    def __post_init__(self):
        self.reducer = Reducer(entropy=self.entropy)

    def is_active(self) -> bool:
        """Check if the session can still take turns."""
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    def start(self, config: GameConfig, salt: bytes | None = None) -> GameState:
        """Start (or replace) the game with a coin flip."""
        result = self.reducer.start(config, salt)
        self._commit(result)
        log.info(
            "session %s started: %s, %d pebbles, max %d, %s first, %d left",
            self.session_id,
            config.difficulty.value,
            config.total_pebbles,
            config.max_per_turn,
            result.new_state.first_player.value,
            result.new_state.remaining,
        )
        return self.query()

    def apply(self, action: Action) -> Event | None:
        """
        Apply one command and commit the result.

        Raises UninitializedStateError before start(); any other
        PebblesError leaves the state as it was.
        """
        if self.game_state is None:
            raise UninitializedStateError()

        action.timestamp = action.timestamp or time.time()
        action.action_id = action.action_id or str(uuid.uuid4())

        try:
            result = self.reducer.apply(self.game_state, action)
        except PebblesError as e:
            log.warning(
                "session %s rejected %s: %s",
                self.session_id, action.action_type.value, e.message,
            )
            raise

        if result.ignored:
            log.debug("session %s: game over, %s ignored", self.session_id, action.action_type.value)
            return None

        self._commit(result)
        if action.action_type is ActionType.RESTART:
            self.action_history.clear()
        self.action_history.append(action)
        for change in result.state_changes:
            log.debug("session %s: %s", self.session_id, change)
        return result.event

    def apply_turn(self, pebbles: int) -> Event | None:
        """Remove pebbles for the human; None if the game is already over."""
        return self.apply(Action.turn(pebbles))

    def give_up(self) -> Event:
        event = self.apply(Action.give_up())
        log.info("session %s: human gave up", self.session_id)
        return event

    def restart(self, config: GameConfig) -> None:
        self.apply(Action.restart(config))
        log.info(
            "session %s restarted: %s, %d pebbles, max %d, %s first",
            self.session_id,
            config.difficulty.value,
            config.total_pebbles,
            config.max_per_turn,
            self.game_state.first_player.value,
        )

    def query(self) -> GameState:
        """Snapshot of the current state."""
        if self.game_state is None:
            raise UninitializedStateError()
        return self.game_state.clone()

    def _commit(self, result: ActionResult):
        self.last_activity = time.time()
        was_over = self.game_state is not None and self.game_state.is_over
        self.game_state = result.new_state
        if result.new_state.is_over:
            self.state = SessionState.GAME_OVER
            if not was_over:
                log.info(
                    "session %s over: %s wins",
                    self.session_id, result.new_state.winner.value,
                )
        else:
            self.state = SessionState.ACTIVE


class SessionManager:
    """
    Keyed store of game sessions.

    Responsibilities:
    - Create and start sessions
    - Expire idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, entropy_factory: Callable[[], EntropySource] | None = None):
        self._sessions: dict[str, GameSession] = {}
        self._entropy_factory = entropy_factory or SystemEntropy

    def create_session(self, config: GameConfig) -> GameSession:
        """
        Create a session and start its game.

        Nothing is stored if the config is rejected.
        """
        session = GameSession(entropy=self._entropy_factory())
        session.start(config)
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop its state.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        if session.state != SessionState.GAME_OVER:
            session.state = SessionState.ABANDONED
        session.game_state = None
        session.action_history.clear()
        log.info("session %s ended (%s)", session_id, reason)
        return True

    def list_sessions(self) -> list[str]:
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop sessions with no accepted command for max_age_seconds.

        Returns the number removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_activity > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
