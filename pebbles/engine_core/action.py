"""
Action System - Commands, events, and results.

Actions are what the host sends:
1. Turn - the human removes some pebbles
2. GiveUp - the human concedes
3. Restart - a fresh game replaces the current one

Events are what the engine answers with (Won / CounterTurn).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .state import GameConfig, GameState, Player


class ActionType(Enum):
    """Types of actions in the system."""
    TURN = "turn"
    GIVE_UP = "give_up"
    RESTART = "restart"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Only the field matching the action type is set.
    """
    pebbles: int | None = None
    config: GameConfig | None = None

    # Opaque per-command salt handed to the entropy oracle
    salt: bytes | None = None


@dataclass
class Action:
    """A complete command to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload
    timestamp: float | None = None
    action_id: str | None = None

    @classmethod
    def turn(cls, pebbles: int) -> Action:
        """Factory for the human's turn."""
        return cls(
            action_type=ActionType.TURN,
            payload=ActionPayload(pebbles=pebbles),
        )

    @classmethod
    def give_up(cls) -> Action:
        """Factory for conceding."""
        return cls(action_type=ActionType.GIVE_UP, payload=ActionPayload())

    @classmethod
    def restart(cls, config: GameConfig) -> Action:
        """Factory for restarting with new parameters."""
        return cls(
            action_type=ActionType.RESTART,
            payload=ActionPayload(config=config),
        )


class EventType(Enum):
    """Outward notifications."""
    WON = "won"
    COUNTER_TURN = "counter_turn"


@dataclass(frozen=True)
class Event:
    """
    Reply to a command.

    WON carries the winner, COUNTER_TURN carries the number of
    pebbles the automated opponent removed.
    """
    event_type: EventType
    player: Player | None = None
    amount: int | None = None

    @classmethod
    def won(cls, player: Player) -> Event:
        return cls(event_type=EventType.WON, player=player)

    @classmethod
    def counter_turn(cls, amount: int) -> Event:
        return cls(event_type=EventType.COUNTER_TURN, amount=amount)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    event is None when the command produces no reply
    (Restart, or a Turn on a finished game).
    """
    new_state: GameState
    event: Event | None = None

    # True when the command had no effect (a Turn on a finished game)
    ignored: bool = False

    # Human-readable changes, for logs and the CLI
    state_changes: list[str] = field(default_factory=list)
