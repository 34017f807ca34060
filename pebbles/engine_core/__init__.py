"""
Engine Core - Game state and its transitions.

The engine is the runtime that:
1. Builds the initial GameState (coin flip, optional opening move)
2. Applies Turn / GiveUp / Restart via the reducer
3. Produces Won / CounterTurn events
"""

from .state import GameState, GameConfig, Player, DifficultyLevel
from .action import Action, ActionType, ActionPayload, ActionResult, Event, EventType
from .errors import (
    PebblesError,
    UninitializedStateError,
    EntropySourceError,
    MalformedInputError,
)
from .reducer import Reducer, apply_action, validate_config

__all__ = [
    "GameState",
    "GameConfig",
    "Player",
    "DifficultyLevel",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Event",
    "EventType",
    "PebblesError",
    "UninitializedStateError",
    "EntropySourceError",
    "MalformedInputError",
    "Reducer",
    "apply_action",
    "validate_config",
]
