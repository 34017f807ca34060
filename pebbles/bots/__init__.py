"""
Bots module - Automated opponent.

Provides:
- StrategyPolicy: Interface for move selection
- EasyPolicy / HardPolicy: The two difficulty levels
- EntropySource: Injectable randomness for Easy moves and coin flips
"""

from .policy import (
    StrategyPolicy,
    MoveDecision,
    EasyPolicy,
    HardPolicy,
    policy_for,
    choose_move,
)
from .entropy import (
    EntropySource,
    SystemEntropy,
    SeededEntropy,
    SequenceEntropy,
    new_salt,
)

__all__ = [
    "StrategyPolicy",
    "MoveDecision",
    "EasyPolicy",
    "HardPolicy",
    "policy_for",
    "choose_move",
    "EntropySource",
    "SystemEntropy",
    "SeededEntropy",
    "SequenceEntropy",
    "new_salt",
]
