"""
Strategy Policy - How the automated opponent picks its move.

A policy looks at the pile and the turn cap and returns how many
pebbles to remove:
- EasyPolicy: uniformly random in [1, max_per_turn]
- HardPolicy: optimal play for the subtraction game with cap k
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..engine_core.state import DifficultyLevel
from .entropy import EntropySource, SystemEntropy, new_salt


@dataclass
class MoveDecision:
    """
    A move chosen by a policy.

    amount is the policy's choice; it is not clamped to the pile.
    """
    amount: int
    explanation: str = ""
    leaves_losing_position: bool = False


class StrategyPolicy(ABC):
    """Abstract base class for opponent policies."""

    difficulty: DifficultyLevel

    @abstractmethod
    def select_move(
        self,
        max_per_turn: int,
        remaining: int,
        salt: bytes | None = None,
    ) -> MoveDecision:
        """
        Decide how many pebbles to remove.

        Args:
            max_per_turn: Turn cap (k)
            remaining: Pebbles left in the pile
            salt: Opaque per-command salt for the entropy oracle

        Returns:
            MoveDecision with the chosen amount
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


class EasyPolicy(StrategyPolicy):
    """
    Random policy - ignores the pile entirely.

    amount = (u32 % max_per_turn) + 1, so it may exceed the pile.
    """

    difficulty = DifficultyLevel.EASY

    def __init__(self, entropy: EntropySource | None = None):
        self.entropy = entropy or SystemEntropy()

    def select_move(
        self,
        max_per_turn: int,
        remaining: int,
        salt: bytes | None = None,
    ) -> MoveDecision:
        if max_per_turn < 1:
            raise ValueError("max_per_turn must be positive")

        value = self.entropy.draw(salt if salt is not None else new_salt())
        amount = (value % max_per_turn) + 1
        return MoveDecision(amount=amount, explanation="Selected randomly")


class HardPolicy(StrategyPolicy):
    """
    Optimal policy for the capped subtraction game.

    Multiples of k + 1 are losing positions for the player to move.
    Removing remaining % (k + 1) hands one to the opponent; from a
    multiple there is no winning move, so take the cap.
    """

    difficulty = DifficultyLevel.HARD

    def select_move(
        self,
        max_per_turn: int,
        remaining: int,
        salt: bytes | None = None,
    ) -> MoveDecision:
        if max_per_turn < 1:
            raise ValueError("max_per_turn must be positive")

        residue = remaining % (max_per_turn + 1)
        if residue > 0:
            return MoveDecision(
                amount=residue,
                explanation=f"Leaves a multiple of {max_per_turn + 1}",
                leaves_losing_position=True,
            )
        return MoveDecision(
            amount=max_per_turn,
            explanation="No winning reduction; taking the cap",
        )


def policy_for(
    difficulty: DifficultyLevel,
    entropy: EntropySource | None = None,
) -> StrategyPolicy:
    """Build the policy for a difficulty level."""
    if difficulty is DifficultyLevel.EASY:
        return EasyPolicy(entropy)
    if difficulty is DifficultyLevel.HARD:
        return HardPolicy()
    raise ValueError(f"Unknown difficulty: {difficulty}")


def choose_move(
    difficulty: DifficultyLevel,
    max_per_turn: int,
    remaining: int,
    entropy: EntropySource | None = None,
    salt: bytes | None = None,
) -> int:
    """
    Convenience function to pick a move.

    Creates the policy for the difficulty and returns its amount.
    """
    policy = policy_for(difficulty, entropy)
    return policy.select_move(max_per_turn, remaining, salt).amount
