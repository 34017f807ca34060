"""
Game State - The pile, its parameters, and who won.

Design principles:
- Immutable-friendly: transitions return new state
- Serializable: plain dataclasses and enums
- Single owner: only the session commits new state
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum


class Player(Enum):
    """The two sides of a game."""
    HUMAN = "human"
    AUTOMATED = "automated"

    @property
    def opponent(self) -> Player:
        """The other side."""
        if self is Player.HUMAN:
            return Player.AUTOMATED
        return Player.HUMAN


class DifficultyLevel(Enum):
    """Move-selection policy for the automated opponent."""
    EASY = "easy"
    HARD = "hard"


@dataclass(frozen=True)
class GameConfig:
    """
    Per-session parameters.

    max_per_turn is expected to be <= total_pebbles but is not
    enforced; zero values are rejected by the session.
    """
    difficulty: DifficultyLevel
    total_pebbles: int
    max_per_turn: int


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    remaining only decreases. winner stays None until the pile
    is exhausted (or the human gives up).
    """
    config: GameConfig
    remaining: int
    first_player: Player
    winner: Player | None = None

    @classmethod
    def fresh(cls, config: GameConfig, first_player: Player) -> GameState:
        """A full pile with no winner."""
        return cls(
            config=config,
            remaining=config.total_pebbles,
            first_player=first_player,
        )

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def difficulty(self) -> DifficultyLevel:
        return self.config.difficulty

    @property
    def max_per_turn(self) -> int:
        return self.config.max_per_turn

    def winner_on_exhaustion(self) -> Player | None:
        """
        Winner implied by the current pile.

        The win is always credited to the opposite of the first
        player, whoever emptied the pile.
        """
        if self.remaining == 0:
            return self.first_player.opponent
        return None

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def clone(self) -> GameState:
        """Copy the state (config is frozen and shared)."""
        return replace(self)
