"""
Pytest fixtures for Pebbles tests.

Entropy values: an even first draw means the human moves first,
an odd one the automated player.
"""

import pytest

from ..engine_core.state import GameConfig, GameState, DifficultyLevel, Player
from ..engine_core.reducer import Reducer
from ..bots.entropy import SequenceEntropy
from ..session import GameSession

HUMAN_FIRST = 0
AUTOMATED_FIRST = 1


@pytest.fixture
def easy_config() -> GameConfig:
    return GameConfig(difficulty=DifficultyLevel.EASY, total_pebbles=10, max_per_turn=3)


@pytest.fixture
def hard_config() -> GameConfig:
    return GameConfig(difficulty=DifficultyLevel.HARD, total_pebbles=10, max_per_turn=3)


@pytest.fixture
def hard_state(hard_config: GameConfig) -> GameState:
    """Fresh Hard game with the human to move."""
    return GameState.fresh(hard_config, Player.HUMAN)


@pytest.fixture
def reducer_with():
    """Build a reducer that replays the given entropy values."""
    def _make(*values: int) -> Reducer:
        return Reducer(entropy=SequenceEntropy(list(values)))
    return _make


@pytest.fixture
def session_with():
    """Build a session that replays the given entropy values."""
    def _make(*values: int) -> GameSession:
        return GameSession(entropy=SequenceEntropy(list(values)))
    return _make
