"""
Tests for the automated opponent.

Tests:
- Hard policy leaves losing positions
- Easy policy stays within the turn cap
- Entropy sources
"""

import pytest

from ..bots import (
    EasyPolicy,
    HardPolicy,
    SeededEntropy,
    SequenceEntropy,
    SystemEntropy,
    EntropySource,
    choose_move,
    policy_for,
)
from ..engine_core.state import DifficultyLevel
from ..engine_core.errors import EntropySourceError


class TestHardPolicy:
    """Tests for optimal play."""

    @pytest.mark.parametrize("cap", range(1, 9))
    def test_leaves_multiple_or_takes_cap(self, cap):
        """From n % (k+1) != 0 the move leaves a multiple of k+1; else it takes k."""
        policy = HardPolicy()
        for remaining in range(1, 80):
            decision = policy.select_move(cap, remaining)
            if remaining % (cap + 1):
                assert (remaining - decision.amount) % (cap + 1) == 0
                assert 1 <= decision.amount <= cap
                assert decision.leaves_losing_position
            else:
                assert decision.amount == cap
                assert not decision.leaves_losing_position

    def test_known_positions(self):
        assert choose_move(DifficultyLevel.HARD, 3, 10) == 2
        assert choose_move(DifficultyLevel.HARD, 3, 8) == 3
        assert choose_move(DifficultyLevel.HARD, 5, 20) == 2
        assert choose_move(DifficultyLevel.HARD, 1, 1) == 1

    def test_consumes_no_entropy(self):
        """Hard is deterministic; an empty sequence is never touched."""
        entropy = SequenceEntropy([])
        assert choose_move(DifficultyLevel.HARD, 4, 17, entropy=entropy) == 2
        assert entropy.salts == []

    def test_rejects_zero_cap(self):
        with pytest.raises(ValueError):
            HardPolicy().select_move(0, 5)


class TestEasyPolicy:
    """Tests for random play."""

    def test_formula(self):
        """amount == (u32 % cap) + 1."""
        policy = EasyPolicy(SequenceEntropy([0, 7, 2**32 - 1]))

        assert policy.select_move(3, 10).amount == 1
        assert policy.select_move(3, 10).amount == 2
        assert policy.select_move(3, 10).amount == 1

    @pytest.mark.parametrize("cap", [1, 2, 3, 7])
    def test_bounds(self, cap):
        """Every Easy move lies in [1, cap], regardless of the pile."""
        policy = EasyPolicy(SeededEntropy(42))
        amounts = {policy.select_move(cap, 1).amount for _ in range(300)}

        assert min(amounts) >= 1
        assert max(amounts) <= cap

    def test_covers_range(self):
        policy = EasyPolicy(SeededEntropy(7))
        amounts = {policy.select_move(4, 50).amount for _ in range(400)}
        assert amounts == {1, 2, 3, 4}

    def test_passes_salt(self):
        entropy = SequenceEntropy([1])
        EasyPolicy(entropy).select_move(3, 10, salt=b"msg-1")
        assert entropy.salts == [b"msg-1"]

    def test_exhausted_entropy_fails(self):
        with pytest.raises(EntropySourceError):
            EasyPolicy(SequenceEntropy([])).select_move(3, 10)


class TestPolicySelection:
    """Tests for difficulty -> policy."""

    def test_policy_for(self):
        assert isinstance(policy_for(DifficultyLevel.EASY), EasyPolicy)
        assert isinstance(policy_for(DifficultyLevel.HARD), HardPolicy)

    def test_policy_names(self):
        assert HardPolicy().get_name() == "HardPolicy"
        assert policy_for(DifficultyLevel.EASY).difficulty is DifficultyLevel.EASY


class TestEntropySources:
    """Tests for the entropy oracles."""

    def test_system_entropy_range(self):
        source = SystemEntropy()
        for i in range(50):
            value = source.draw(bytes([i]))
            assert 0 <= value < 2**32

    def test_seeded_entropy_reproducible(self):
        """Same seed, same sequence; the salt does not matter."""
        a, b = SeededEntropy(123), SeededEntropy(123)
        assert [a.draw(b"x") for _ in range(10)] == [b.draw(b"y") for _ in range(10)]

    def test_sequence_entropy_replays_and_exhausts(self):
        source = SequenceEntropy([4, 9])
        assert source.draw(b"a") == 4
        assert source.draw(b"b") == 9
        with pytest.raises(EntropySourceError, match="exhausted"):
            source.draw(b"c")
        assert source.salts == [b"a", b"b", b"c"]

    def test_draw_masks_to_32_bits(self):
        assert SequenceEntropy([2**32 + 5]).draw(b"") == 5

    def test_oracle_failure_is_wrapped(self):
        """Any oracle exception surfaces as EntropySourceError."""

        class Unreachable(EntropySource):
            def random_u32(self, salt: bytes) -> int:
                raise ConnectionError("oracle down")

        with pytest.raises(EntropySourceError) as exc_info:
            Unreachable().draw(b"salt")
        assert isinstance(exc_info.value.__cause__, ConnectionError)
