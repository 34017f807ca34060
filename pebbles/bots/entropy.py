"""
Entropy sources for the automated opponent.

Every draw is a 32-bit unsigned integer requested with an opaque
per-command salt. The session never talks to a random module directly,
so tests can replay a fixed sequence instead.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import hashlib
import os
import random
import uuid

from ..engine_core.errors import EntropySourceError

U32_MASK = 0xFFFFFFFF


def new_salt() -> bytes:
    """A fresh opaque salt (one per command, like a message id)."""
    return uuid.uuid4().bytes


class EntropySource(ABC):
    """
    Abstract entropy oracle.

    Implementations override random_u32(). Callers use draw(), which
    normalizes the value and turns any oracle failure into
    EntropySourceError.
    """

    @abstractmethod
    def random_u32(self, salt: bytes) -> int:
        """Return a pseudorandom value in [0, 2**32)."""
        pass

    def draw(self, salt: bytes) -> int:
        try:
            value = self.random_u32(salt)
        except EntropySourceError:
            raise
        except Exception as e:
            raise EntropySourceError(f"random call failed: {e}") from e
        return int(value) & U32_MASK

    def get_name(self) -> str:
        return self.__class__.__name__


class SystemEntropy(EntropySource):
    """
    Salt mixed with OS randomness.

    The digest of salt + os.urandom() is read little-endian,
    first four bytes.
    """

    def random_u32(self, salt: bytes) -> int:
        digest = hashlib.blake2b(salt + os.urandom(16), digest_size=32).digest()
        return int.from_bytes(digest[:4], "little")


class SeededEntropy(EntropySource):
    """
    Process-level PRNG for reproducible games.

    The salt is ignored; the sequence depends on the seed only.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def random_u32(self, salt: bytes) -> int:
        return self.rng.getrandbits(32)


class SequenceEntropy(EntropySource):
    """
    Replays a fixed list of values.

    Raises EntropySourceError once the list is exhausted.
    Records the salts it was called with.
    """

    def __init__(self, values: list[int]):
        self.values = list(values)
        self.salts: list[bytes] = []

    @property
    def remaining(self) -> int:
        return len(self.values)

    def random_u32(self, salt: bytes) -> int:
        self.salts.append(salt)
        if not self.values:
            raise EntropySourceError("entropy sequence exhausted")
        return self.values.pop(0)
