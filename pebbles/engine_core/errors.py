"""
Engine errors.

Every failure aborts the current command and leaves the
previously committed state untouched.
"""

from __future__ import annotations


class PebblesError(Exception):
    """Base class for engine errors."""

    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UninitializedStateError(PebblesError):
    """Raised when an action or query arrives before the game was started."""

    error_code = "UNINITIALIZED_STATE"

    def __init__(self, message: str = "Game state isn't initialized"):
        super().__init__(message)


class EntropySourceError(PebblesError):
    """Raised when the entropy oracle cannot produce a value."""

    error_code = "ENTROPY_SOURCE_FAILURE"


class MalformedInputError(PebblesError):
    """Raised for out-of-range pebble counts."""

    error_code = "MALFORMED_INPUT"

    def __init__(self, message: str, field: str | None = None, value: int | None = None):
        self.field = field
        self.value = value
        super().__init__(message)
