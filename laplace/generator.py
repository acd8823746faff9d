"""
DeterministicGenerator: Mulberry32 stream expanded from a 32-bit seed.

The generator is a fast, well-known 32-bit mixing function. It is NOT a
CSPRNG: its purpose is a bit-reproducible stream, so the same seed yields the
same values on every platform and every process.

All arithmetic is done on Python ints and masked to 32 bits after each
addition and multiplication.
"""

from __future__ import annotations

import logging

from laplace.types import SEED_MASK, validate_seed

logger = logging.getLogger(__name__)

_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0
HEX_ALPHABET = "0123456789abcdef"


class InvalidRangeError(ValueError):
    """Raised when random_int() is called with max < min."""

    pass


class DeterministicGenerator:
    """
    Mulberry32 generator over a single owned 32-bit state.

    Not thread-safe: callers drawing from several threads must serialize
    access or hold one generator per thread.

    Example:
        gen = DeterministicGenerator(42)
        gen.next()           # 0.6011037519201636
        gen.random_int(1, 6)
        gen.random_hex(8)
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = validate_seed(seed)
        logger.debug(f"Generator initialized with state {self._state}")

    @property
    def state(self) -> int:
        """The current 32-bit state (changes on every draw)."""
        return self._state

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self._state = (self._state + _INCREMENT) & SEED_MASK
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & SEED_MASK
        t ^= (t + (((t ^ (t >> 7)) * (t | 61)) & SEED_MASK)) & SEED_MASK
        return (t ^ (t >> 14)) / _TWO_POW_32

    def random_int(self, min_value: int, max_value: int) -> int:
        """
        Return an integer in [min_value, max_value], both inclusive.

        Consumes exactly one draw.

        Raises:
            InvalidRangeError: If max_value < min_value. No draw is consumed.
        """
        if max_value < min_value:
            raise InvalidRangeError(
                f"Invalid range: max ({max_value}) < min ({min_value})"
            )
        return int(self.next() * (max_value - min_value + 1)) + min_value

    def random_hex(self, length: int = 16) -> str:
        """
        Return *length* lowercase hex characters, one draw per character.

        Raises:
            ValueError: If length is negative.
        """
        if length < 0:
            raise ValueError(f"Length must be non-negative, got {length}")
        return "".join(HEX_ALPHABET[int(self.next() * 16)] for _ in range(length))

    def __repr__(self) -> str:
        return f"DeterministicGenerator(state={self._state})"
