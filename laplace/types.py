"""
Core types for laplace (PUBLIC).

This module defines the data structures shared by the harvester and the
universe:
- SourceKind: Label for each entropy source
- RawSample: One captured sample from a source
- SampleSet: Ordered samples in declared source order
- REPLAY_MARKER: Sentinel record for universes rebuilt from a seed
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SEED_MASK = 0xFFFFFFFF

# Record reported by universes that were rebuilt from an exported seed
REPLAY_MARKER = "REPLAY MODE (Saved Seed)"


class SourceKind(str, Enum):
    """Entropy source labels, in declared mixing order."""

    LOCAL = "LOCAL"
    QUANTUM = "QUANTUM"
    WEATHER = "WEATHER"


# Harvest order. Mixing is order-sensitive, so arrival order never matters.
SOURCE_ORDER: tuple[SourceKind, ...] = (
    SourceKind.LOCAL,
    SourceKind.QUANTUM,
    SourceKind.WEATHER,
)


@dataclass(frozen=True)
class RawSample:
    """
    A single sample captured from an entropy source.

    Attributes:
        label: The source that produced the sample.
        payload: The datum as a display string (hex, decimal, ...).
    """

    label: SourceKind
    payload: str

    def render(self) -> str:
        """Return the label-prefixed form used for mixing and reporting."""
        return f"{self.label.value}:{self.payload}"


SampleSet = tuple[RawSample, ...]


def validate_seed(seed: int) -> int:
    """
    Check that *seed* is an unsigned 32-bit integer.

    Raises:
        TypeError: If seed is not an int (bools are rejected too).
        ValueError: If seed is outside [0, 2**32).
    """
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise TypeError(f"Seed must be an int, got {type(seed).__name__}")
    if seed < 0 or seed > SEED_MASK:
        raise ValueError(f"Seed {seed} out of range [0, {SEED_MASK}]")
    return seed
