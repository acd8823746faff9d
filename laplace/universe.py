"""
Universe: A seed, its provenance record, and the generator it drives.

A Universe is created in one of two ways:

- Fresh: ``Universe.create()`` harvests entropy, mixes it into a seed and
  records which samples produced it.
- Replay: ``Universe.from_seed(seed)`` skips harvesting entirely. Its record
  is the replay marker, since only the exported integer survives.

Either way, the same seed yields the same stream of values.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from laplace.config import HarvestConfig
from laplace.events import HarvestEventCallback
from laplace.generator import DeterministicGenerator
from laplace.harvest import EntropyHarvester
from laplace.types import REPLAY_MARKER, SampleSet, validate_seed

logger = logging.getLogger(__name__)


class Universe:
    """
    One seed + generator + provenance record.

    The seed is immutable for the lifetime of the universe; the generator
    state advances on every draw. ``export_seed()`` always returns the
    initial seed, so a replay restarts the stream from its first value.

    Example:
        universe = Universe.create()
        universe.random()
        universe.random_int(1, 100)
        universe.random_hex(32)

        # Later, or in another process
        replay = Universe.from_seed(universe.export_seed())
    """

    def __init__(self, seed: int, samples: SampleSet | None = None) -> None:
        """
        Initialize a universe from a seed.

        Prefer ``create()`` or ``from_seed()``.

        Args:
            seed: Unsigned 32-bit seed.
            samples: The samples the seed was mixed from, or None for replay.
        """
        self._seed = validate_seed(seed)
        self._samples = tuple(samples) if samples is not None else None
        self._generator = DeterministicGenerator(self._seed)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        offline: bool = False,
        *,
        config: HarvestConfig | None = None,
        harvester: EntropyHarvester | None = None,
        on_event: HarvestEventCallback | None = None,
    ) -> Universe:
        """
        Harvest entropy and build a fresh universe.

        Blocks until every remote probe has answered or timed out.

        Args:
            offline: If True, use only local OS entropy (no network I/O).
            config: Remote probe settings (ignored when harvester is given).
            harvester: A preconfigured harvester.
            on_event: Harvest event callback (ignored when harvester is given).

        Returns:
            A Universe whose record lists the samples that were mixed.
        """
        if harvester is not None:
            seed, samples = harvester.seed(offline=offline)
        else:
            with EntropyHarvester(config, on_event=on_event) as owned:
                seed, samples = owned.seed(offline=offline)
        return cls(seed, samples)

    @classmethod
    async def acreate(
        cls,
        offline: bool = False,
        *,
        config: HarvestConfig | None = None,
        harvester: EntropyHarvester | None = None,
        on_event: HarvestEventCallback | None = None,
    ) -> Universe:
        """Awaitable ``create()``; the harvest runs in a worker thread."""
        return await asyncio.to_thread(
            cls.create,
            offline,
            config=config,
            harvester=harvester,
            on_event=on_event,
        )

    @classmethod
    def from_seed(cls, seed: int) -> Universe:
        """
        Rebuild a universe from an exported seed. No I/O.

        Raises:
            TypeError: If seed is not an int.
            ValueError: If seed is outside [0, 2**32).
        """
        logger.debug(f"Replaying universe from seed {seed}")
        return cls(seed)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def random(self) -> float:
        """Return a float in [0, 1)."""
        return self._generator.next()

    def random_int(self, min_value: int, max_value: int) -> int:
        """
        Return an integer in [min_value, max_value], both inclusive.

        Raises:
            InvalidRangeError: If max_value < min_value.
        """
        return self._generator.random_int(min_value, max_value)

    def random_hex(self, length: int = 16) -> str:
        """Return *length* lowercase hex characters (e.g. a salt)."""
        return self._generator.random_hex(length)

    # ------------------------------------------------------------------
    # Provenance
    # ------------------------------------------------------------------

    @property
    def is_replay(self) -> bool:
        """True if this universe was rebuilt from a seed."""
        return self._samples is None

    @property
    def samples(self) -> SampleSet | None:
        """The raw samples behind the seed, or None for a replay."""
        return self._samples

    def export_seed(self) -> int:
        """Return the initial seed (not the current generator state)."""
        return self._seed

    def get_entropy_details(self) -> list[str]:
        """
        Return the rendered samples that produced the seed.

        For replayed universes this is ``[REPLAY_MARKER]``.
        """
        if self._samples is None:
            return [REPLAY_MARKER]
        return [sample.render() for sample in self._samples]

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize the seed and its provenance.

        Returns:
            ``{"seed": int, "sources": [...]}``.
        """
        return {
            "seed": self._seed,
            "sources": self.get_entropy_details(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Universe:
        """
        Replay a universe from a ``to_dict()`` record.

        Only the seed is used; the result is a replay universe.
        """
        return cls.from_seed(data["seed"])

    def __repr__(self) -> str:
        origin = "replay" if self.is_replay else f"{len(self._samples)} source(s)"
        return f"Universe(seed={self._seed}, origin={origin})"
