"""
EntropyHarvester: Gather samples from all sources and fold them into a seed.

Harvesting is the only concurrent phase of the library:

1. The local probe runs first, synchronously. It cannot fail, so every
   harvest has at least one sample.
2. Unless offline, the remote probes run concurrently on a thread pool.
   The harvester waits for all of them, up to one shared wall-clock deadline
   (``config.timeout``); a failure in one never cancels another, and
   failures or late answers are logged and dropped rather than raised.
3. Successful samples are kept in ``SOURCE_ORDER``, not arrival order, so
   the seed depends only on which sources succeeded and what they said.
"""

from __future__ import annotations

import hashlib
import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Sequence

import requests

from laplace.config import HarvestConfig
from laplace.events import EventEmitter, HarvestEventCallback
from laplace.probes import (
    LocalProbe,
    ProbeError,
    ProbeTimeout,
    QuantumProbe,
    SourceProbe,
    WeatherProbe,
)
from laplace.types import SOURCE_ORDER, RawSample, SampleSet

logger = logging.getLogger(__name__)

MIX_SEPARATOR = "|"


def mix(samples: Sequence[RawSample]) -> int:
    """
    Mix an ordered sample set into a 32-bit seed.

    The rendered samples are joined with ``|``, hashed with SHA-256, and the
    first 8 hex digits of the digest are read as an unsigned integer.
    Mixing is order-sensitive.

    Args:
        samples: Samples in declared source order.

    Returns:
        A seed in [0, 2**32).

    Raises:
        ValueError: If samples is empty.

    Example:
        >>> mix([RawSample(SourceKind.LOCAL, "0123456789abcdef...")])
        2632217035
    """
    if not samples:
        raise ValueError("Cannot mix an empty sample set")
    combined = MIX_SEPARATOR.join(sample.render() for sample in samples)
    digest = hashlib.sha256(combined.encode("utf-8")).hexdigest()
    return int(digest[:8], 16)


class EntropyHarvester:
    """
    Orchestrates the local probe and the remote probes.

    By default the remote probes are the quantum and weather sources,
    sharing one ``requests.Session`` that the harvester owns and closes in
    ``close()``. Probes can be injected for testing; whatever order they are
    passed in, samples are mixed in ``SOURCE_ORDER``.

    Each remote probe gets a wall-clock deadline of ``config.timeout``
    seconds from submission. A probe still running at the deadline counts as
    timed out; its worker thread is abandoned and its late result discarded.

    Example:
        with EntropyHarvester() as harvester:
            samples = harvester.harvest(offline=False)
        seed = mix(samples)
    """

    def __init__(
        self,
        config: HarvestConfig | None = None,
        *,
        local: SourceProbe | None = None,
        remotes: Sequence[SourceProbe] | None = None,
        session: requests.Session | None = None,
        on_event: HarvestEventCallback | None = None,
    ) -> None:
        """
        Initialize the harvester.

        Args:
            config: Remote probe settings (default: built-in endpoints).
            local: The infallible local probe (default: LocalProbe).
            remotes: Remote probes (default: quantum, weather).
            session: HTTP session shared by the default remote probes. A
                session passed in is never closed by the harvester.
            on_event: Optional callback for harvest events.
        """
        self._config = config or HarvestConfig()
        self._local = local or LocalProbe()
        self._owned_session: requests.Session | None = None
        if remotes is None:
            if session is None:
                session = self._owned_session = requests.Session()
            remotes = [
                QuantumProbe(self._config, session=session),
                WeatherProbe(self._config, session=session),
            ]
        # Stable sort: declared source order, caller order within a kind
        self._remotes = sorted(remotes, key=lambda p: SOURCE_ORDER.index(p.kind))
        self._events = EventEmitter(on_event)

    def __enter__(self) -> EntropyHarvester:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Exit context manager, ensuring close is called."""
        self.close()

    def close(self) -> None:
        """Close the HTTP session, if the harvester created it."""
        if self._owned_session is not None:
            self._owned_session.close()
            self._owned_session = None

    @property
    def config(self) -> HarvestConfig:
        return self._config

    @property
    def probes(self) -> list[SourceProbe]:
        """All probes in mixing order, local first."""
        return [self._local, *self._remotes]

    def harvest(self, offline: bool = False) -> SampleSet:
        """
        Collect samples from every source that answers in time.

        Returns after at most ``config.timeout`` seconds of remote work
        (plus the local probe), however slowly a remote responds.

        Args:
            offline: If True, only the local probe runs (no network I/O).

        Returns:
            The successful samples in ``SOURCE_ORDER``, local first.
        """
        local_sample = self._local.fetch()
        self._events.probe_succeeded(local_sample.label.value, local_sample.render())
        samples: list[RawSample] = [local_sample]

        if offline or not self._remotes:
            logger.debug("Offline harvest: skipping remote probes")
            return tuple(samples)

        pool = ThreadPoolExecutor(
            max_workers=len(self._remotes), thread_name_prefix="laplace-probe"
        )
        try:
            futures: list[tuple[SourceProbe, Future[RawSample]]] = [
                (probe, pool.submit(probe.fetch)) for probe in self._remotes
            ]
            # All probes start together, so one wait bounds each of them
            wait([f for _, f in futures], timeout=self._config.timeout)
            # Settle in declared order; completion order is irrelevant
            for probe, future in futures:
                sample = self._settle(probe, future)
                if sample is not None:
                    samples.append(sample)
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        return tuple(samples)

    def _settle(
        self, probe: SourceProbe, future: Future[RawSample]
    ) -> RawSample | None:
        """Collect one finished probe, absorbing failure or lateness."""
        source = probe.kind.value
        try:
            if not future.done():
                raise ProbeTimeout(
                    probe.kind, f"no answer within {self._config.timeout}s"
                )
            sample = future.result()
        except ProbeError as e:
            logger.warning(f"Entropy source {source} unavailable: {e}")
            self._events.probe_failed(source, str(e))
            return None

        logger.debug(f"Entropy source {source} answered: {sample.render()}")
        self._events.probe_succeeded(source, sample.render())
        return sample

    def seed(self, offline: bool = False) -> tuple[int, SampleSet]:
        """
        Harvest and mix in one step.

        Returns:
            A (seed, samples) tuple.
        """
        samples = self.harvest(offline=offline)
        seed = mix(samples)
        logger.info(f"Harvested seed {seed} from {len(samples)} source(s)")
        self._events.harvest_complete(seed, [s.render() for s in samples])
        return seed, samples
