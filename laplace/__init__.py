"""
laplace: A hybrid entropy harvester with a replayable PRNG.

A Universe mixes local OS randomness with optional remote chaos (quantum
noise, weather readings) into a 32-bit seed, then expands that seed with a
deterministic generator. Harvesting is failure-tolerant; generation is
bit-reproducible, so any universe can be replayed from its exported seed.

Example:
    import laplace

    universe = laplace.Universe.create()
    universe.random()             # float in [0, 1)
    universe.random_int(1, 100)   # inclusive bounds
    universe.random_hex(32)       # salt

    seed = universe.export_seed()
    replay = laplace.Universe.from_seed(seed)  # same stream from the start
"""

__version__ = "0.1.0"

# Configuration
from laplace.config import ConfigError, HarvestConfig

# Events
from laplace.events import HarvestEvent, HarvestEventCallback, HarvestEventKind

# Generator
from laplace.generator import DeterministicGenerator, InvalidRangeError

# Harvesting
from laplace.harvest import EntropyHarvester, mix

# Probes (for custom harvesters)
from laplace.probes import (
    LocalProbe,
    ProbeError,
    ProbeMalformedResponse,
    ProbeTimeout,
    ProbeTransportError,
    QuantumProbe,
    SourceProbe,
    WeatherProbe,
)

# Types
from laplace.types import REPLAY_MARKER, RawSample, SampleSet, SourceKind

# Universe
from laplace.universe import Universe

__all__ = [
    # Universe
    "Universe",
    # Generator
    "DeterministicGenerator",
    "InvalidRangeError",
    # Harvesting
    "EntropyHarvester",
    "mix",
    # Probes
    "LocalProbe",
    "QuantumProbe",
    "WeatherProbe",
    "SourceProbe",
    "ProbeError",
    "ProbeTimeout",
    "ProbeTransportError",
    "ProbeMalformedResponse",
    # Types
    "RawSample",
    "SampleSet",
    "SourceKind",
    "REPLAY_MARKER",
    # Events
    "HarvestEvent",
    "HarvestEventKind",
    "HarvestEventCallback",
    # Configuration
    "HarvestConfig",
    "ConfigError",
]
