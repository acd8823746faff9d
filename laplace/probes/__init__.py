"""
Probes module: One bounded-time fetch per entropy source.

Provides:

- LocalProbe: OS randomness, never fails
- QuantumProbe: ANU quantum random number API
- WeatherProbe: Open-Meteo current weather
- ProbeError and subclasses: Failure taxonomy absorbed by the harvester
"""

from laplace.probes.base import (
    ProbeError,
    ProbeMalformedResponse,
    ProbeTimeout,
    ProbeTransportError,
    RemoteProbe,
    SourceProbe,
)
from laplace.probes.local import LocalProbe
from laplace.probes.quantum import QuantumProbe
from laplace.probes.weather import WeatherProbe

__all__ = [
    "LocalProbe",
    "ProbeError",
    "ProbeMalformedResponse",
    "ProbeTimeout",
    "ProbeTransportError",
    "QuantumProbe",
    "RemoteProbe",
    "SourceProbe",
    "WeatherProbe",
]
