"""WeatherProbe: Open-Meteo current conditions as atmospheric chaos."""

from __future__ import annotations

import math
from typing import Any

from laplace.probes.base import ProbeMalformedResponse, RemoteProbe
from laplace.types import SourceKind


def format_number(value: float) -> str:
    """
    Render a number the way it appears in the sample string.

    Integral values drop the fractional part (``36`` rather than ``36.0``);
    everything else uses the shortest round-tripping repr.
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class WeatherProbe(RemoteProbe):
    """Samples ``temperature + windspeed`` at a fixed coordinate."""

    kind = SourceKind.WEATHER

    @property
    def url(self) -> str:
        return self._config.weather_url

    def params(self) -> dict[str, Any]:
        return {
            "latitude": self._config.latitude,
            "longitude": self._config.longitude,
            "current_weather": "true",
        }

    def parse(self, body: Any) -> str:
        current = body["current_weather"]
        temperature = current["temperature"]
        windspeed = current["windspeed"]
        for name, value in (("temperature", temperature), ("windspeed", windspeed)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ProbeMalformedResponse(
                    self.kind, f"{name} is not numeric: {value!r}"
                )
        chaos = temperature + windspeed
        if not math.isfinite(chaos):
            raise ProbeMalformedResponse(self.kind, f"non-finite reading: {chaos}")
        return format_number(chaos)
