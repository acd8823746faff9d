"""
HarvestConfig: Endpoint and timeout settings for the entropy harvester.

This module provides:

- find_config_file: Walk up directories to locate .laplace.toml
- ConfigError: Raised for invalid configuration values
- HarvestConfig: Typed, frozen harvester settings with defaults

The public API only needs the ``offline`` flag; everything here has a default
that matches the built-in remote sources. A project may override the defaults
in the ``[harvest]`` table of ``.laplace.toml``:

    [harvest]
    timeout = 1.5
    latitude = 51.5
    longitude = -0.12

Example:
    >>> config = HarvestConfig.load()
    >>> config.timeout
    3.0
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

CONFIG_FILENAME = ".laplace.toml"

DEFAULT_TIMEOUT = 3.0
DEFAULT_QUANTUM_URL = "https://qrng.anu.edu.au/API/jsonI.php"
DEFAULT_WEATHER_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_LATITUDE = 13.72
DEFAULT_LONGITUDE = 100.52


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""

    pass


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Walk up from *start_dir* to find `.laplace.toml`.

    Args:
        start_dir: Directory to start searching from. Defaults to ``Path.cwd()``.

    Returns:
        Path to the config file, or ``None`` if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


@dataclass(frozen=True)
class HarvestConfig:
    """
    Settings for the remote entropy probes.

    Attributes:
        timeout: Per-probe HTTP timeout in seconds.
        quantum_url: Endpoint of the quantum randomness API.
        weather_url: Endpoint of the weather forecast API.
        latitude: Latitude sent to the weather API.
        longitude: Longitude sent to the weather API.
        user_agent: Optional User-Agent header for remote requests.
    """

    timeout: float = DEFAULT_TIMEOUT
    quantum_url: str = DEFAULT_QUANTUM_URL
    weather_url: str = DEFAULT_WEATHER_URL
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    user_agent: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigError(f"timeout must be a number, got {self.timeout!r}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, start_dir: Path | None = None) -> HarvestConfig:
        """
        Find and load harvester configuration.

        Walks up from *start_dir* (default: cwd) to locate ``.laplace.toml``
        and reads its ``[harvest]`` table. Missing file means defaults.

        Raises:
            ConfigError: If the ``[harvest]`` table holds invalid values.
        """
        config_path = find_config_file(start_dir)
        if config_path is None:
            return cls()

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls.from_dict(data.get("harvest", {}))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HarvestConfig:
        """
        Create a :class:`HarvestConfig` from a parsed ``[harvest]`` table.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown harvest setting(s): {', '.join(unknown)}. "
                f"Valid settings: {', '.join(sorted(known))}"
            )
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the config to a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
